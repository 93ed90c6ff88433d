"""Data models for the swap-and-stake workflow."""

from swapstake.models.request import WorkflowRequest
from swapstake.models.types import (
    UINT256_MAX,
    ZERO_ADDRESS,
    is_valid_address,
    is_zero_address,
    normalize_address,
)

__all__ = [
    "WorkflowRequest",
    "UINT256_MAX",
    "ZERO_ADDRESS",
    "is_valid_address",
    "is_zero_address",
    "normalize_address",
]
