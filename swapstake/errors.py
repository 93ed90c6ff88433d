"""Step-tagged workflow errors.

Every on-chain step wraps its failure in one of these, chained to the
underlying cause, so callers can branch on the failing step.
"""

from __future__ import annotations

from enum import Enum


class ApprovalPurpose(str, Enum):
    """Which downstream action an allowance is granted for."""

    SWAP = "swap"
    STAKE = "stake"


class WorkflowError(Exception):
    """Base error for a failed workflow step."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class AmountError(WorkflowError):
    """Requested amount cannot be expressed in the token's smallest unit."""

    def __init__(self, field: str, *, cause: BaseException | None = None) -> None:
        super().__init__(f"Invalid {field}: {cause}", cause=cause)
        self.field = field


class ApprovalError(WorkflowError):
    """Allowance transaction was rejected, reverted or timed out."""

    def __init__(
        self, purpose: ApprovalPurpose, *, token: str, cause: BaseException | None = None
    ) -> None:
        super().__init__(f"Token approval for {purpose.value} failed", cause=cause)
        self.purpose = purpose
        self.token = token


class PoolResolutionError(WorkflowError):
    """No pool is deployed for the requested pair and fee tier."""

    def __init__(
        self,
        token_a: str,
        token_b: str,
        fee: int,
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(f"Pool not found for {token_a}/{token_b} (fee {fee})", cause=cause)
        self.token_a = token_a
        self.token_b = token_b
        self.fee = fee


class SwapError(WorkflowError):
    """Router swap call failed."""

    def __init__(self, message: str = "Swap failed", *, cause: BaseException | None = None):
        super().__init__(message, cause=cause)


class StakeError(WorkflowError):
    """Staking deposit failed (e.g. unknown pool id)."""

    def __init__(self, pool_id: int, *, cause: BaseException | None = None) -> None:
        super().__init__(f"Staking into pool {pool_id} failed", cause=cause)
        self.pool_id = pool_id


__all__ = [
    "ApprovalPurpose",
    "WorkflowError",
    "AmountError",
    "ApprovalError",
    "PoolResolutionError",
    "SwapError",
    "StakeError",
]
