"""Chain access: ABIs, signing and the JSON-RPC client."""

from .abis import (
    ERC20_ABI,
    FACTORY_ABI,
    MASTERCHEF_ABI,
    POOL_ABI,
    SWAP_ROUTER_ABI,
)
from .client import ChainClient, receipt_tx_hash
from .errors import ChainError, TransactionReverted, TransactionTimeout
from .signer import SigningIdentity

__all__ = [
    # ABIs
    "ERC20_ABI",
    "FACTORY_ABI",
    "MASTERCHEF_ABI",
    "POOL_ABI",
    "SWAP_ROUTER_ABI",
    # Client
    "ChainClient",
    "receipt_tx_hash",
    # Errors
    "ChainError",
    "TransactionReverted",
    "TransactionTimeout",
    # Signing
    "SigningIdentity",
]
