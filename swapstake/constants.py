"""Network constants for the default (Sepolia) deployment.

Centralizes well-known addresses and protocol parameters.
"""

from swapstake.models.types import is_valid_address

SEPOLIA_CHAIN_ID = 11155111
SEPOLIA_EXPLORER_URL = "https://sepolia.etherscan.io"


def _validate_address(name: str, address: str) -> str:
    """Validate and return a contract or token address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# V3 fee tiers in Uniswap units (hundredths of a basis point)
# Fee = units / 1,000,000 (e.g., 3000 = 0.3%)
V3_FEE_LOWEST = 100  # 0.01% - stable pairs
V3_FEE_LOW = 500  # 0.05% - stable pairs
V3_FEE_MEDIUM = 3000  # 0.30% - most pairs
V3_FEE_HIGH = 10000  # 1.00% - exotic pairs

V3_FEE_TIERS = [V3_FEE_LOWEST, V3_FEE_LOW, V3_FEE_MEDIUM, V3_FEE_HIGH]

# Contract addresses (Sepolia)
# All addresses are validated at import time to catch typos early
FACTORY_ADDRESS = _validate_address("factory", "0x0227628f3F023bb0B980b67D528571c95c6DaC1c")
SWAP_ROUTER_ADDRESS = _validate_address("router", "0x3bFA4769FB09eefC5a80d6E87c3B9C650f7Ae48E")
# Placeholder MasterChef deployment; override with SWAPSTAKE_STAKING_ADDRESS.
MASTERCHEF_ADDRESS = _validate_address("staking", "0x1234567890abcdef1234567890abcdef12345678")

# Token addresses (Sepolia)
USDC = _validate_address("USDC", "0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238")
LINK = _validate_address("LINK", "0x779877A7B0D9E8603169DdbD7836e478b4624789")

# Seconds to wait for a transaction receipt before giving up
DEFAULT_RECEIPT_TIMEOUT = 180.0
DEFAULT_POLL_LATENCY = 2.0

__all__ = [
    "SEPOLIA_CHAIN_ID",
    "SEPOLIA_EXPLORER_URL",
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "FACTORY_ADDRESS",
    "SWAP_ROUTER_ADDRESS",
    "MASTERCHEF_ADDRESS",
    "USDC",
    "LINK",
    "DEFAULT_RECEIPT_TIMEOUT",
    "DEFAULT_POLL_LATENCY",
]
