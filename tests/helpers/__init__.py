"""Test helpers module for shared test utilities.

- constants: Addresses, keys and the fake pool address
- fakes: FakeChainClient and pool setup
"""

from tests.helpers.constants import (
    FACTORY_ADDRESS,
    LINK,
    MASTERCHEF_ADDRESS,
    POOL,
    SIGNER,
    SWAP_ROUTER_ADDRESS,
    TEST_PRIVATE_KEY,
    USDC,
)
from tests.helpers.fakes import FakeChainClient, install_pool, make_receipt

__all__ = [
    # Constants
    "FACTORY_ADDRESS",
    "SWAP_ROUTER_ADDRESS",
    "MASTERCHEF_ADDRESS",
    "USDC",
    "LINK",
    "POOL",
    "SIGNER",
    "TEST_PRIVATE_KEY",
    # Fakes
    "FakeChainClient",
    "install_pool",
    "make_receipt",
]
