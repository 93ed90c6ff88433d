"""Read-only integration tests against a live Sepolia RPC.

These tests require an RPC connection and are skipped by default.
Run with: RPC_URL=https://ethereum-sepolia-rpc.publicnode.com pytest -m requires_rpc

No transactions are sent; a throwaway key is used only to build the client.
"""

import os

import pytest
from pydantic import SecretStr

from swapstake.chain import ChainClient, SigningIdentity
from swapstake.config import DEFAULT_WORKFLOW_CONFIG
from swapstake.constants import LINK, USDC, V3_FEE_MEDIUM
from swapstake.pools import PoolResolver
from tests.helpers import TEST_PRIVATE_KEY

# Skip all tests in this module if RPC_URL is not set
pytestmark = [
    pytest.mark.requires_rpc,
    pytest.mark.skipif(
        not os.environ.get("RPC_URL"),
        reason="RPC_URL environment variable not set",
    ),
]


@pytest.fixture
def client() -> ChainClient:
    rpc_url = os.environ.get("RPC_URL")
    if not rpc_url:
        pytest.skip("RPC_URL not set")
    signer = SigningIdentity(SecretStr(TEST_PRIVATE_KEY))
    return ChainClient.connect(rpc_url, signer, DEFAULT_WORKFLOW_CONFIG)


class TestSepoliaPoolResolution:
    def test_usdc_link_pool_exists(self, client):
        resolver = PoolResolver(client, DEFAULT_WORKFLOW_CONFIG.factory_address)

        info = resolver.resolve_pool(USDC, LINK, V3_FEE_MEDIUM)

        assert info.fee == V3_FEE_MEDIUM
        assert {info.token0.lower(), info.token1.lower()} == {USDC.lower(), LINK.lower()}
