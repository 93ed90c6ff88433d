"""Tests for PoolResolver."""

import pytest
from web3 import Web3

from swapstake.errors import PoolResolutionError
from swapstake.models.types import ZERO_ADDRESS
from swapstake.pools import PoolResolver
from tests.helpers import FACTORY_ADDRESS, LINK, POOL, USDC, install_pool


class TestResolvePool:
    def test_resolves_pool_and_reads_metadata(self, fake_client):
        pool_contract = install_pool(fake_client, token0=LINK, token1=USDC, fee=3000)
        resolver = PoolResolver(fake_client, FACTORY_ADDRESS)

        info = resolver.resolve_pool(USDC, LINK, 3000)

        factory = fake_client.contract(FACTORY_ADDRESS, [])
        factory.functions.getPool.assert_called_once_with(
            Web3.to_checksum_address(USDC), Web3.to_checksum_address(LINK), 3000
        )
        assert info.address == POOL
        assert info.contract is pool_contract
        assert info.fee == 3000

    def test_token_order_comes_from_pool(self, fake_client):
        """token0/token1 follow the pool, not the requested order."""
        install_pool(fake_client, token0=LINK, token1=USDC)
        info = PoolResolver(fake_client, FACTORY_ADDRESS).resolve_pool(USDC, LINK, 3000)

        assert info.token0 == LINK
        assert info.token1 == USDC

    @pytest.mark.parametrize("missing", [ZERO_ADDRESS, None, ""])
    def test_missing_pool(self, fake_client, missing):
        install_pool(fake_client, pool=POOL)
        factory = fake_client.contract(FACTORY_ADDRESS, [])
        factory.functions.getPool.return_value.call.return_value = missing

        with pytest.raises(PoolResolutionError, match="Pool not found") as exc_info:
            PoolResolver(fake_client, FACTORY_ADDRESS).resolve_pool(USDC, LINK, 500)

        assert exc_info.value.fee == 500
        assert exc_info.value.token_a == USDC
        assert exc_info.value.token_b == LINK

    def test_lookup_error_is_wrapped(self, fake_client):
        factory = fake_client.contract(FACTORY_ADDRESS, [])
        failure = ConnectionError("node down")
        factory.functions.getPool.return_value.call.side_effect = failure

        with pytest.raises(PoolResolutionError) as exc_info:
            PoolResolver(fake_client, FACTORY_ADDRESS).resolve_pool(USDC, LINK, 3000)

        assert exc_info.value.cause is failure

    def test_metadata_read_error_is_wrapped(self, fake_client):
        pool_contract = install_pool(fake_client)
        pool_contract.functions.fee.return_value.call.side_effect = RuntimeError("bad abi")

        with pytest.raises(PoolResolutionError) as exc_info:
            PoolResolver(fake_client, FACTORY_ADDRESS).resolve_pool(USDC, LINK, 3000)

        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_each_metadata_read_happens_once(self, fake_client):
        pool_contract = install_pool(fake_client)

        PoolResolver(fake_client, FACTORY_ADDRESS).resolve_pool(USDC, LINK, 3000)

        for name in ("token0", "token1", "fee"):
            getattr(pool_contract.functions, name).return_value.call.assert_called_once_with()

    def test_resolution_sends_no_transactions(self, fake_client):
        install_pool(fake_client)
        PoolResolver(fake_client, FACTORY_ADDRESS).resolve_pool(USDC, LINK, 3000)
        assert fake_client.transactions == []
