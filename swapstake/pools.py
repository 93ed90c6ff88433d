"""Pool lookup through the factory contract."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import structlog
from web3 import Web3

from swapstake.chain.abis import FACTORY_ABI, POOL_ABI
from swapstake.chain.client import ChainClient
from swapstake.errors import PoolResolutionError
from swapstake.models.types import is_zero_address

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolInfo:
    """A resolved pool and the metadata read from it.

    token0/token1 follow the pool's own ordering (sorted by address), which
    need not match the order the pair was requested in.
    """

    address: str
    contract: Any
    token0: str
    token1: str
    fee: int


class PoolResolver:
    """Finds the canonical pool for a pair and fee tier."""

    def __init__(self, client: ChainClient, factory_address: str) -> None:
        self.client = client
        self.factory = client.contract(factory_address, FACTORY_ABI)

    def resolve_pool(self, token_a: str, token_b: str, fee: int) -> PoolInfo:
        """Look up the pool for ``(token_a, token_b, fee)`` and read its metadata.

        Raises:
            PoolResolutionError: If the lookup fails or returns no pool
        """
        try:
            pool_address = self.factory.functions.getPool(
                Web3.to_checksum_address(token_a),
                Web3.to_checksum_address(token_b),
                fee,
            ).call()
        except Exception as e:
            logger.error(
                "pool_lookup_failed", token_a=token_a, token_b=token_b, fee=fee, error=str(e)
            )
            raise PoolResolutionError(token_a, token_b, fee, cause=e) from e

        if is_zero_address(pool_address):
            logger.error("pool_not_found", token_a=token_a, token_b=token_b, fee=fee)
            raise PoolResolutionError(token_a, token_b, fee)

        pool = self.client.contract(pool_address, POOL_ABI)
        try:
            # Pure reads with no ordering dependency
            with ThreadPoolExecutor(max_workers=3) as executor:
                token0 = executor.submit(pool.functions.token0().call)
                token1 = executor.submit(pool.functions.token1().call)
                pool_fee = executor.submit(pool.functions.fee().call)
                info = PoolInfo(
                    address=pool_address,
                    contract=pool,
                    token0=token0.result(),
                    token1=token1.result(),
                    fee=int(pool_fee.result()),
                )
        except Exception as e:
            logger.error("pool_metadata_failed", pool=pool_address, error=str(e))
            raise PoolResolutionError(token_a, token_b, fee, cause=e) from e

        logger.info(
            "pool_resolved",
            pool=info.address,
            token0=info.token0,
            token1=info.token1,
            fee=info.fee,
        )
        return info


__all__ = ["PoolInfo", "PoolResolver"]
