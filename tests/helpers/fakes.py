"""Fake chain client for component and workflow tests.

Contracts are MagicMocks keyed by address, so a test can configure return
values before the code under test asks for the same contract.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

from swapstake.chain.abis import FACTORY_ABI, POOL_ABI
from swapstake.config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from swapstake.models.types import normalize_address
from tests.helpers.constants import LINK, POOL, SIGNER, USDC


def make_receipt(seed: int, status: int = 1) -> dict[str, Any]:
    """Minimal receipt mapping with a deterministic hash."""
    return {
        "transactionHash": bytes([seed % 256]) * 32,
        "status": status,
        "blockNumber": 1000 + seed,
    }


class FakeChainClient:
    """Stands in for ChainClient.

    Every ``transact`` call is recorded as ``(action, fn)``. Actions listed in
    ``failures`` raise the mapped exception instead of returning a receipt.
    """

    def __init__(
        self,
        address: str = SIGNER,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
    ) -> None:
        self.address = address
        self.config = config
        self.contracts: dict[str, MagicMock] = {}
        self.transactions: list[tuple[str, Any]] = []
        self.failures: dict[str, Exception] = {}

    def contract(self, address: str, abi: list[dict[str, Any]]) -> MagicMock:
        key = normalize_address(address)
        if key not in self.contracts:
            self.contracts[key] = MagicMock(name=f"contract_{key}")
        return self.contracts[key]

    def transact(self, fn: Any, *, action: str) -> dict[str, Any]:
        self.transactions.append((action, fn))
        if action in self.failures:
            raise self.failures[action]
        return make_receipt(len(self.transactions))

    def explorer_tx_url(self, tx_hash: str) -> str:
        return self.config.explorer_tx_url(tx_hash)

    @property
    def actions(self) -> list[str]:
        return [action for action, _ in self.transactions]


def install_pool(
    client: FakeChainClient,
    *,
    factory: str = DEFAULT_WORKFLOW_CONFIG.factory_address,
    pool: str = POOL,
    token0: str = USDC,
    token1: str = LINK,
    fee: int = 3000,
) -> MagicMock:
    """Make the fake factory return ``pool`` and the pool report its metadata."""
    factory_contract = client.contract(factory, FACTORY_ABI)
    factory_contract.functions.getPool.return_value.call.return_value = pool

    pool_contract = client.contract(pool, POOL_ABI)
    pool_contract.functions.token0.return_value.call.return_value = token0
    pool_contract.functions.token1.return_value.call.return_value = token1
    pool_contract.functions.fee.return_value.call.return_value = fee
    return pool_contract


__all__ = ["make_receipt", "FakeChainClient", "install_pool"]
