"""Single-hop exact-input swaps through the router."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from web3 import Web3
from web3.types import TxReceipt

from swapstake.chain.abis import SWAP_ROUTER_ABI
from swapstake.chain.client import ChainClient
from swapstake.config import SwapBounds
from swapstake.errors import SwapError
from swapstake.pools import PoolInfo

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapParameters:
    """Arguments of ``exactInputSingle``.

    ``amount_out_minimum`` of zero means no slippage floor and a
    ``sqrt_price_limit_x96`` of zero means no price limit.
    """

    token_in: str
    token_out: str
    fee: int
    recipient: str
    amount_in: int
    amount_out_minimum: int = 0
    sqrt_price_limit_x96: int = 0

    def as_tuple(self) -> tuple[str, str, int, str, int, int, int]:
        """Router params struct in ABI order."""
        return (
            Web3.to_checksum_address(self.token_in),
            Web3.to_checksum_address(self.token_out),
            self.fee,
            Web3.to_checksum_address(self.recipient),
            self.amount_in,
            self.amount_out_minimum,
            self.sqrt_price_limit_x96,
        )


def build_swap_parameters(
    pool: PoolInfo,
    token_in: str,
    token_out: str,
    recipient: str,
    amount_in: int,
    bounds: SwapBounds | None = None,
) -> SwapParameters:
    """Build swap parameters for a resolved pool.

    Args:
        pool: Resolved pool; its fee tier is used for the swap
        token_in: Token sold
        token_out: Token bought
        recipient: Receiver of the output (the signer)
        amount_in: Input amount in smallest units
        bounds: Minimum output and price limit (defaults to none)

    Returns:
        SwapParameters ready for :meth:`SwapExecutor.execute_swap`
    """
    if amount_in <= 0:
        raise ValueError(f"amount_in must be positive: {amount_in}")
    bounds = bounds or SwapBounds()
    return SwapParameters(
        token_in=token_in,
        token_out=token_out,
        fee=pool.fee,
        recipient=recipient,
        amount_in=amount_in,
        amount_out_minimum=bounds.amount_out_minimum,
        sqrt_price_limit_x96=bounds.sqrt_price_limit_x96,
    )


class SwapExecutor:
    """Submits swaps to the router and waits for them to settle."""

    def __init__(self, client: ChainClient, router_address: str) -> None:
        self.client = client
        self.router = client.contract(router_address, SWAP_ROUTER_ABI)

    def execute_swap(self, params: SwapParameters) -> TxReceipt:
        """Submit ``exactInputSingle`` and wait for the receipt.

        No retry is attempted.

        Raises:
            SwapError: If the call is rejected, reverts or times out
        """
        if params.amount_out_minimum == 0:
            logger.warning("swap_without_minimum_output", token_in=params.token_in)
        try:
            fn = self.router.functions.exactInputSingle(params.as_tuple())
            receipt = self.client.transact(fn, action="swap")
        except Exception as e:
            logger.error("swap_failed", amount_in=params.amount_in, error=str(e))
            raise SwapError(cause=e) from e
        return receipt


__all__ = ["SwapParameters", "build_swap_parameters", "SwapExecutor"]
