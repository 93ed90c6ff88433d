"""ERC-20 allowance approvals."""

from __future__ import annotations

import structlog
from web3 import Web3
from web3.types import TxReceipt

from swapstake.chain.abis import ERC20_ABI
from swapstake.chain.client import ChainClient
from swapstake.config import TokenDescriptor
from swapstake.errors import ApprovalError, ApprovalPurpose
from swapstake.units import AmountLike

logger = structlog.get_logger()


class TokenAllowanceManager:
    """Grants spenders an allowance and waits for it to be mined."""

    def __init__(self, client: ChainClient) -> None:
        self.client = client

    def approve(
        self,
        token: TokenDescriptor,
        amount: AmountLike,
        *,
        spender: str,
        purpose: ApprovalPurpose,
    ) -> TxReceipt:
        """Approve ``spender`` to move up to ``amount`` of ``token``.

        Args:
            token: Token being approved
            amount: Human-readable allowance, scaled by the token's decimals
            spender: Router (swaps) or staking contract (stakes)
            purpose: Downstream action, used to tag failures

        Returns:
            The mined approval receipt

        Raises:
            ApprovalError: On any failure, chained to the underlying cause
        """
        try:
            value = token.to_smallest_unit(amount)
            contract = self.client.contract(token.address, ERC20_ABI)
            fn = contract.functions.approve(Web3.to_checksum_address(spender), value)
            return self.client.transact(fn, action=f"approve_{purpose.value}")
        except Exception as e:
            logger.error(
                "approval_failed",
                purpose=purpose.value,
                token=token.symbol,
                spender=spender,
                error=str(e),
            )
            raise ApprovalError(purpose, token=token.address, cause=e) from e


__all__ = ["TokenAllowanceManager"]
