"""Approval and deposit into a MasterChef-style staking contract."""

from __future__ import annotations

import structlog
from web3.types import TxReceipt

from swapstake.allowance import TokenAllowanceManager
from swapstake.chain.abis import MASTERCHEF_ABI
from swapstake.chain.client import ChainClient
from swapstake.config import TokenDescriptor
from swapstake.errors import ApprovalPurpose, StakeError
from swapstake.units import AmountLike

logger = structlog.get_logger()


class StakeManager:
    """Stakes ``stake_token`` into one pool slot of the staking contract.

    Args:
        client: Chain client used for the deposit
        allowances: Allowance manager used for the staking approval
        staking_address: Staking contract (also the approval spender)
        stake_token: Token being deposited
    """

    def __init__(
        self,
        client: ChainClient,
        allowances: TokenAllowanceManager,
        staking_address: str,
        stake_token: TokenDescriptor,
    ) -> None:
        self.client = client
        self.allowances = allowances
        self.staking_address = staking_address
        self.stake_token = stake_token
        self.staking = client.contract(staking_address, MASTERCHEF_ABI)

    def approve_stake(self, amount: AmountLike) -> TxReceipt:
        """Let the staking contract pull ``amount`` of the stake token."""
        return self.allowances.approve(
            self.stake_token,
            amount,
            spender=self.staking_address,
            purpose=ApprovalPurpose.STAKE,
        )

    def stake(self, amount: AmountLike, pool_id: int) -> TxReceipt:
        """Deposit ``amount`` into pool slot ``pool_id``.

        The pool id indexes the staking contract's own pool table; an unknown
        id makes the deposit revert. No retry is attempted.

        Raises:
            StakeError: If the deposit fails, chained to the underlying cause
        """
        try:
            value = self.stake_token.to_smallest_unit(amount)
            fn = self.staking.functions.deposit(pool_id, value)
            return self.client.transact(fn, action="stake")
        except Exception as e:
            logger.error("stake_failed", pool_id=pool_id, error=str(e))
            raise StakeError(pool_id, cause=e) from e


__all__ = ["StakeManager"]
