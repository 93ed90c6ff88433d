"""End-to-end approve → swap → approve → stake orchestration.

The workflow is a linear state machine:

    IDLE → APPROVE_SWAP_TOKEN → EXECUTE_SWAP → APPROVE_STAKE_TOKEN → EXECUTE_STAKE → DONE

Amounts are checked against their tokens while still IDLE, so an unscalable
amount fails the run before any transaction. Any step raising a
:class:`~swapstake.errors.WorkflowError` moves the machine to FAILED and
skips the remaining steps. Steps already confirmed on-chain are
not rolled back.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from swapstake.allowance import TokenAllowanceManager
from swapstake.chain.client import ChainClient, receipt_tx_hash
from swapstake.config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from swapstake.errors import AmountError, ApprovalPurpose, SwapError, WorkflowError
from swapstake.models.request import WorkflowRequest
from swapstake.pools import PoolResolver
from swapstake.staking import StakeManager
from swapstake.swap import SwapExecutor, build_swap_parameters
from swapstake.units import AmountLike, to_decimal

logger = structlog.get_logger()


class WorkflowState(str, Enum):
    """States of a workflow run."""

    IDLE = "idle"
    APPROVE_SWAP_TOKEN = "approve_swap_token"
    EXECUTE_SWAP = "execute_swap"
    APPROVE_STAKE_TOKEN = "approve_stake_token"
    EXECUTE_STAKE = "execute_stake"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (WorkflowState.DONE, WorkflowState.FAILED)


# Success transitions; every non-terminal state may also move to FAILED
TRANSITIONS: dict[WorkflowState, WorkflowState] = {
    WorkflowState.IDLE: WorkflowState.APPROVE_SWAP_TOKEN,
    WorkflowState.APPROVE_SWAP_TOKEN: WorkflowState.EXECUTE_SWAP,
    WorkflowState.EXECUTE_SWAP: WorkflowState.APPROVE_STAKE_TOKEN,
    WorkflowState.APPROVE_STAKE_TOKEN: WorkflowState.EXECUTE_STAKE,
    WorkflowState.EXECUTE_STAKE: WorkflowState.DONE,
}


def next_state(state: WorkflowState, *, failed: bool = False) -> WorkflowState:
    """Return the state following ``state``.

    Raises:
        ValueError: If ``state`` is terminal
    """
    if state.is_terminal:
        raise ValueError(f"No transition out of terminal state {state.value}")
    if failed:
        return WorkflowState.FAILED
    return TRANSITIONS[state]


@dataclass(frozen=True)
class WorkflowOutcome:
    """Result of a workflow run.

    Attributes:
        state: DONE or FAILED
        tx_hashes: Hash of each confirmed step, keyed by step
        failed_step: Step that failed (None on success)
        error: Tagged error of the failed step (None on success)
    """

    state: WorkflowState
    tx_hashes: Mapping[WorkflowState, str] = field(default_factory=dict)
    failed_step: WorkflowState | None = None
    error: WorkflowError | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is WorkflowState.DONE

    @classmethod
    def done(cls, tx_hashes: Mapping[WorkflowState, str]) -> WorkflowOutcome:
        return cls(state=WorkflowState.DONE, tx_hashes=dict(tx_hashes))

    @classmethod
    def failed(
        cls,
        step: WorkflowState,
        error: WorkflowError,
        tx_hashes: Mapping[WorkflowState, str],
    ) -> WorkflowOutcome:
        return cls(
            state=WorkflowState.FAILED,
            tx_hashes=dict(tx_hashes),
            failed_step=step,
            error=error,
        )


class SwapStakeWorkflow:
    """Sequences the allowance, pool, swap and stake components.

    Args:
        config: Deployment configuration for this run
        allowances: Approves the swap input token for the router
        pools: Resolves the swap pool
        swaps: Executes the swap
        stakes: Approves and deposits the stake token
        recipient: Receiver of the swap output (the signer)
    """

    def __init__(
        self,
        config: WorkflowConfig,
        allowances: TokenAllowanceManager,
        pools: PoolResolver,
        swaps: SwapExecutor,
        stakes: StakeManager,
        *,
        recipient: str,
    ) -> None:
        self.config = config
        self.allowances = allowances
        self.pools = pools
        self.swaps = swaps
        self.stakes = stakes
        self.recipient = recipient

    @classmethod
    def from_client(
        cls, client: ChainClient, config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG
    ) -> SwapStakeWorkflow:
        """Wire all components to one chain client."""
        allowances = TokenAllowanceManager(client)
        return cls(
            config,
            allowances,
            PoolResolver(client, config.factory_address),
            SwapExecutor(client, config.router_address),
            StakeManager(client, allowances, config.staking_address, config.stake_token),
            recipient=client.address,
        )

    def run(self, request: WorkflowRequest) -> WorkflowOutcome:
        """Drive the state machine from IDLE to DONE or FAILED."""
        steps: dict[WorkflowState, Callable[[WorkflowRequest], Any]] = {
            WorkflowState.APPROVE_SWAP_TOKEN: self._approve_swap_token,
            WorkflowState.EXECUTE_SWAP: self._execute_swap,
            WorkflowState.APPROVE_STAKE_TOKEN: self._approve_stake_token,
            WorkflowState.EXECUTE_STAKE: self._execute_stake,
        }
        tx_hashes: dict[WorkflowState, str] = {}

        logger.info(
            "workflow_started",
            swap_amount=str(request.swap_amount),
            stake_amount=str(request.stake_amount),
            pool_id=request.pool_id,
        )
        state = WorkflowState.IDLE
        try:
            self._check_amounts(request)
        except WorkflowError as e:
            return self._fail(state, e, tx_hashes)

        state = next_state(state)
        while not state.is_terminal:
            logger.info("workflow_step", step=state.value)
            try:
                receipt = steps[state](request)
            except WorkflowError as e:
                return self._fail(state, e, tx_hashes)
            tx_hashes[state] = receipt_tx_hash(receipt)
            state = next_state(state)

        logger.info("workflow_completed", steps=len(tx_hashes))
        return WorkflowOutcome.done(tx_hashes)

    def _fail(
        self, step: WorkflowState, error: WorkflowError, tx_hashes: Mapping[WorkflowState, str]
    ) -> WorkflowOutcome:
        logger.error(
            "workflow_failed",
            step=step.value,
            state=next_state(step, failed=True).value,
            error=str(error),
            cause=str(error.cause) if error.cause is not None else None,
        )
        return WorkflowOutcome.failed(step, error, tx_hashes)

    def _check_amounts(self, request: WorkflowRequest) -> None:
        # Both amounts must scale before the first transaction is sent
        for field_name, token, amount in (
            ("swap_amount", self.config.token_in, request.swap_amount),
            ("stake_amount", self.config.stake_token, request.stake_amount),
        ):
            try:
                token.to_smallest_unit(amount)
            except ValueError as e:
                raise AmountError(field_name, cause=e) from e

    def _approve_swap_token(self, request: WorkflowRequest) -> Any:
        return self.allowances.approve(
            self.config.token_in,
            request.swap_amount,
            spender=self.config.router_address,
            purpose=ApprovalPurpose.SWAP,
        )

    def _execute_swap(self, request: WorkflowRequest) -> Any:
        token_in = self.config.token_in
        token_out = self.config.token_out
        pool = self.pools.resolve_pool(token_in.address, token_out.address, self.config.fee_tier)
        try:
            params = build_swap_parameters(
                pool,
                token_in.address,
                token_out.address,
                self.recipient,
                token_in.to_smallest_unit(request.swap_amount),
                self.config.swap_bounds,
            )
        except ValueError as e:
            raise SwapError(f"Invalid swap parameters: {e}", cause=e) from e
        return self.swaps.execute_swap(params)

    def _approve_stake_token(self, request: WorkflowRequest) -> Any:
        return self.stakes.approve_stake(request.stake_amount)

    def _execute_stake(self, request: WorkflowRequest) -> Any:
        return self.stakes.stake(request.stake_amount, request.pool_id)


def run_workflow(
    client: ChainClient,
    swap_amount: AmountLike,
    stake_amount: AmountLike,
    pool_id: int,
    config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
) -> WorkflowOutcome:
    """Swap ``swap_amount`` of the input token, then stake ``stake_amount``.

    Amounts are human-readable; ``pool_id`` selects the staking pool slot.
    """
    request = WorkflowRequest(
        swap_amount=to_decimal(swap_amount),
        stake_amount=to_decimal(stake_amount),
        pool_id=pool_id,
    )
    return SwapStakeWorkflow.from_client(client, config).run(request)


__all__ = [
    "WorkflowState",
    "TRANSITIONS",
    "next_state",
    "WorkflowOutcome",
    "SwapStakeWorkflow",
    "run_workflow",
]
