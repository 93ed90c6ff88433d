"""Approve, swap and stake in one sequenced on-chain workflow."""

from swapstake.workflow import SwapStakeWorkflow, WorkflowOutcome, WorkflowState, run_workflow

__version__ = "0.1.0"
__all__ = [
    "SwapStakeWorkflow",
    "WorkflowOutcome",
    "WorkflowState",
    "run_workflow",
    "__version__",
]
