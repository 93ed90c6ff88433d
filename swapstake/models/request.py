"""Pydantic model for the parameters of one workflow run."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class WorkflowRequest(BaseModel):
    """Externally supplied inputs of a swap-then-stake run.

    Amounts are human-readable (e.g. ``1`` USDC, ``0.5`` LINK) and are only
    scaled to smallest units right before a contract call.
    """

    model_config = ConfigDict(frozen=True)

    swap_amount: Decimal = Field(gt=0, description="Input token amount to swap")
    stake_amount: Decimal = Field(gt=0, description="Stake token amount to deposit")
    pool_id: int = Field(ge=0, description="Pool slot id inside the staking contract")
