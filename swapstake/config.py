"""Configuration for a swap-and-stake run.

Contract addresses and token descriptors are held in frozen dataclasses that
are passed into the workflow, so one process can target several networks or
deployments. Settings come from environment variables (optionally loaded from
a ``.env`` file by the CLI) on top of the Sepolia defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal

from pydantic import SecretStr

from swapstake.constants import (
    DEFAULT_POLL_LATENCY,
    DEFAULT_RECEIPT_TIMEOUT,
    FACTORY_ADDRESS,
    LINK,
    MASTERCHEF_ADDRESS,
    SEPOLIA_CHAIN_ID,
    SEPOLIA_EXPLORER_URL,
    SWAP_ROUTER_ADDRESS,
    USDC,
    V3_FEE_MEDIUM,
    V3_FEE_TIERS,
)
from swapstake.models.types import UINT256_MAX, is_valid_address
from swapstake.units import AmountLike, from_smallest_unit, to_smallest_unit

ENV_PREFIX = "SWAPSTAKE_"


@dataclass(frozen=True)
class TokenDescriptor:
    """A statically configured fungible token."""

    chain_id: int
    address: str
    decimals: int
    symbol: str
    name: str

    def to_smallest_unit(self, amount: AmountLike) -> int:
        """Scale a human-readable amount of this token."""
        return to_smallest_unit(amount, self.decimals)

    def from_smallest_unit(self, value: int) -> Decimal:
        return from_smallest_unit(value, self.decimals)


SEPOLIA_USDC = TokenDescriptor(
    chain_id=SEPOLIA_CHAIN_ID,
    address=USDC,
    decimals=6,
    symbol="USDC",
    name="USD//C",
)

SEPOLIA_LINK = TokenDescriptor(
    chain_id=SEPOLIA_CHAIN_ID,
    address=LINK,
    decimals=18,
    symbol="LINK",
    name="Chainlink",
)


@dataclass(frozen=True)
class SwapBounds:
    """Slippage and price bounds for the exact-input swap.

    Both default to zero: no minimum output and an unconstrained price limit.
    That exposes the swap to unbounded slippage, so production callers should
    supply real bounds.

    Attributes:
        amount_out_minimum: Minimum output in the output token's smallest unit
        sqrt_price_limit_x96: Pool price limit (0 = no limit)
    """

    amount_out_minimum: int = 0
    sqrt_price_limit_x96: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.amount_out_minimum <= UINT256_MAX:
            raise ValueError(f"amount_out_minimum out of range: {self.amount_out_minimum}")
        if not 0 <= self.sqrt_price_limit_x96 < 2**160:
            raise ValueError(f"sqrt_price_limit_x96 out of range: {self.sqrt_price_limit_x96}")


@dataclass(frozen=True)
class WorkflowConfig:
    """Everything the workflow needs to know about the target deployment.

    Attributes:
        chain_id: Expected chain id of the RPC node
        factory_address: Pool factory (``getPool``)
        router_address: Swap router, spender of the input token
        staking_address: Staking contract, spender of the stake token
        token_in: Token sold in the swap
        token_out: Token bought in the swap
        stake_token: Token deposited into the staking contract
        fee_tier: Pool fee tier used for the pool lookup
        explorer_url: Block explorer base URL for transaction links
        receipt_timeout: Seconds to wait for each transaction receipt
        poll_latency: Seconds between receipt polls
        swap_bounds: Minimum output and price limit for the swap
    """

    chain_id: int = SEPOLIA_CHAIN_ID
    factory_address: str = FACTORY_ADDRESS
    router_address: str = SWAP_ROUTER_ADDRESS
    staking_address: str = MASTERCHEF_ADDRESS
    token_in: TokenDescriptor = SEPOLIA_USDC
    token_out: TokenDescriptor = SEPOLIA_LINK
    stake_token: TokenDescriptor = SEPOLIA_LINK
    fee_tier: int = V3_FEE_MEDIUM
    explorer_url: str = SEPOLIA_EXPLORER_URL
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    poll_latency: float = DEFAULT_POLL_LATENCY
    swap_bounds: SwapBounds = field(default_factory=SwapBounds)

    def __post_init__(self) -> None:
        for name in ("factory_address", "router_address", "staking_address"):
            address = getattr(self, name)
            if not is_valid_address(address):
                raise ValueError(f"Invalid {name}: {address} (must be 0x + 40 hex chars)")
        if self.fee_tier not in V3_FEE_TIERS:
            raise ValueError(
                f"Unsupported fee tier {self.fee_tier}, expected one of {V3_FEE_TIERS}"
            )
        if self.receipt_timeout <= 0:
            raise ValueError(f"receipt_timeout must be positive: {self.receipt_timeout}")

    def explorer_tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"


# Default configuration instance
DEFAULT_WORKFLOW_CONFIG = WorkflowConfig()


@dataclass(frozen=True)
class RuntimeSettings:
    """Secrets and endpoints that must come from the environment.

    The private key is kept as a ``SecretStr`` so it never shows up in
    ``repr`` output or log lines.
    """

    rpc_url: str
    private_key: SecretStr

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RuntimeSettings:
        """Read ``RPC_URL`` and ``PRIVATE_KEY``.

        Raises:
            ValueError: If either variable is missing or empty
        """
        env = os.environ if environ is None else environ
        rpc_url = env.get("RPC_URL", "").strip()
        if not rpc_url:
            raise ValueError("RPC_URL missing")
        private_key = env.get("PRIVATE_KEY", "").strip()
        if not private_key:
            raise ValueError("PRIVATE_KEY missing")
        return cls(rpc_url=rpc_url, private_key=SecretStr(private_key))


def _env_int(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip(), 0)
    except ValueError as err:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer: {raw!r}") from err


def _env_float(env: Mapping[str, str], name: str) -> float | None:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as err:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number: {raw!r}") from err


def load_workflow_config(
    environ: Mapping[str, str] | None = None,
    base: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
) -> WorkflowConfig:
    """Apply ``SWAPSTAKE_*`` environment overrides on top of ``base``.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)
        base: Configuration to start from

    Returns:
        A new WorkflowConfig; ``base`` is left untouched

    Raises:
        ValueError: If an override is malformed or produces an invalid config
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, object] = {}

    for name, attr in (
        ("FACTORY_ADDRESS", "factory_address"),
        ("ROUTER_ADDRESS", "router_address"),
        ("STAKING_ADDRESS", "staking_address"),
        ("EXPLORER_URL", "explorer_url"),
    ):
        value = env.get(ENV_PREFIX + name, "").strip()
        if value:
            overrides[attr] = value

    chain_id = _env_int(env, "CHAIN_ID")
    if chain_id is not None:
        overrides["chain_id"] = chain_id
    fee_tier = _env_int(env, "FEE_TIER")
    if fee_tier is not None:
        overrides["fee_tier"] = fee_tier
    receipt_timeout = _env_float(env, "RECEIPT_TIMEOUT")
    if receipt_timeout is not None:
        overrides["receipt_timeout"] = receipt_timeout

    min_out = _env_int(env, "MIN_AMOUNT_OUT")
    price_limit = _env_int(env, "SQRT_PRICE_LIMIT_X96")
    if min_out is not None or price_limit is not None:
        overrides["swap_bounds"] = SwapBounds(
            amount_out_minimum=base.swap_bounds.amount_out_minimum if min_out is None else min_out,
            sqrt_price_limit_x96=(
                base.swap_bounds.sqrt_price_limit_x96 if price_limit is None else price_limit
            ),
        )

    return replace(base, **overrides) if overrides else base


__all__ = [
    "ENV_PREFIX",
    "TokenDescriptor",
    "SEPOLIA_USDC",
    "SEPOLIA_LINK",
    "SwapBounds",
    "WorkflowConfig",
    "DEFAULT_WORKFLOW_CONFIG",
    "RuntimeSettings",
    "load_workflow_config",
]
