"""Conversion between human-readable token amounts and on-chain integers.

All scaling runs under a high-precision Decimal context so that uint256-sized
values (up to ~10^77) never pick up rounding artifacts.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from swapstake.models.types import UINT256_MAX

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

AmountLike = Decimal | int | float | str


def to_decimal(amount: AmountLike) -> Decimal:
    """Coerce a user-supplied amount to Decimal.

    Floats go through ``str`` first so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        raise ValueError(f"Amount must be numeric, got {amount!r}")
    try:
        return Decimal(str(amount))
    except decimal.InvalidOperation as err:
        raise ValueError(f"Amount is not a decimal number: {amount!r}") from err


def to_smallest_unit(amount: AmountLike, decimals: int) -> int:
    """Scale a human-readable amount by 10^decimals.

    Args:
        amount: Human-readable amount (e.g. ``"1.5"`` USDC)
        decimals: Token decimal precision

    Returns:
        Integer amount in the token's smallest unit

    Raises:
        ValueError: If the amount is negative, not finite, has more fractional
            digits than the token supports, or does not fit in a uint256
    """
    if decimals < 0:
        raise ValueError(f"Decimals must be non-negative: {decimals}")

    value = to_decimal(amount)
    if not value.is_finite():
        raise ValueError(f"Amount must be finite: {amount!r}")
    if value < 0:
        raise ValueError(f"Amount must be non-negative: {amount!r}")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        scaled = value.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"Amount {amount} has more than {decimals} decimal places")
        result = int(scaled)

    if result > UINT256_MAX:
        raise ValueError(f"Amount overflows uint256: {amount}")
    return result


def from_smallest_unit(value: int, decimals: int) -> Decimal:
    """Inverse of :func:`to_smallest_unit`."""
    if decimals < 0:
        raise ValueError(f"Decimals must be non-negative: {decimals}")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return Decimal(value).scaleb(-decimals)


__all__ = [
    "DECIMAL_HIGH_PREC_CONTEXT",
    "AmountLike",
    "to_decimal",
    "to_smallest_unit",
    "from_smallest_unit",
]
