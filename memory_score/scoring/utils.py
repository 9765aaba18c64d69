"""Decimal utilities for deterministic score arithmetic.

All Memory Score calculations use Decimal arithmetic so that identical
inputs always round to identical integers, independent of float noise.
"""
import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Iterable, List

HUNDRED: Decimal = Decimal(100)


def is_number(value: object) -> bool:
    """True for finite ints, floats and Decimals (bools are rejected)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, Real):
        return math.isfinite(value)
    return False


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision and ROUND_HALF_UP rounding.

    Args:
        value: Numeric value to convert.
        places: Number of decimal places to quantize to.

    Returns:
        Decimal with the specified precision.
    """
    if isinstance(value, Decimal):
        return value.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places,
        rounding=ROUND_HALF_UP,
    )


def as_decimal(value: float) -> Decimal:
    """Exact Decimal for a finite input value, without quantizing.

    Floats go through ``str`` so 0.3 becomes Decimal('0.3'), not its binary
    expansion. Very small benchmarks and very large bounds keep their
    magnitude, which ``to_decimal`` would round to zero or overflow.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(str(value))


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal(0),
    max_val: Decimal = HUNDRED,
) -> Decimal:
    """Clamp a Decimal value to [min_val, max_val].

    Args:
        value: Value to clamp.
        min_val: Lower bound (default 0).
        max_val: Upper bound (default 100).

    Returns:
        Clamped Decimal.
    """
    return max(min_val, min(max_val, value))


def round_score(value: Decimal) -> int:
    """Round half-up to the nearest integer score (55.5 → 56)."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def mean(values: List[Decimal]) -> Decimal:
    """Arithmetic mean of Decimal values.

    Raises:
        ValueError: If ``values`` is empty.
    """
    if not values:
        raise ValueError("mean() requires at least one value")
    return sum(values, Decimal(0)) / Decimal(len(values))


def geometric_mean(values: Iterable[Decimal], floor: Decimal = Decimal(1)) -> Decimal:
    """Geometric mean with every value floored to ``floor`` first.

    Computed as exp(mean(ln(max(v, floor)))). Logs are summed in sorted
    order so the result does not depend on the iteration order of the input.

    Raises:
        ValueError: If ``values`` is empty.
    """
    logs = sorted(max(v, floor).ln() for v in values)
    if not logs:
        raise ValueError("geometric_mean() requires at least one value")
    return (sum(logs, Decimal(0)) / Decimal(len(logs))).exp()
