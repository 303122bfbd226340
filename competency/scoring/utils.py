"""
Decimal Utilities
competency/scoring/utils.py

Provides precision-safe decimal math and date spans for scoring calculations.
"""

from datetime import date
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import List, Optional

DAYS_PER_YEAR = Decimal("365")
DAYS_PER_MONTH = Decimal("30")


def truncate_to(value: Decimal, places: int) -> Decimal:
    """Cut to a fixed number of decimal places without rounding up."""
    return value.quantize(Decimal(10) ** -places, rounding=ROUND_DOWN)


def round_to(value: Decimal, places: int) -> Decimal:
    """Round half-up to a fixed number of decimal places."""
    return value.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def weighted_mean(values: List[Decimal], weights: List[Decimal]) -> Decimal:
    """
    Calculate weighted mean.

    Formula: Σ(value_i × weight_i) / Σ(weight_i)
    Returns Decimal("0") if all weights are zero.
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")

    total_weight = sum(weights, Decimal("0"))
    if total_weight == 0:
        return Decimal("0")

    numerator = sum((v * w for v, w in zip(values, weights)), Decimal("0"))
    return (numerator / total_weight).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)


def years_since(start: Optional[date], as_of: date) -> Decimal:
    """
    Elapsed years between start and as_of using 365-day years.

    Returns Decimal("0") when start is missing; negative when start is in
    the future.
    """
    if start is None:
        return Decimal("0")
    return Decimal((as_of - start).days) / DAYS_PER_YEAR


def months_since(start: Optional[date], as_of: date) -> Decimal:
    """Elapsed months between start and as_of using 30-day months."""
    if start is None:
        return Decimal("0")
    return Decimal((as_of - start).days) / DAYS_PER_MONTH
