"""Shared numeric helpers for all scorers."""

import math
from decimal import Decimal, ROUND_HALF_UP


def round2(value: float) -> float:
    """Round to 2 decimals, ties away from zero on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def round_half_up(value: float) -> int:
    """Nearest integer, .5 rounds up."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def gaussian_score(value: float, ideal: float, sigma: float) -> float:
    """100 at ideal, decaying as exp(-(value-ideal)^2 / (2*sigma^2)). Clamped to [0, 100]."""
    if sigma <= 0:
        return 100.0 if value == ideal else 0.0
    diff = value - ideal
    return clamp(math.exp(-(diff * diff) / (2 * sigma * sigma)) * 100)


def percentage(count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return count / total * 100


def mean(values) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)
