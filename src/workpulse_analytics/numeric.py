"""Numeric helpers shared by every scorer.

Rounding happens only at the output boundary, always half-up.
"""

from __future__ import annotations

import math
import statistics
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from zero to ``places`` decimals."""
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return statistics.fmean(values)


def population_variance(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(statistics.pvariance(values))


def coefficient_of_variation(
    values: Sequence[float], *, zero_mean_value: float = 0.0
) -> float:
    """Standard deviation over mean.

    ``zero_mean_value`` is returned when the mean is zero so callers pick their
    own neutral value instead of dividing by zero.
    """
    if not values:
        return zero_mean_value
    mu = mean(values)
    if mu == 0:
        return zero_mean_value
    return math.sqrt(population_variance(values)) / mu


def safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator
