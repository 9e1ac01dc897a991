"""
Consistency scoring from the spread of daily hour totals.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from workpulse_analytics.metrics import daily_totals
from workpulse_analytics.models import WorkRecord
from workpulse_analytics.numeric import coefficient_of_variation

logger = logging.getLogger(__name__)

# cv at which the logistic curve crosses 50
CV_MIDPOINT = 0.5


def consistency_score(daily_hours: Sequence[float]) -> float:
    """Map daily hour totals to a 0-100 score, higher for steadier output.

    Uses the coefficient of variation (population standard deviation over
    mean) passed through ``100 / (1 + e^(cv - 0.5))``. A zero mean counts as
    cv = 1. The result depends only on the multiset of values, never on their
    order. Empty input scores 0. Returned unrounded.
    """
    if not daily_hours:
        return 0.0
    cv = coefficient_of_variation(daily_hours, zero_mean_value=1.0)
    score = 100.0 / (1.0 + math.exp(cv - CV_MIDPOINT))
    logger.debug(f"Consistency over {len(daily_hours)} days: cv={cv:.4f}")
    return score


def record_consistency_score(records: Sequence[WorkRecord]) -> float:
    """Consistency score of the records' per-day totals."""
    return consistency_score(daily_totals(records))
