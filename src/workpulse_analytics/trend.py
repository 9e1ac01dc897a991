"""
Trend detection over ordered period scores.

A least-squares line is fitted against x = 1..n. The slope sign gives the
direction and ``min(|slope| * scale, 100)`` gives the strength, where the
scale comes from ``AnalyticsSettings.trend_strength_scale``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from workpulse_analytics.config import AnalyticsSettings, get_settings
from workpulse_analytics.models import (
    ChangeDirection,
    PeriodChange,
    TrendComparison,
    TrendDirection,
    TrendResult,
    WeeklyMetric,
)
from workpulse_analytics.numeric import mean, round_half_up

logger = logging.getLogger(__name__)

MAX_STRENGTH = 100.0
STABLE_STRENGTH_BELOW = 20.0


def _least_squares(points: Sequence[tuple[float, float]]) -> tuple[float, float] | None:
    """Return (slope, intercept) or None when the fit is undefined."""
    n = len(points)
    if n < 2:
        return None
    sum_x = math.fsum(x for x, _ in points)
    sum_y = math.fsum(y for _, y in points)
    sum_xy = math.fsum(x * y for x, y in points)
    sum_xx = math.fsum(x * x for x, _ in points)
    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return None
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def linear_slope(values: Sequence[float]) -> float:
    """OLS slope of ``values`` against 1..n; 0 when fewer than two points."""
    fit = _least_squares([(float(i), float(v)) for i, v in enumerate(values, 1)])
    if fit is None:
        return 0.0
    return fit[0]


def trend_summary(direction: TrendDirection, strength: float) -> str:
    if strength < STABLE_STRENGTH_BELOW or direction == TrendDirection.STABLE:
        return "Productivity remains relatively stable"
    if strength < 30:
        intensifier = "slightly"
    elif strength < 60:
        intensifier = "moderately"
    else:
        intensifier = "significantly"
    return f"Productivity is {intensifier} {direction.value}"


def percent_change(current: float, previous: float) -> PeriodChange:
    """Change from ``previous`` to ``current`` as an absolute percentage."""
    if previous == 0:
        return PeriodChange()
    change = (current - previous) / previous * 100
    if change > 0:
        direction = ChangeDirection.UP
    elif change < 0:
        direction = ChangeDirection.DOWN
    else:
        direction = ChangeDirection.STABLE
    return PeriodChange(direction=direction, percentage=round_half_up(abs(change)))


def compare_halves(values: Sequence[float]) -> TrendComparison:
    """Average of the first half against the second half.

    With an odd length the first half takes the middle value. Fewer than two
    values compare the overall mean against itself.
    """
    if len(values) < 2:
        previous = current = mean(values)
    else:
        split = math.ceil(len(values) / 2)
        previous = mean(values[:split])
        current = mean(values[split:])
    return TrendComparison(
        previous_period=round_half_up(previous),
        current_period=round_half_up(current),
        change=percent_change(current, previous),
    )


def analyze_trend(
    values: Sequence[float],
    *,
    settings: AnalyticsSettings | None = None,
) -> TrendResult:
    """Classify an ordered series of period scores."""
    settings = settings or get_settings()
    slope = linear_slope(values)

    # A constant series has no trend even when float error leaves a tiny slope
    if len(values) < 2 or slope == 0 or max(values) == min(values):
        direction = TrendDirection.STABLE
        strength = 0.0
    else:
        direction = TrendDirection.IMPROVING if slope > 0 else TrendDirection.DECLINING
        strength = min(abs(slope) * settings.trend_strength_scale, MAX_STRENGTH)

    logger.debug(
        f"Trend over {len(values)} periods: slope={slope:.4f}, "
        f"direction={direction.value}, strength={strength:.2f}"
    )
    return TrendResult(
        direction=direction,
        strength=round_half_up(strength),
        summary=trend_summary(direction, strength),
        comparison=compare_halves(values),
    )


def build_trend_result(
    weekly_metrics: Sequence[WeeklyMetric],
    scores: Sequence[float] | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> TrendResult:
    """Trend over per-week productivity scores, keeping the weekly rows.

    ``scores`` are the unrounded weekly scores to fit, one per row. Without
    them the rows' rounded ``productivity_score`` values are used.
    """
    if scores is None:
        scores = [m.productivity_score for m in weekly_metrics]
    elif len(scores) != len(weekly_metrics):
        raise ValueError("scores must align with weekly_metrics")
    trend = analyze_trend(scores, settings=settings)
    return trend.model_copy(update={"weekly_metrics": list(weekly_metrics)})


def forecast_series(
    values: Sequence[float],
    horizon: int | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> list[float]:
    """Extrapolate the next ``horizon`` points of a series.

    Only positive values take part in the fit, each at its original position.
    With fewer than two of them the forecast repeats their mean (0 if none).
    Predictions are clamped at 0.
    """
    if horizon is None:
        horizon = (settings or get_settings()).forecast_horizon_days
    points = [(float(i), float(v)) for i, v in enumerate(values, 1) if v > 0]
    fit = _least_squares(points)
    if fit is None:
        flat = round_half_up(mean([y for _, y in points]))
        return [flat] * horizon

    slope, intercept = fit
    start = len(values) + 1
    return [
        round_half_up(max(0.0, slope * x + intercept))
        for x in range(start, start + horizon)
    ]
