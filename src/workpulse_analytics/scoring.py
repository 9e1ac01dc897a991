"""
Composite productivity scoring.

Two weighting profiles exist: ``PERSONAL_PROFILE`` scores one user over one
period against an 8-hour day, ``TEAM_PROFILE`` scores a weekly rollup against
a 40-hour, 5-day week at 80% target utilization.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from workpulse_analytics.consistency import record_consistency_score
from workpulse_analytics.grouping import aggregate_groups, by_week, group_records
from workpulse_analytics.metrics import (
    average_per_day,
    completion_rate,
    completion_ratio,
    distinct_work_days,
    total_hours,
)
from workpulse_analytics.models import ScoreResult, WeeklyMetric, WorkRecord
from workpulse_analytics.numeric import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeightProfile:
    """Weights and nominal targets for one scoring context"""

    hours_weight: float
    completion_weight: float
    consistency_weight: float
    nominal_hours_per_day: float = 8.0
    nominal_days_per_week: int = 5
    target_utilization: float = 1.0

    @property
    def target_weekly_hours(self) -> float:
        return (
            self.nominal_hours_per_day
            * self.nominal_days_per_week
            * self.target_utilization
        )


PERSONAL_PROFILE = WeightProfile(
    hours_weight=0.3,
    completion_weight=0.4,
    consistency_weight=0.3,
)

TEAM_PROFILE = WeightProfile(
    hours_weight=0.3,
    completion_weight=0.5,
    consistency_weight=0.2,
    target_utilization=0.8,
)

TEAM_DAILY_HOURS_WEIGHT = 0.6
TEAM_DAILY_COMPLETION_WEIGHT = 0.4


def personal_productivity_score(
    records: Sequence[WorkRecord],
    profile: WeightProfile = PERSONAL_PROFILE,
) -> ScoreResult:
    """Score one user's records over a single period.

    ``(hoursPerDay / 8) * 0.3 * 100 + completionRate * 0.4 + consistency * 0.3``

    The hours term is not clamped, so days longer than the nominal day can
    push the score above 100. Presentation layers clamp for display.
    """
    hours_per_day = average_per_day(records)
    rate = completion_ratio(records) * 100
    consistency = record_consistency_score(records)

    hours_component = (
        hours_per_day / profile.nominal_hours_per_day * profile.hours_weight * 100
    )
    completion_component = rate * profile.completion_weight
    consistency_component = consistency * profile.consistency_weight
    score = hours_component + completion_component + consistency_component

    logger.debug(
        f"Personal score over {len(records)} records: "
        f"hours={hours_component:.2f}, completion={completion_component:.2f}, "
        f"consistency={consistency_component:.2f}"
    )
    return ScoreResult(
        score=round_half_up(score),
        metrics={
            "total_hours": round_half_up(total_hours(records)),
            "average_hours_per_day": round_half_up(hours_per_day),
            "completion_rate": completion_rate(records),
            "consistency_score": round_half_up(consistency),
            "work_days": distinct_work_days(records),
        },
        breakdown={
            "hours": round_half_up(hours_component),
            "completion": round_half_up(completion_component),
            "consistency": round_half_up(consistency_component),
        },
    )


def weekly_productivity_score(
    records: Sequence[WorkRecord],
    profile: WeightProfile = TEAM_PROFILE,
) -> ScoreResult:
    """Score a weekly rollup.

    ``min(hours / 32, 1) * 30 + completion * 50 + (days / 5) * 20``

    The working-days term is not capped.
    """
    components = _weekly_components(records, profile)

    return ScoreResult(
        score=round_half_up(math.fsum(components.values())),
        metrics={
            "total_hours": round_half_up(total_hours(records)),
            "completion_rate": completion_rate(records),
            "unique_working_days": distinct_work_days(records),
        },
        breakdown={name: round_half_up(v) for name, v in components.items()},
    )


def _weekly_components(
    records: Sequence[WorkRecord], profile: WeightProfile
) -> dict[str, float]:
    hours = total_hours(records)
    days = distinct_work_days(records)
    return {
        "hours": min(hours / profile.target_weekly_hours, 1.0)
        * profile.hours_weight
        * 100,
        "completion": completion_ratio(records) * profile.completion_weight * 100,
        "working_days": days
        / profile.nominal_days_per_week
        * profile.consistency_weight
        * 100,
    }


def weekly_scores(
    records: Sequence[WorkRecord],
    profile: WeightProfile = TEAM_PROFILE,
) -> dict[date, float]:
    """Unrounded weekly scores keyed by week start, in chronological order."""
    return aggregate_groups(
        records,
        by_week,
        lambda _, members: math.fsum(_weekly_components(members, profile).values()),
    )


def weekly_score_series(
    records: Sequence[WorkRecord],
    profile: WeightProfile = TEAM_PROFILE,
) -> list[WeeklyMetric]:
    """Weekly rows in chronological order, scores rounded for output."""
    scores = weekly_scores(records, profile)
    return [
        WeeklyMetric(
            week_start=week_start,
            hours=round_half_up(total_hours(week_records)),
            completion_rate=completion_rate(week_records),
            productivity_score=round_half_up(scores[week_start]),
        )
        for week_start, week_records in group_records(records, by_week).items()
    ]


def team_daily_productivity_score(
    records: Sequence[WorkRecord],
    team_size: int,
    profile: WeightProfile = TEAM_PROFILE,
) -> ScoreResult:
    """Team productivity against ``team_size`` members working nominal days.

    ``hours / (team_size * 8 * days) * 0.6 + completion * 0.4``, scaled to
    0-100. The hours term is 0 when there is no team or no working day.
    """
    hours = total_hours(records)
    days = distinct_work_days(records)
    capacity = team_size * profile.nominal_hours_per_day * days
    utilization = hours / capacity if capacity > 0 else 0.0
    ratio = completion_ratio(records)

    score = (
        utilization * TEAM_DAILY_HOURS_WEIGHT + ratio * TEAM_DAILY_COMPLETION_WEIGHT
    ) * 100
    return ScoreResult(
        score=round_half_up(score),
        metrics={
            "total_hours": round_half_up(hours),
            "team_size": team_size,
            "work_days": days,
            "utilization": round_half_up(utilization * 100),
            "completion_rate": completion_rate(records),
        },
    )
