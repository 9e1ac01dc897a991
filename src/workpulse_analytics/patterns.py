"""
Work pattern analysis: busiest days, weekday habits, focus sessions and
time-of-day productivity.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from workpulse_analytics.config import AnalyticsSettings, get_settings
from workpulse_analytics.grouping import (
    TIME_OF_DAY_RANGES,
    WEEKDAY_NAMES,
    aggregate_groups,
    by_start_hour,
    by_time_of_day,
    by_weekday,
    group_records,
)
from workpulse_analytics.metrics import (
    completion_rate,
    completion_ratio,
    daily_buckets,
    total_hours,
)
from workpulse_analytics.models import WorkRecord
from workpulse_analytics.numeric import mean, round_half_up, safe_ratio

TIME_EFFICIENCY_COMPLETION_WEIGHT = 0.7
TIME_EFFICIENCY_INTENSITY_WEIGHT = 0.3
# Average entry length that counts as full intensity
FULL_INTENSITY_HOURS = 4.0


def most_productive_days(
    records: Sequence[WorkRecord],
    limit: int | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> list[dict]:
    """Days with the highest hour totals; earlier dates win ties."""
    if limit is None:
        limit = (settings or get_settings()).top_n
    ranked = sorted(daily_buckets(records), key=lambda b: b.hours, reverse=True)
    return [
        {
            "date": bucket.period_start.isoformat(),
            "hours": round_half_up(bucket.hours),
            "entry_count": bucket.entry_count,
        }
        for bucket in ranked[:limit]
    ]


def weekday_patterns(records: Sequence[WorkRecord]) -> dict[str, dict]:
    """Average hours per worked day, entry count and completion rate by weekday.

    Only weekdays with at least one record appear, Monday first.
    """
    patterns = {}
    for weekday, members in group_records(records, by_weekday).items():
        worked_days = len({r.work_date for r in members})
        patterns[WEEKDAY_NAMES[weekday]] = {
            "average_hours": round_half_up(
                safe_ratio(total_hours(members), worked_days)
            ),
            "entry_count": len(members),
            "completion_rate": completion_rate(members),
        }
    return patterns


def focus_time(
    records: Sequence[WorkRecord],
    threshold_hours: float | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> dict:
    """Entries longer than the focus threshold, treated as deep work sessions."""
    if threshold_hours is None:
        threshold_hours = (settings or get_settings()).focus_session_hours
    sessions = [r.hours for r in records if r.hours > threshold_hours]
    focus_hours = math.fsum(sessions)
    return {
        "total_focus_hours": round_half_up(focus_hours),
        "average_focus_session": round_half_up(mean(sessions)),
        "session_count": len(sessions),
        "focus_share": round_half_up(
            safe_ratio(focus_hours, total_hours(records)) * 100
        ),
    }


def time_range_efficiency(records: Sequence[WorkRecord]) -> float:
    """``(completion * 0.7 + min(avg_hours / 4, 1) * 0.3) * 100``, 0 when empty."""
    if not records:
        return 0.0
    intensity = min(mean([r.hours for r in records]) / FULL_INTENSITY_HOURS, 1.0)
    return (
        completion_ratio(records) * TIME_EFFICIENCY_COMPLETION_WEIGHT
        + intensity * TIME_EFFICIENCY_INTENSITY_WEIGHT
    ) * 100


def _time_of_day_summary(_: str, members: list[WorkRecord]) -> dict:
    return {
        "hours": round_half_up(total_hours(members)),
        "entry_count": len(members),
        "efficiency": round_half_up(time_range_efficiency(members)),
    }


def peak_productivity_times(records: Sequence[WorkRecord]) -> dict[str, dict]:
    """Hours and efficiency per morning, afternoon and evening, by start hour.

    Records without a ``start_time`` or starting between 0:00 and 4:59 are left
    out. Every period is reported, empty ones with zeros.
    """
    summaries = aggregate_groups(records, by_time_of_day, _time_of_day_summary)
    return {
        period: summaries.get(
            period, {"hours": 0.0, "entry_count": 0, "efficiency": 0.0}
        )
        for period in TIME_OF_DAY_RANGES
    }


def hourly_patterns(
    records: Sequence[WorkRecord],
    limit: int | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> dict[str, list[dict]]:
    """Start hours ranked by average entry length.

    Ties go to the earlier hour in both rankings. Records without a
    ``start_time`` are skipped.
    """
    if limit is None:
        limit = (settings or get_settings()).top_n
    averages = aggregate_groups(
        records, by_start_hour, lambda _, members: mean([r.hours for r in members])
    )
    most = sorted(averages.items(), key=lambda item: (-item[1], item[0]))
    least = sorted(averages.items(), key=lambda item: (item[1], item[0]))

    def rows(ranked):
        return [
            {"hour": hour, "average_hours": round_half_up(average)}
            for hour, average in ranked[:limit]
        ]

    return {
        "most_productive_hours": rows(most),
        "least_productive_hours": rows(least),
    }


def recommended_work_hours(records: Sequence[WorkRecord]) -> float:
    """Average entry length rounded to one decimal place."""
    return round_half_up(mean([r.hours for r in records]), 1)
