"""
Metric primitives over a collection of work records.

All functions are pure; they return unrounded floats unless noted otherwise.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from workpulse_analytics.grouping import (
    aggregate_groups,
    by_day,
    by_week,
    summarize_bucket,
)
from workpulse_analytics.models import PeriodBucket, WorkRecord
from workpulse_analytics.numeric import round_half_up, safe_ratio


def total_hours(records: Sequence[WorkRecord]) -> float:
    """Sum of effective hours; missing durations count as 0."""
    return math.fsum(r.hours for r in records)


def completion_ratio(records: Sequence[WorkRecord]) -> float:
    """Completed entries over all entries, 0 when there are none."""
    return safe_ratio(sum(1 for r in records if r.is_completed), len(records))


def completion_rate(records: Sequence[WorkRecord]) -> float:
    """Completion percentage rounded to 1 decimal, 0 for an empty set."""
    return round_half_up(completion_ratio(records) * 100, 1)


def daily_buckets(records: Sequence[WorkRecord]) -> list[PeriodBucket]:
    """One bucket per calendar day with work, in ascending date order."""
    return list(aggregate_groups(records, by_day, summarize_bucket).values())


def weekly_buckets(records: Sequence[WorkRecord]) -> list[PeriodBucket]:
    """One bucket per Monday-started week with work, in ascending order."""
    return list(aggregate_groups(records, by_week, summarize_bucket).values())


def distinct_work_days(records: Sequence[WorkRecord]) -> int:
    return len({r.work_date for r in records})


def average_per_day(records: Sequence[WorkRecord]) -> float:
    """Total hours over distinct work days, 0 when there are no days."""
    return safe_ratio(total_hours(records), distinct_work_days(records))


def daily_totals(records: Sequence[WorkRecord]) -> list[float]:
    """Hours per day with work, ordered by date."""
    return [bucket.hours for bucket in daily_buckets(records)]
