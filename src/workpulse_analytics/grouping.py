"""
Grouped aggregation over work records.

Every per-day, per-week, per-user, per-department and per-project view in the
package is built from ``group_records`` plus a reducer, so the grouping logic
exists in one place.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Hashable, Iterable
from datetime import date, timedelta
from typing import TypeVar

from workpulse_analytics.models import PeriodBucket, WorkRecord

K = TypeVar("K", bound=Hashable)
R = TypeVar("R")

UNASSIGNED = "unassigned"
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
# Inclusive start-hour ranges; hours 0-4 belong to no period
TIME_OF_DAY_RANGES = {
    "morning": (5, 11),
    "afternoon": (12, 16),
    "evening": (17, 23),
}


def group_records(
    records: Iterable[WorkRecord],
    key: Callable[[WorkRecord], K | None],
    *,
    sort_keys: bool = True,
) -> dict[K, list[WorkRecord]]:
    """Partition records by ``key``.

    Records whose key is ``None`` are dropped. Keys come back sorted unless
    ``sort_keys`` is false, in which case first-seen order is kept.
    """
    groups: dict[K, list[WorkRecord]] = {}
    for record in records:
        k = key(record)
        if k is None:
            continue
        groups.setdefault(k, []).append(record)
    if sort_keys:
        return {k: groups[k] for k in sorted(groups)}
    return groups


def aggregate_groups(
    records: Iterable[WorkRecord],
    key: Callable[[WorkRecord], K | None],
    reducer: Callable[[K, list[WorkRecord]], R],
    *,
    sort_keys: bool = True,
) -> dict[K, R]:
    """Group records by ``key`` and reduce each group with ``reducer(key, records)``."""
    return {
        k: reducer(k, members)
        for k, members in group_records(records, key, sort_keys=sort_keys).items()
    }


def summarize_bucket(period_start: date, records: list[WorkRecord]) -> PeriodBucket:
    return PeriodBucket(
        period_start=period_start,
        hours=math.fsum(r.hours for r in records),
        entry_count=len(records),
        completed_count=sum(1 for r in records if r.is_completed),
    )


# Key functions


def by_day(record: WorkRecord) -> date:
    return record.work_date


def by_week(record: WorkRecord) -> date:
    """Monday of the record's ISO week."""
    return record.work_date - timedelta(days=record.work_date.weekday())


def by_user(record: WorkRecord) -> str:
    return record.user_id


def by_department(record: WorkRecord) -> str:
    return record.department_id or UNASSIGNED


def by_project(record: WorkRecord) -> str | None:
    return record.project_id


def by_collaboration_key(record: WorkRecord) -> str | None:
    return record.collaboration_key


def by_weekday(record: WorkRecord) -> int:
    return record.work_date.weekday()


def by_start_hour(record: WorkRecord) -> int | None:
    if record.start_time is None:
        return None
    return record.start_time.hour


def by_time_of_day(record: WorkRecord) -> str | None:
    """Period name for the record's start hour, or None outside every range."""
    hour = by_start_hour(record)
    if hour is None:
        return None
    for period, (first, last) in TIME_OF_DAY_RANGES.items():
        if first <= hour <= last:
            return period
    return None
