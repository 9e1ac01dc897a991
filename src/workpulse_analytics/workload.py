"""
Workload distribution and collaboration aggregates for a team.

Shared work is identified by ``WorkRecord.collaboration_key``: a key touched by
more than one distinct user counts as a shared project.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Hashable, Sequence
from datetime import date

from workpulse_analytics.config import AnalyticsSettings, get_settings
from workpulse_analytics.grouping import (
    aggregate_groups,
    by_collaboration_key,
    by_day,
    by_department,
    by_user,
    by_week,
    group_records,
)
from workpulse_analytics.metrics import distinct_work_days, total_hours
from workpulse_analytics.models import ScoreResult, WorkRecord
from workpulse_analytics.numeric import coefficient_of_variation, mean, round_half_up

logger = logging.getLogger(__name__)

WORKLOAD_TARGET_HOURS = 40 * 0.8
WORKLOAD_TARGET_TASKS = 20
WORKLOAD_TARGET_DAYS = 20
WORKLOAD_WEIGHTS = (0.4, 0.4, 0.2)

DAILY_MEMBER_WEIGHT = 0.6
DAILY_SHARED_WEIGHT = 0.4


def _team_size(records: Sequence[WorkRecord], team_size: int | None) -> int:
    if team_size is not None:
        return team_size
    return len({r.user_id for r in records})


def _by_month(record: WorkRecord) -> date:
    return record.work_date.replace(day=1)


def shared_keys(records: Sequence[WorkRecord]) -> list[str]:
    """Collaboration keys worked on by more than one distinct user."""
    return [
        key
        for key, members in group_records(records, by_collaboration_key).items()
        if len({r.user_id for r in members}) > 1
    ]


# Workload


def workload_score(records: Sequence[WorkRecord]) -> ScoreResult:
    """Weighted workload of one member on a 0-100 scale.

    Hours are normalized to a 32-hour week and capped, task count to 20 and
    capped, working days to 20 without a cap.
    """
    hours = total_hours(records)
    task_count = len(records)
    unique_days = distinct_work_days(records)

    hours_score = min(hours / WORKLOAD_TARGET_HOURS, 1.0)
    task_score = min(task_count / WORKLOAD_TARGET_TASKS, 1.0)
    days_score = unique_days / WORKLOAD_TARGET_DAYS
    hours_weight, task_weight, days_weight = WORKLOAD_WEIGHTS

    score = (
        hours_score * hours_weight + task_score * task_weight + days_score * days_weight
    ) * 100
    return ScoreResult(
        score=round_half_up(score),
        metrics={
            "total_hours": round_half_up(hours),
            "task_count": task_count,
            "unique_days": unique_days,
        },
    )


def workload_distribution(records: Sequence[WorkRecord]) -> dict[str, ScoreResult]:
    """Workload score per user."""
    return aggregate_groups(
        records, by_user, lambda _, members: workload_score(members)
    )


def workload_variance(scores: Sequence[float]) -> float:
    """Coefficient of variation of member workload scores.

    Empty input, a zero total, a single member or identical scores give
    exactly 0.
    """
    if len(scores) < 2 or math.fsum(scores) == 0 or len(set(scores)) == 1:
        return 0.0
    return coefficient_of_variation(scores)


# Collaboration


def collaboration_index(records: Sequence[WorkRecord]) -> float:
    """Distinct collaboration keys touched per distinct contributor.

    Records without a key are ignored. 0 when nothing is keyed.
    """
    keyed = [r for r in records if r.collaboration_key is not None]
    contributors = {r.user_id for r in keyed}
    if not contributors:
        return 0.0
    return len({r.collaboration_key for r in keyed}) / len(contributors)


def collaboration_index_by(
    records: Sequence[WorkRecord],
    key: Callable[[WorkRecord], Hashable | None] = by_department,
) -> dict:
    """``collaboration_index`` for each group produced by ``key``."""
    return aggregate_groups(
        records,
        key,
        lambda _, members: round_half_up(collaboration_index(members)),
    )


def interaction_score(
    records: Sequence[WorkRecord], team_size: int | None = None
) -> float:
    """Shared projects over the C(team_size, 2) possible member pairs, in percent.

    ``team_size`` defaults to the number of distinct users in ``records``.
    The pair count is floored at 1.
    """
    size = _team_size(records, team_size)
    possible_pairs = max(math.comb(size, 2), 1)
    actual = len(shared_keys(records))
    return round_half_up(actual / possible_pairs * 100)


def project_collaboration(
    records: Sequence[WorkRecord],
    team_size: int | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> dict:
    """Member coverage per collaboration key and the most collaborative keys."""
    settings = settings or get_settings()
    size = _team_size(records, team_size)

    def summarize(key: str, members: list[WorkRecord]) -> dict:
        member_count = len({r.user_id for r in members})
        score = member_count / size * 100 if size > 0 else 0.0
        return {
            "key": key,
            "member_count": member_count,
            "collaboration_score": round_half_up(score),
            "total_hours": round_half_up(total_hours(members)),
        }

    projects = list(
        aggregate_groups(records, by_collaboration_key, summarize).values()
    )
    ranked = sorted(projects, key=lambda p: p["collaboration_score"], reverse=True)
    return {
        "average_collaboration_score": round_half_up(
            mean([p["collaboration_score"] for p in projects])
        ),
        "most_collaborative_projects": ranked[: settings.most_collaborative_limit],
    }


def daily_collaboration_index(
    day_records: Sequence[WorkRecord], team_size: int
) -> float:
    """``(active / team_size) * 0.6 + (shared keys / entries) * 0.4`` on 0-100."""
    if not day_records or team_size <= 0:
        return 0.0
    active = len({r.user_id for r in day_records})
    shared = len(shared_keys(day_records))
    index = (
        active / team_size * DAILY_MEMBER_WEIGHT
        + shared / len(day_records) * DAILY_SHARED_WEIGHT
    )
    return round_half_up(index * 100)


def collaboration_trends(
    records: Sequence[WorkRecord], team_size: int | None = None
) -> list[dict]:
    """Per-day active members, shared keys and collaboration index."""
    size = _team_size(records, team_size)
    return [
        {
            "date": day.isoformat(),
            "active_members": len({r.user_id for r in day_records}),
            "shared_projects": len(shared_keys(day_records)),
            "collaboration_index": daily_collaboration_index(day_records, size),
        }
        for day, day_records in group_records(records, by_day).items()
    ]


def collaboration_frequency(records: Sequence[WorkRecord]) -> dict[str, float]:
    """Average number of shared keys per day, week and month with work."""
    frequency = {}
    periods = (("daily", by_day), ("weekly", by_week), ("monthly", _by_month))
    for period, key in periods:
        counts = [
            len(shared_keys(members))
            for members in group_records(records, key).values()
        ]
        frequency[period] = round_half_up(mean(counts))
    return frequency


def cross_department_projects(records: Sequence[WorkRecord]) -> list[dict]:
    """Collaboration keys whose contributors span more than one department."""
    projects = []
    for key, members in group_records(records, by_collaboration_key).items():
        departments = sorted({by_department(r) for r in members})
        if len(departments) > 1:
            projects.append(
                {
                    "key": key,
                    "department_count": len(departments),
                    "departments": departments,
                }
            )
    return projects


def department_collaboration_score(records: Sequence[WorkRecord]) -> float:
    """Share of collaboration keys that cross departments, in percent.

    0 when the records cover at most one department or no keyed work.
    """
    if len({by_department(r) for r in records}) <= 1:
        return 0.0
    total_keys = len({r.collaboration_key for r in records} - {None})
    if total_keys == 0:
        return 0.0
    return round_half_up(len(cross_department_projects(records)) / total_keys * 100)
