"""
Department, project and per-user rollups for "most active" displays.
"""

from __future__ import annotations

from collections.abc import Sequence

from workpulse_analytics.config import AnalyticsSettings, get_settings
from workpulse_analytics.grouping import (
    aggregate_groups,
    by_department,
    by_project,
    by_user,
)
from workpulse_analytics.metrics import (
    average_per_day,
    completion_rate,
    total_hours,
)
from workpulse_analytics.models import WorkRecord
from workpulse_analytics.numeric import round_half_up
from workpulse_analytics.scoring import (
    personal_productivity_score,
    team_daily_productivity_score,
)


def _by_hours_desc(rows: list[dict]) -> list[dict]:
    # Groups arrive key-sorted, so ties keep key order
    return sorted(rows, key=lambda row: row["total_hours"], reverse=True)


def department_rollups(records: Sequence[WorkRecord]) -> list[dict]:
    """Per-department totals sorted by total hours, busiest first.

    Records without a department are rolled up under ``"unassigned"``.
    """

    def summarize(department_id: str, members: list[WorkRecord]) -> dict:
        member_count = len({r.user_id for r in members})
        productivity = team_daily_productivity_score(members, member_count)
        return {
            "department_id": department_id,
            "total_hours": round_half_up(total_hours(members)),
            "entry_count": len(members),
            "member_count": member_count,
            "completion_rate": completion_rate(members),
            "average_hours_per_day": round_half_up(average_per_day(members)),
            "productivity_score": productivity.score,
        }

    rows = aggregate_groups(records, by_department, summarize)
    return _by_hours_desc(list(rows.values()))


def project_rollups(records: Sequence[WorkRecord]) -> list[dict]:
    """Per-project totals sorted by total hours, busiest first.

    ``efficiency_score`` is not implemented yet and is always ``None``.
    """

    def summarize(project_id: str, members: list[WorkRecord]) -> dict:
        return {
            "project_id": project_id,
            "total_hours": round_half_up(total_hours(members)),
            "entry_count": len(members),
            "contributor_count": len({r.user_id for r in members}),
            "completion_rate": completion_rate(members),
            "efficiency_score": None,
        }

    rows = aggregate_groups(records, by_project, summarize)
    return _by_hours_desc(list(rows.values()))


def top_performers(
    records: Sequence[WorkRecord],
    limit: int | None = None,
    *,
    settings: AnalyticsSettings | None = None,
) -> list[dict]:
    """Users with the most hours, each with a personal productivity score."""
    if limit is None:
        limit = (settings or get_settings()).top_n

    def summarize(user_id: str, members: list[WorkRecord]) -> dict:
        return {
            "user_id": user_id,
            "total_hours": round_half_up(total_hours(members)),
            "completion_rate": completion_rate(members),
            "productivity_score": personal_productivity_score(members).score,
        }

    rows = aggregate_groups(records, by_user, summarize)
    return _by_hours_desc(list(rows.values()))[:limit]
