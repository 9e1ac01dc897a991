"""
Insight composition for employee, team and system dashboards.

The service only composes the pure scorers; it keeps no state beyond its
settings and returns plain JSON-serializable dictionaries.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from workpulse_analytics.burnout import assess_burnout_risk, team_burnout_risks
from workpulse_analytics.config import AnalyticsSettings, get_settings
from workpulse_analytics.exceptions import UnknownInsightError
from workpulse_analytics.grouping import by_department
from workpulse_analytics.metrics import (
    average_per_day,
    completion_rate,
    daily_totals,
    distinct_work_days,
    total_hours,
)
from workpulse_analytics.models import TrendResult, WorkRecord
from workpulse_analytics.numeric import round_half_up
from workpulse_analytics.patterns import (
    focus_time,
    hourly_patterns,
    most_productive_days,
    peak_productivity_times,
    recommended_work_hours,
    weekday_patterns,
)
from workpulse_analytics.rollups import (
    department_rollups,
    project_rollups,
    top_performers,
)
from workpulse_analytics.scoring import (
    personal_productivity_score,
    team_daily_productivity_score,
    weekly_score_series,
    weekly_scores,
)
from workpulse_analytics.trend import build_trend_result, forecast_series
from workpulse_analytics.workload import (
    collaboration_frequency,
    collaboration_index,
    collaboration_index_by,
    collaboration_trends,
    cross_department_projects,
    department_collaboration_score,
    interaction_score,
    project_collaboration,
    workload_distribution,
    workload_variance,
)

WORKLOAD_VARIANCE_LIMIT = 0.3
COMPLETION_RATE_TARGET = 70.0
COLLABORATION_SCORE_TARGET = 50.0


def improvement_areas(
    workload_spread: float,
    team_completion_rate: float,
    average_collaboration_score: float,
) -> list[dict]:
    """Named team improvement areas with a recommendation each."""
    areas = []
    if workload_spread > WORKLOAD_VARIANCE_LIMIT:
        areas.append(
            {
                "area": "Workload Distribution",
                "description": "High variance in team workload distribution",
                "recommendation": (
                    "Consider redistributing tasks more evenly among team members"
                ),
            }
        )
    if team_completion_rate < COMPLETION_RATE_TARGET:
        areas.append(
            {
                "area": "Task Completion",
                "description": "Below target task completion rate",
                "recommendation": "Review task allocation and identify bottlenecks",
            }
        )
    if average_collaboration_score < COLLABORATION_SCORE_TARGET:
        areas.append(
            {
                "area": "Team Collaboration",
                "description": "Low team collaboration score",
                "recommendation": "Encourage more cross-member project work",
            }
        )
    return areas


class ProductivityInsightService:
    """Builds insight payloads from already-scoped work records"""

    SCOPES = ("employee", "team", "system")

    def __init__(self, settings: AnalyticsSettings | None = None):
        self.settings = settings or get_settings()
        self.logger = logging.getLogger(__name__)

    def insights(self, scope: str, records: Sequence[WorkRecord], **options) -> dict:
        """Dispatch to the insight builder named by ``scope``."""
        if scope not in self.SCOPES:
            raise UnknownInsightError(scope)
        builder = getattr(self, f"{scope}_insights")
        return builder(records, **options)

    def _weekly_trend(self, records: Sequence[WorkRecord]) -> TrendResult:
        scores = weekly_scores(records)
        return build_trend_result(
            weekly_score_series(records),
            list(scores.values()),
            settings=self.settings,
        )

    def employee_insights(
        self, records: Sequence[WorkRecord], *, as_of: date | None = None
    ) -> dict:
        """Personal productivity, trend, burnout risk and work patterns."""
        self.logger.debug(f"Building employee insights from {len(records)} records")
        productivity = personal_productivity_score(records)
        trend = self._weekly_trend(records)
        burnout = assess_burnout_risk(records, as_of=as_of, settings=self.settings)

        return {
            "user_ids": sorted({r.user_id for r in records}),
            "productivity": productivity.to_payload(),
            "trend": trend.to_payload(),
            "burnout_risk": burnout.to_payload(),
            "work_patterns": {
                "most_productive_days": most_productive_days(
                    records, settings=self.settings
                ),
                "weekday_patterns": weekday_patterns(records),
                "focus_time": focus_time(records, settings=self.settings),
                "peak_productivity_times": peak_productivity_times(records),
                "hourly_patterns": hourly_patterns(records, settings=self.settings),
                "recommended_work_hours": recommended_work_hours(records),
            },
            "forecast": forecast_series(daily_totals(records), settings=self.settings),
        }

    def team_insights(
        self,
        records: Sequence[WorkRecord],
        *,
        team_size: int | None = None,
        as_of: date | None = None,
    ) -> dict:
        """Team productivity, workload spread, collaboration and burnout view.

        ``team_size`` defaults to the number of distinct users in ``records``.
        """
        size = team_size if team_size is not None else len({r.user_id for r in records})
        self.logger.debug(
            f"Building team insights from {len(records)} records, team size {size}"
        )

        distribution = workload_distribution(records)
        spread = workload_variance([result.score for result in distribution.values()])
        projects = project_collaboration(records, size, settings=self.settings)
        rate = completion_rate(records)

        return {
            "team_size": size,
            "productivity": team_daily_productivity_score(records, size).to_payload(),
            "completion_rate": rate,
            "trend": self._weekly_trend(records).to_payload(),
            "workload": {
                "distribution": {
                    user_id: result.to_payload()
                    for user_id, result in distribution.items()
                },
                "variance": round_half_up(spread),
            },
            "collaboration": {
                "index": round_half_up(collaboration_index(records)),
                "interaction_score": interaction_score(records, size),
                "project_collaboration": projects,
                "trends": collaboration_trends(records, size),
                "frequency": collaboration_frequency(records),
                "cross_department": {
                    "department_count": len({by_department(r) for r in records}),
                    "projects": cross_department_projects(records),
                    "department_collaboration_score": department_collaboration_score(
                        records
                    ),
                },
            },
            "burnout": team_burnout_risks(records, as_of=as_of, settings=self.settings),
            "top_performers": top_performers(records, settings=self.settings),
            "improvement_areas": improvement_areas(
                spread, rate, projects["average_collaboration_score"]
            ),
        }

    def system_insights(self, records: Sequence[WorkRecord]) -> dict:
        """Organization-wide totals with department and project rollups."""
        self.logger.debug(f"Building system insights from {len(records)} records")
        return {
            "total_hours": round_half_up(total_hours(records)),
            "entry_count": len(records),
            "active_users": len({r.user_id for r in records}),
            "work_days": distinct_work_days(records),
            "completion_rate": completion_rate(records),
            "average_hours_per_day": round_half_up(average_per_day(records)),
            "departments": department_rollups(records),
            "projects": project_rollups(records),
            "collaboration_by_department": collaboration_index_by(records),
            "department_collaboration_score": department_collaboration_score(records),
            "top_performers": top_performers(records, settings=self.settings),
            "trend": self._weekly_trend(records).to_payload(),
        }
