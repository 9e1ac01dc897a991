"""
Rule-based burnout risk assessment.

Three factors each add one point:

1. average daily hours above 8
2. population variance of daily hours above 2
3. more than 5 consecutive calendar days each above 8 hours

Two or more points is High Risk, one is Moderate Risk, none is Low Risk.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from workpulse_analytics.config import AnalyticsSettings, get_settings
from workpulse_analytics.grouping import by_user, group_records
from workpulse_analytics.metrics import daily_buckets
from workpulse_analytics.models import RiskAssessment, RiskLevel, WorkRecord
from workpulse_analytics.numeric import mean, population_variance, round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BurnoutThresholds:
    """Thresholds for the three burnout factors"""

    max_average_hours: float = 8.0
    max_hours_variance: float = 2.0
    long_day_hours: float = 8.0
    max_long_day_streak: int = 5


DEFAULT_THRESHOLDS = BurnoutThresholds()

RECOMMENDATIONS = {
    "high_average_hours": {
        "type": "warning",
        "message": "Consider reducing daily work hours to prevent burnout",
    },
    "irregular_hours": {
        "type": "improvement",
        "message": "Try to maintain a more consistent work schedule",
    },
    "long_day_streak": {
        "type": "critical",
        "message": "Take breaks between long work stretches",
    },
}


def risk_level_for(score: int) -> RiskLevel:
    if score >= 2:
        return RiskLevel.HIGH
    if score == 1:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def longest_long_day_streak(
    daily_hours: Mapping[date, float], long_day_hours: float = 8.0
) -> int:
    """Longest run of consecutive calendar days above ``long_day_hours``.

    Calendar days missing from ``daily_hours`` count as 0 hours and break
    the streak.
    """
    if not daily_hours:
        return 0
    longest = current = 0
    day = min(daily_hours)
    last = max(daily_hours)
    while day <= last:
        if daily_hours.get(day, 0.0) > long_day_hours:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
        day += timedelta(days=1)
    return longest


def _window(
    records: Sequence[WorkRecord], as_of: date | None, window_days: int
) -> list[WorkRecord]:
    if not records:
        return []
    end = as_of or max(r.work_date for r in records)
    start = end - timedelta(days=window_days - 1)
    return [r for r in records if start <= r.work_date <= end]


def assess_burnout_risk(
    records: Sequence[WorkRecord],
    *,
    as_of: date | None = None,
    thresholds: BurnoutThresholds = DEFAULT_THRESHOLDS,
    settings: AnalyticsSettings | None = None,
) -> RiskAssessment:
    """Assess one user's burnout risk over the trailing window ending at ``as_of``.

    ``as_of`` defaults to the latest record date. The window length comes
    from ``AnalyticsSettings.burnout_window_days``.
    """
    settings = settings or get_settings()
    recent = _window(records, as_of, settings.burnout_window_days)
    daily = {bucket.period_start: bucket.hours for bucket in daily_buckets(recent)}
    totals = list(daily.values())

    average = mean(totals)
    variance = population_variance(totals)
    streak = longest_long_day_streak(daily, thresholds.long_day_hours)

    triggered = {
        "high_average_hours": average > thresholds.max_average_hours,
        "irregular_hours": variance > thresholds.max_hours_variance,
        "long_day_streak": streak > thresholds.max_long_day_streak,
    }
    score = sum(triggered.values())

    logger.debug(
        f"Burnout factors over {len(daily)} days: "
        f"{[name for name, hit in triggered.items() if hit]}"
    )
    return RiskAssessment(
        risk_level=risk_level_for(score),
        score=score,
        factors={
            "average_daily_hours": round_half_up(average),
            "hours_variance": round_half_up(variance),
            "longest_long_day_streak": streak,
            "work_days": len(daily),
        },
        triggered=triggered,
    )


def weekend_work_frequency(records: Sequence[WorkRecord]) -> float:
    """Share of work days that fall on a weekend, as a percentage."""
    days = {r.work_date for r in records}
    if not days:
        return 0.0
    weekend = sum(1 for d in days if d.weekday() >= 5)
    return weekend / len(days) * 100


def team_burnout_risks(
    records: Sequence[WorkRecord],
    *,
    as_of: date | None = None,
    thresholds: BurnoutThresholds = DEFAULT_THRESHOLDS,
    settings: AnalyticsSettings | None = None,
) -> dict:
    """Assess every user in ``records`` against a shared window end.

    Weekend work frequency is reported per member for information only; it
    does not add to the risk score.
    """
    settings = settings or get_settings()
    if as_of is None and records:
        as_of = max(r.work_date for r in records)

    members = {}
    for user_id, user_records in group_records(records, by_user).items():
        assessment = assess_burnout_risk(
            user_records, as_of=as_of, thresholds=thresholds, settings=settings
        )
        recent = _window(user_records, as_of, settings.burnout_window_days)
        payload = assessment.to_payload()
        payload["factors"]["weekend_work_frequency"] = round_half_up(
            weekend_work_frequency(recent)
        )
        payload["recommendations"] = [
            dict(RECOMMENDATIONS[name])
            for name, hit in assessment.triggered.items()
            if hit
        ]
        members[user_id] = payload

    counts = {level.value: 0 for level in RiskLevel}
    for payload in members.values():
        counts[payload["risk_level"]] += 1

    return {
        "members": members,
        "summary": {
            "risk_counts": counts,
            "average_score": round_half_up(
                mean([payload["score"] for payload in members.values()])
            ),
        },
    }
