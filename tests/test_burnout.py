"""Unit tests for rule-based burnout risk assessment."""

from datetime import date, timedelta

import pytest

from workpulse_analytics.burnout import (
    BurnoutThresholds,
    assess_burnout_risk,
    longest_long_day_streak,
    risk_level_for,
    team_burnout_risks,
    weekend_work_frequency,
)
from workpulse_analytics.config import AnalyticsSettings
from workpulse_analytics.models import RiskLevel

START = date(2024, 3, 4)


class TestRiskLevelMapping:
    """Factor count to qualitative level."""

    @pytest.mark.parametrize(
        ("score", "level"),
        [
            (0, RiskLevel.LOW),
            (1, RiskLevel.MODERATE),
            (2, RiskLevel.HIGH),
            (3, RiskLevel.HIGH),
        ],
    )
    def test_monotonic_mapping(self, score, level):
        assert risk_level_for(score) == level


class TestLongDayStreak:
    """Consecutive calendar days above the long-day threshold."""

    def test_empty(self):
        assert longest_long_day_streak({}) == 0

    def test_counts_longest_run(self):
        hours = [9, 9, 7, 9, 9, 9, 8]
        daily = {START + timedelta(days=i): h for i, h in enumerate(hours)}
        assert longest_long_day_streak(daily) == 3

    def test_exactly_threshold_resets(self):
        daily = {START: 9, START + timedelta(days=1): 8, START + timedelta(days=2): 9}
        assert longest_long_day_streak(daily) == 1

    def test_missing_day_breaks_streak(self):
        daily = {START + timedelta(days=i): 10 for i in (0, 1, 2, 4, 5, 6)}
        assert longest_long_day_streak(daily) == 3


class TestAssessBurnoutRisk:
    """Three-factor assessment over the trailing window."""

    def test_empty_records_low_risk(self, settings):
        result = assess_burnout_risk([], settings=settings)
        assert result.risk_level == RiskLevel.LOW
        assert result.score == 0

    def test_steady_eight_hour_week_is_low(self, sample_week, settings):
        result = assess_burnout_risk(sample_week, settings=settings)
        assert result.risk_level == RiskLevel.LOW
        assert result.factors["average_daily_hours"] == 8
        assert result.factors["hours_variance"] == 0

    def test_high_average_only_is_moderate(self, make_record, settings):
        records = [make_record(hours=9, day=i) for i in range(5)]
        result = assess_burnout_risk(records, settings=settings)
        assert result.triggered == {
            "high_average_hours": True,
            "irregular_hours": False,
            "long_day_streak": False,
        }
        assert result.risk_level == RiskLevel.MODERATE

    def test_irregular_hours_only_is_moderate(self, make_record, settings):
        records = [make_record(hours=h, day=i) for i, h in enumerate([4, 10, 4, 10])]
        result = assess_burnout_risk(records, settings=settings)
        assert result.factors["hours_variance"] == 9
        assert result.score == 1
        assert result.triggered["irregular_hours"] is True

    def test_streak_only_is_moderate(self, make_record, settings):
        records = [make_record(hours=8.5, day=i) for i in range(6)]
        records += [make_record(hours=6, day=i) for i in range(7, 14)]
        result = assess_burnout_risk(records, settings=settings)
        assert result.factors["longest_long_day_streak"] == 6
        assert result.triggered == {
            "high_average_hours": False,
            "irregular_hours": False,
            "long_day_streak": True,
        }
        assert result.risk_level == RiskLevel.MODERATE

    def test_two_factors_is_high(self, make_record, settings):
        records = [make_record(hours=9, day=i) for i in range(6)]
        result = assess_burnout_risk(records, settings=settings)
        assert result.score == 2
        assert result.risk_level == RiskLevel.HIGH

    def test_three_factors_is_high(self, make_record, settings):
        records = [make_record(hours=12, day=i) for i in range(6)]
        records.append(make_record(hours=2, day=6))
        result = assess_burnout_risk(records, settings=settings)
        assert result.score == 3
        assert result.risk_level == RiskLevel.HIGH

    def test_entries_are_summed_per_day(self, make_record, settings):
        """Two 5-hour entries on one day make a 10-hour day."""
        records = []
        for i in range(6):
            records += [make_record(hours=5, day=i), make_record(hours=5, day=i)]
        result = assess_burnout_risk(records, settings=settings)
        assert result.factors["average_daily_hours"] == 10
        assert result.factors["longest_long_day_streak"] == 6

    def test_window_ends_at_latest_record(self, make_record, settings):
        records = [make_record(hours=12, day=i) for i in range(6)]
        records.append(make_record(hours=8, day=40))
        result = assess_burnout_risk(records, settings=settings)
        assert result.risk_level == RiskLevel.LOW

        as_of = START + timedelta(days=5)
        result = assess_burnout_risk(records, as_of=as_of, settings=settings)
        assert result.risk_level == RiskLevel.HIGH
        assert result.factors["work_days"] == 6

    def test_window_length_from_settings(self, make_record):
        records = [make_record(hours=12, day=i) for i in range(6)]
        records.append(make_record(hours=8, day=40))
        wide = AnalyticsSettings(_env_file=None, burnout_window_days=60)
        assert assess_burnout_risk(records, settings=wide).factors["work_days"] == 7

    def test_custom_thresholds(self, sample_week, settings):
        strict = BurnoutThresholds(max_average_hours=7.5, long_day_hours=7.5)
        result = assess_burnout_risk(sample_week, thresholds=strict, settings=settings)
        assert result.score == 1

    def test_idempotent(self, make_record, settings):
        records = [make_record(hours=h, day=i) for i, h in enumerate([9.1, 3.3, 11.7])]
        assert assess_burnout_risk(records, settings=settings) == assess_burnout_risk(
            records, settings=settings
        )


class TestTeamBurnoutRisks:
    """Team-wide view with recommendations and summary."""

    def test_weekend_frequency(self, make_record):
        records = [make_record(day=i) for i in range(7)]
        assert weekend_work_frequency(records) == pytest.approx(2 / 7 * 100)
        assert weekend_work_frequency([]) == 0

    def test_members_and_summary(self, sample_week, make_record, settings):
        bob = [make_record(hours=9, day=i, user_id="bob") for i in range(6)]
        result = team_burnout_risks(sample_week + bob, settings=settings)

        assert list(result["members"]) == ["alice", "bob"]
        alice_view = result["members"]["alice"]
        bob_view = result["members"]["bob"]
        assert alice_view["risk_level"] == "Low Risk"
        assert alice_view["recommendations"] == []
        assert bob_view["risk_level"] == "High Risk"
        assert bob_view["factors"]["weekend_work_frequency"] == 16.67
        assert [r["type"] for r in bob_view["recommendations"]] == [
            "warning",
            "critical",
        ]
        assert result["summary"] == {
            "risk_counts": {"Low Risk": 1, "Moderate Risk": 0, "High Risk": 1},
            "average_score": 1.0,
        }

    def test_empty_team(self, settings):
        result = team_burnout_risks([], settings=settings)
        assert result["members"] == {}
        assert result["summary"]["average_score"] == 0
