"""Tests for insight composition across employee, team and system scopes."""

import json
from datetime import datetime

import pytest

from workpulse_analytics.exceptions import UnknownInsightError
from workpulse_analytics.insights import ProductivityInsightService, improvement_areas


@pytest.fixture
def service(settings):
    return ProductivityInsightService(settings)


@pytest.fixture
def team_records(sample_week, make_record):
    """Alice's steady week plus Bob on a shared project with long days"""
    alice = [
        r.model_copy(update={"project_id": "apollo", "department_id": "eng"})
        for r in sample_week
    ]
    bob = [
        make_record(
            hours=9,
            day=i,
            user_id="bob",
            status="draft" if i % 2 else "completed",
            project_id="apollo",
            department_id="ops",
        )
        for i in range(6)
    ]
    return alice + bob


class TestEmployeeInsights:
    """Personal insight payload."""

    def test_end_to_end_steady_week(self, service, sample_week):
        """Five 8-hour completed weekdays."""
        payload = service.employee_insights(sample_week)
        productivity = payload["productivity"]
        assert productivity["metrics"]["completion_rate"] == 100
        assert productivity["metrics"]["average_hours_per_day"] == 8
        assert productivity["score"] == pytest.approx(88.67)
        assert payload["trend"]["direction"] == "stable"
        assert payload["burnout_risk"]["risk_level"] == "Low Risk"
        assert payload["forecast"] == [8.0] * 7
        assert payload["user_ids"] == ["alice"]

    def test_time_of_day_patterns(self, service, make_record):
        records = [
            make_record(hours=3, day=0, start_time=datetime(2024, 3, 4, 8)),
            make_record(hours=5, day=1, start_time=datetime(2024, 3, 5, 13)),
            make_record(hours=4, day=2),
        ]
        patterns = service.employee_insights(records)["work_patterns"]
        assert patterns["peak_productivity_times"]["morning"]["hours"] == 3
        assert patterns["peak_productivity_times"]["afternoon"]["hours"] == 5
        assert patterns["hourly_patterns"]["most_productive_hours"][0] == {
            "hour": 13,
            "average_hours": 5,
        }
        assert patterns["recommended_work_hours"] == 4

    def test_trend_fits_unrounded_weekly_scores(self, service, make_record):
        """Both weeks display 60.56 but the second one scores higher."""
        records = [make_record(hours=7, day=0), make_record(hours=7.001, day=7)]
        trend = service.employee_insights(records)["trend"]
        assert [row["productivity_score"] for row in trend["weekly_metrics"]] == [
            60.56,
            60.56,
        ]
        assert trend["direction"] == "improving"

    def test_empty_records(self, service):
        payload = service.employee_insights([])
        assert payload["productivity"]["score"] == 0
        assert payload["trend"]["direction"] == "stable"
        assert payload["trend"]["strength"] == 0
        assert payload["burnout_risk"]["risk_level"] == "Low Risk"

    def test_json_serializable(self, service, sample_week):
        payload = service.employee_insights(sample_week)
        assert json.loads(json.dumps(payload)) == payload

    def test_idempotent(self, service, team_records):
        first = service.employee_insights(team_records)
        second = service.employee_insights(team_records)
        assert json.dumps(first) == json.dumps(second)


class TestTeamInsights:
    """Team insight payload."""

    def test_structure(self, service, team_records):
        payload = service.team_insights(team_records)
        assert payload["team_size"] == 2
        assert set(payload["workload"]["distribution"]) == {"alice", "bob"}
        assert payload["collaboration"]["interaction_score"] == 100
        assert payload["collaboration"]["cross_department"]["department_count"] == 2
        assert payload["burnout"]["members"]["bob"]["risk_level"] == "High Risk"
        assert [p["user_id"] for p in payload["top_performers"]] == ["bob", "alice"]

    def test_explicit_team_size(self, service, team_records):
        payload = service.team_insights(team_records, team_size=4)
        assert payload["team_size"] == 4
        assert payload["collaboration"]["interaction_score"] == pytest.approx(16.67)

    def test_json_serializable(self, service, team_records):
        payload = service.team_insights(team_records)
        assert json.loads(json.dumps(payload)) == payload

    def test_empty_team(self, service):
        payload = service.team_insights([])
        assert payload["team_size"] == 0
        assert payload["workload"]["variance"] == 0
        assert payload["productivity"]["score"] == 0


class TestSystemInsights:
    """Organization-wide payload."""

    def test_totals(self, service, team_records):
        payload = service.system_insights(team_records)
        assert payload["total_hours"] == 94
        assert payload["entry_count"] == 11
        assert payload["active_users"] == 2
        assert [d["department_id"] for d in payload["departments"]] == ["ops", "eng"]
        assert payload["projects"][0]["efficiency_score"] is None

    def test_json_serializable(self, service, team_records):
        payload = service.system_insights(team_records)
        assert json.loads(json.dumps(payload)) == payload


class TestDispatch:
    """Scope dispatch."""

    def test_dispatches_by_scope(self, service, sample_week):
        assert service.insights("system", sample_week)["entry_count"] == 5

    def test_unknown_scope(self, service):
        with pytest.raises(UnknownInsightError) as exc_info:
            service.insights("galaxy", [])
        assert exc_info.value.error_code == "UNKNOWN_INSIGHT"


class TestImprovementAreas:
    """Team improvement thresholds."""

    def test_healthy_team(self):
        assert improvement_areas(0.1, 90, 80) == []

    def test_all_areas(self):
        areas = improvement_areas(0.31, 69.9, 49.9)
        assert [a["area"] for a in areas] == [
            "Workload Distribution",
            "Task Completion",
            "Team Collaboration",
        ]

    def test_thresholds_are_strict(self):
        assert improvement_areas(0.3, 70, 50) == []
