"""Unit tests for department, project and top-performer rollups."""

import pytest

from workpulse_analytics.rollups import (
    department_rollups,
    project_rollups,
    top_performers,
)


@pytest.fixture
def org_records(make_record):
    return [
        make_record(hours=8, day=0, user_id="alice", project_id="p1", department_id="eng"),
        make_record(
            hours=4,
            day=0,
            user_id="bob",
            status="draft",
            project_id="p1",
            department_id="eng",
        ),
        make_record(hours=10, day=1, user_id="carol", project_id="p2", department_id="ops"),
        make_record(hours=1, day=2, user_id="dave"),
    ]


class TestDepartmentRollups:
    """Per-department aggregation."""

    def test_sorted_by_hours(self, org_records):
        rollups = department_rollups(org_records)
        assert [r["department_id"] for r in rollups] == ["eng", "ops", "unassigned"]
        assert [r["total_hours"] for r in rollups] == [12, 10, 1]

    def test_reuses_metric_primitives(self, org_records):
        eng = department_rollups(org_records)[0]
        assert eng["entry_count"] == 2
        assert eng["member_count"] == 2
        assert eng["completion_rate"] == 50
        assert eng["average_hours_per_day"] == 12
        assert eng["productivity_score"] == 65

    def test_empty(self):
        assert department_rollups([]) == []


class TestProjectRollups:
    """Per-project aggregation."""

    def test_projects(self, org_records):
        rollups = project_rollups(org_records)
        assert [r["project_id"] for r in rollups] == ["p1", "p2"]
        assert rollups[0]["contributor_count"] == 2
        assert rollups[0]["total_hours"] == 12

    def test_efficiency_not_implemented(self, org_records):
        assert all(r["efficiency_score"] is None for r in project_rollups(org_records))

    def test_deterministic(self, org_records):
        assert project_rollups(org_records) == project_rollups(org_records)


class TestTopPerformers:
    """Users ranked by hours."""

    def test_default_limit_from_settings(self, org_records, settings):
        top = top_performers(org_records, settings=settings)
        assert [p["user_id"] for p in top] == ["carol", "alice", "bob"]

    def test_explicit_limit(self, org_records):
        assert len(top_performers(org_records, limit=1)) == 1

    def test_includes_personal_score(self, org_records, settings):
        alice = top_performers(org_records, settings=settings)[1]
        assert alice["productivity_score"] == pytest.approx(88.67)
        assert alice["completion_rate"] == 100
