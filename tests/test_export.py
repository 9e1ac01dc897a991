"""Unit tests for export shaping."""

import pytest

from workpulse_analytics.export import export_rows, flatten_for_export, metric_unit


class TestFlattenForExport:
    """Nested payloads to dotted rows."""

    def test_nested_dicts_and_lists(self):
        payload = {
            "score": 88.67,
            "metrics": {"completion_rate": 100.0, "work_days": 5},
            "forecast": [8.0, 8.0],
        }
        assert flatten_for_export(payload) == [
            ("score", 88.67),
            ("metrics.completion_rate", 100.0),
            ("metrics.work_days", 5),
            ("forecast.0", 8.0),
            ("forecast.1", 8.0),
        ]

    def test_empty_containers_produce_no_rows(self):
        assert flatten_for_export({"members": {}, "areas": []}) == []

    def test_keeps_none(self):
        assert flatten_for_export({"efficiency_score": None}) == [
            ("efficiency_score", None)
        ]


class TestMetricUnit:
    """Unit labels."""

    @pytest.mark.parametrize(
        ("key", "unit"),
        [
            ("productivity.metrics.total_hours", "hours"),
            ("work_patterns.focus_time.average_focus_session", "hours"),
            ("completion_rate", "percent"),
            ("burnout.members.bob.factors.weekend_work_frequency", "percent"),
            ("productivity.metrics.work_days", "count"),
            ("entry_count", "count"),
            ("productivity.score", "score"),
            ("trend.strength", "score"),
            ("work_patterns.peak_productivity_times.morning.efficiency", "score"),
            ("work_patterns.hourly_patterns.most_productive_hours.0.hour", ""),
            ("work_patterns.recommended_work_hours", "hours"),
            ("trend.direction", ""),
        ],
    )
    def test_units(self, key, unit):
        assert metric_unit(key) == unit

    def test_export_rows(self):
        assert export_rows({"total_hours": 40.0}) == [
            {"metric": "total_hours", "value": 40.0, "unit": "hours"}
        ]
