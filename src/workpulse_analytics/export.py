"""
Export shaping for the CSV/PDF collaborator.

Nested insight payloads become ordered ``(dotted_key, value)`` rows. No files
are written here.
"""

from __future__ import annotations

from typing import Any

HOURS_MARKERS = ("hours", "focus_session")
PERCENT_SUFFIXES = ("_rate", "percentage", "_share", "_frequency", "utilization")
COUNT_SUFFIXES = (
    "_count",
    "_days",
    "team_size",
    "streak",
    "active_members",
    "shared_projects",
    "active_users",
)


def flatten_for_export(payload: Any, prefix: str = "") -> list[tuple[str, Any]]:
    """Flatten dicts and lists into dotted-key rows, keeping insertion order.

    List items are keyed by their index. Empty containers produce no rows.
    """
    if isinstance(payload, dict):
        rows = []
        for key, value in payload.items():
            child = f"{prefix}.{key}" if prefix else str(key)
            rows.extend(flatten_for_export(value, child))
        return rows
    if isinstance(payload, (list, tuple)):
        rows = []
        for index, value in enumerate(payload):
            child = f"{prefix}.{index}" if prefix else str(index)
            rows.extend(flatten_for_export(value, child))
        return rows
    return [(prefix, payload)]


def metric_unit(key: str) -> str:
    """Unit label for a dotted metric key: hours, percent, count, score or ''."""
    name = key.rsplit(".", 1)[-1]
    if any(marker in name for marker in HOURS_MARKERS):
        return "hours"
    if name.endswith(PERCENT_SUFFIXES):
        return "percent"
    if name.endswith(COUNT_SUFFIXES):
        return "count"
    if "score" in name or name in ("strength", "efficiency"):
        return "score"
    return ""


def export_rows(payload: dict) -> list[dict]:
    """Rows of ``{"metric", "value", "unit"}`` ready for a tabular writer."""
    return [
        {"metric": key, "value": value, "unit": metric_unit(key)}
        for key, value in flatten_for_export(payload)
    ]
