"""
Boundary validation for raw work records.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from workpulse_analytics.exceptions import AnalyticsError, InvalidWorkRecordError
from workpulse_analytics.models import WorkRecord

logger = logging.getLogger(__name__)


def _describe(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "record"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)


def load_records(raw: Iterable[Any]) -> list[WorkRecord]:
    """Validate raw mappings into ``WorkRecord`` objects.

    Raises:
        InvalidWorkRecordError: for the first record that fails validation,
            carrying its index in ``raw``.
    """
    records = []
    for index, item in enumerate(raw):
        try:
            records.append(WorkRecord.model_validate(item))
        except ValidationError as e:
            raise InvalidWorkRecordError(index, _describe(e)) from e
    logger.debug(f"Loaded {len(records)} work records")
    return records


def unwrap_payload(data: Any) -> list:
    """Accept either a JSON array of records or ``{"records": [...]}``."""
    if isinstance(data, dict) and "records" in data:
        data = data["records"]
    if not isinstance(data, list):
        raise AnalyticsError(
            "Expected a list of work records or an object with a 'records' list",
            "INVALID_PAYLOAD",
        )
    return data
