from datetime import date, timedelta

import pytest

from workpulse_analytics.config import AnalyticsSettings
from workpulse_analytics.models import WorkRecord, WorkStatus

# Monday
WEEK_START = date(2024, 3, 4)


@pytest.fixture
def make_record():
    """Factory for work records with sensible defaults"""

    def _make(
        hours: float | None = 8.0,
        day: date | int = 0,
        user_id: str = "alice",
        status: WorkStatus | str = WorkStatus.COMPLETED,
        **fields,
    ) -> WorkRecord:
        if isinstance(day, int):
            day = WEEK_START + timedelta(days=day)
        return WorkRecord(
            user_id=user_id,
            work_date=day,
            hours_worked=hours,
            status=status,
            **fields,
        )

    return _make


@pytest.fixture
def sample_week(make_record):
    """Five consecutive weekdays of 8 completed hours for one user"""
    return [make_record(hours=8.0, day=offset) for offset in range(5)]


@pytest.fixture
def settings():
    """Default settings that ignore any local .env file"""
    return AnalyticsSettings(_env_file=None)
