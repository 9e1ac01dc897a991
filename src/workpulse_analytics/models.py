"""
Data models for work records and analytics results using Pydantic.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


class WorkStatus(str, Enum):
    """Work record status enum"""

    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TrendDirection(str, Enum):
    """Direction of a fitted trend line"""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class ChangeDirection(str, Enum):
    """Direction of a period-over-period change"""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class RiskLevel(str, Enum):
    """Qualitative burnout risk level"""

    LOW = "Low Risk"
    MODERATE = "Moderate Risk"
    HIGH = "High Risk"


class WorkRecord(BaseModel):
    """One logged unit of work."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = Field(None, description="Record identifier")
    user_id: str = Field(..., description="Owner of the record")
    work_date: date = Field(
        ...,
        validation_alias=AliasChoices("work_date", "date"),
        description="Calendar day the work is attributed to",
    )
    start_time: datetime | None = Field(None, description="Start of the work")
    end_time: datetime | None = Field(None, description="End of the work")
    hours_worked: float | None = Field(
        None, ge=0, description="Precomputed duration in hours"
    )
    status: WorkStatus = Field(WorkStatus.DRAFT, description="Completion status")
    project_id: str | None = Field(None, description="Associated project")
    department_id: str | None = Field(None, description="Department of the owner")
    work_title: str | None = Field(None, description="Free-form work title")

    @model_validator(mode="after")
    def end_after_start(self) -> "WorkRecord":
        if (
            self.start_time is not None
            and self.end_time is not None
            and self.end_time <= self.start_time
        ):
            raise ValueError("end_time must be after start_time")
        return self

    @property
    def hours(self) -> float:
        """Effective duration in hours; missing values count as zero."""
        if self.hours_worked is not None:
            return float(self.hours_worked)
        if self.start_time is not None and self.end_time is not None:
            return (self.end_time - self.start_time).total_seconds() / 3600.0
        return 0.0

    @property
    def is_completed(self) -> bool:
        return self.status == WorkStatus.COMPLETED

    @property
    def collaboration_key(self) -> str | None:
        """Key that identifies shared work: the project, else the work title."""
        return self.project_id or self.work_title


@dataclass(frozen=True)
class PeriodBucket:
    """Aggregated totals for one day or one week."""

    period_start: date
    hours: float = 0.0
    entry_count: int = 0
    completed_count: int = 0


class ResultModel(BaseModel):
    """Base for immutable, JSON-serializable engine results."""

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json")


class ScoreResult(ResultModel):
    """A 0-100 score plus the metrics that produced it."""

    score: float = Field(..., description="Rounded score")
    metrics: dict[str, float | int] = Field(default_factory=dict)
    breakdown: dict[str, float | int] | None = Field(None)


class PeriodChange(ResultModel):
    """Percentage change between two aggregates."""

    direction: ChangeDirection = ChangeDirection.STABLE
    percentage: float = 0.0


class TrendComparison(ResultModel):
    """First-half versus second-half averages of a series."""

    previous_period: float = 0.0
    current_period: float = 0.0
    change: PeriodChange = Field(default_factory=PeriodChange)


class WeeklyMetric(ResultModel):
    """Per-week inputs and score fed into the trend line."""

    week_start: date
    hours: float
    completion_rate: float
    productivity_score: float


class TrendResult(ResultModel):
    """Direction and strength of a score series."""

    direction: TrendDirection = TrendDirection.STABLE
    strength: float = Field(0.0, ge=0, le=100)
    summary: str = "Productivity remains relatively stable"
    weekly_metrics: list[WeeklyMetric] = Field(default_factory=list)
    comparison: TrendComparison = Field(default_factory=TrendComparison)


class RiskAssessment(ResultModel):
    """Rule-based burnout risk for one user."""

    risk_level: RiskLevel = RiskLevel.LOW
    score: int = Field(0, ge=0, le=3, description="Number of triggered factors")
    factors: dict[str, float | int] = Field(default_factory=dict)
    triggered: dict[str, bool] = Field(default_factory=dict)
