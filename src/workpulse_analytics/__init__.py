"""Productivity analytics and scoring engine for time-stamped work records.

Every scorer is a pure function of the records it is given. Callers scope and
authorize the records; the engine never queries a data store.
"""

from workpulse_analytics.burnout import (
    BurnoutThresholds,
    assess_burnout_risk,
    longest_long_day_streak,
    team_burnout_risks,
)
from workpulse_analytics.config import AnalyticsSettings, get_settings
from workpulse_analytics.consistency import consistency_score, record_consistency_score
from workpulse_analytics.exceptions import (
    AnalyticsError,
    InvalidWorkRecordError,
    UnknownInsightError,
)
from workpulse_analytics.insights import ProductivityInsightService
from workpulse_analytics.metrics import (
    average_per_day,
    completion_rate,
    completion_ratio,
    daily_buckets,
    daily_totals,
    distinct_work_days,
    total_hours,
    weekly_buckets,
)
from workpulse_analytics.models import (
    PeriodBucket,
    PeriodChange,
    RiskAssessment,
    RiskLevel,
    ScoreResult,
    TrendComparison,
    TrendDirection,
    TrendResult,
    WorkRecord,
    WorkStatus,
)
from workpulse_analytics.records import load_records
from workpulse_analytics.scoring import (
    PERSONAL_PROFILE,
    TEAM_PROFILE,
    WeightProfile,
    personal_productivity_score,
    team_daily_productivity_score,
    weekly_productivity_score,
    weekly_score_series,
    weekly_scores,
)
from workpulse_analytics.trend import (
    analyze_trend,
    build_trend_result,
    compare_halves,
    forecast_series,
    linear_slope,
    percent_change,
    trend_summary,
)
from workpulse_analytics.workload import (
    collaboration_index,
    interaction_score,
    workload_distribution,
    workload_score,
    workload_variance,
)

__all__ = [
    "AnalyticsError",
    "AnalyticsSettings",
    "BurnoutThresholds",
    "InvalidWorkRecordError",
    "PERSONAL_PROFILE",
    "PeriodBucket",
    "PeriodChange",
    "ProductivityInsightService",
    "RiskAssessment",
    "RiskLevel",
    "ScoreResult",
    "TEAM_PROFILE",
    "TrendComparison",
    "TrendDirection",
    "TrendResult",
    "UnknownInsightError",
    "WeightProfile",
    "WorkRecord",
    "WorkStatus",
    "analyze_trend",
    "assess_burnout_risk",
    "average_per_day",
    "build_trend_result",
    "collaboration_index",
    "compare_halves",
    "completion_rate",
    "completion_ratio",
    "consistency_score",
    "daily_buckets",
    "daily_totals",
    "distinct_work_days",
    "forecast_series",
    "get_settings",
    "interaction_score",
    "linear_slope",
    "load_records",
    "longest_long_day_streak",
    "percent_change",
    "personal_productivity_score",
    "record_consistency_score",
    "team_burnout_risks",
    "team_daily_productivity_score",
    "total_hours",
    "trend_summary",
    "weekly_buckets",
    "weekly_productivity_score",
    "weekly_score_series",
    "weekly_scores",
    "workload_distribution",
    "workload_score",
    "workload_variance",
]
