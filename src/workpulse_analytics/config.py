from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyticsSettings(BaseSettings):
    """Analytics engine settings"""

    # Trend Configuration
    trend_strength_scale: float = Field(
        default=10.0,
        gt=0,
        description="Multiplier applied to |slope| before capping strength at 100",
    )
    forecast_horizon_days: int = Field(
        default=7, ge=1, description="Number of future points produced by forecasts"
    )

    # Burnout Configuration
    burnout_window_days: int = Field(
        default=30, ge=1, description="Days of history considered for burnout risk"
    )

    # Work Pattern Configuration
    focus_session_hours: float = Field(
        default=3.0,
        gt=0,
        description="Minimum entry length counted as a focus session",
    )

    # Ranking Configuration
    top_n: int = Field(default=3, ge=1, description="Size of top-performer lists")
    most_collaborative_limit: int = Field(
        default=5, ge=1, description="Number of most collaborative projects reported"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Default CLI log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name"""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    model_config = SettingsConfigDict(
        env_prefix="WORKPULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> AnalyticsSettings:
    """Return the process-wide settings loaded from the environment"""
    return AnalyticsSettings()
