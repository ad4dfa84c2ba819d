"""
Application settings and configuration management.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from tubepulse import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging
    log_level: str = Field(default="WARNING")

    # YouTube API (empty key selects web scraping mode)
    youtube_api_key: str = Field(default="")

    # HTTP
    user_agent: str = Field(default=f"tubepulse/{__version__}")
    request_timeout: float = Field(default=30.0)
    interface_language: str = Field(default="ko")

    # Reporting defaults
    default_max_results: int = Field(default=5)
    default_days: int = Field(default=30)
    shorts_detail_budget: int = Field(default=2)

    # Comma-separated video IDs whose recency decisions are always logged
    trace_video_ids: str = Field(default="")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("default_days", "shorts_detail_budget")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Reject negative day windows and detail budgets."""
        if v < 0:
            raise ValueError(f"Value must not be negative, got {v}")
        return v

    @property
    def trace_ids(self) -> frozenset[str]:
        """Parse trace video IDs from the comma-separated setting."""
        return frozenset(
            vid.strip() for vid in self.trace_video_ids.split(",") if vid.strip()
        )

    @property
    def has_api_key(self) -> bool:
        """Check if a YouTube Data API key is configured."""
        return bool(self.youtube_api_key.strip())

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
