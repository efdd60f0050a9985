"""Configuration management for the coin chart bot."""

from __future__ import annotations

from datetime import timedelta, timezone, tzinfo
from typing import Literal
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    json_logs: bool = Field(default=False, description="Render log lines as JSON")

    # Binance spot API (klines are public, no key needed)
    binance_rest_url: str = Field(default="https://api.binance.com")
    rest_timeout_sec: float = Field(default=30.0)
    rest_max_attempts: int = Field(default=6)

    # Chat command defaults
    default_symbol: str = Field(default="BTCJPY")
    default_span_minutes: int = Field(default=180)

    # ------------------------------------------------------------------
    # Chart time zone
    #
    # Tick snapping (10 minutes / hour / midnight) and the tick labels are
    # computed in this zone. The default is a fixed UTC+9 offset; set
    # CHART_TIMEZONE to an IANA name (e.g. Europe/Berlin) to override.
    # ------------------------------------------------------------------
    chart_utc_offset_minutes: int = Field(default=540)
    chart_timezone: str | None = Field(
        default=None,
        description="IANA zone name; takes precedence over chart_utc_offset_minutes",
    )

    @property
    def chart_tzinfo(self) -> tzinfo:
        """Resolve the zone used for the time axis."""
        if self.chart_timezone:
            try:
                return ZoneInfo(self.chart_timezone)
            except Exception as exc:
                raise ValueError(f"Invalid chart timezone: {self.chart_timezone}") from exc
        return timezone(timedelta(minutes=self.chart_utc_offset_minutes))


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
