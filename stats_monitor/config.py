"""Fixed parameters of the statistics monitor."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MonitorSettings(BaseModel):
    """Every knob the monitor has. The process only ever uses DEFAULT_SETTINGS."""

    model_config = ConfigDict(frozen=True)

    # Endpoint
    stats_url: str = Field(default="http://srv.msk01.gigacorp.local/_stats", description="Statistics endpoint")
    user_agent: str = Field(default="GigaCorp Stats Monitor", description="User-Agent sent with each poll")

    # Cadence
    poll_interval_seconds: float = Field(default=5.0, gt=0, description="Seconds between ticks")
    http_timeout_seconds: float = Field(default=3.0, gt=0, description="Per-request timeout")
    error_threshold: int = Field(default=3, ge=1, description="Consecutive failures before reporting")

    # Thresholds (strict greater-than)
    load_average_max: float = Field(default=30.0, description="Load average ceiling")
    memory_usage_max: float = Field(default=0.80, description="Memory used/total ceiling")
    disk_usage_max: float = Field(default=0.90, description="Disk used/total ceiling")
    network_usage_max: float = Field(default=0.90, description="Network used/capacity ceiling")

    # Payload
    max_line_bytes: int = Field(default=1 << 20, gt=0, description="Longest accepted payload line")

    @model_validator(mode="after")
    def _timeout_shorter_than_interval(self) -> "MonitorSettings":
        if self.http_timeout_seconds >= self.poll_interval_seconds:
            raise ValueError(
                f"http_timeout_seconds ({self.http_timeout_seconds}) must be shorter than "
                f"poll_interval_seconds ({self.poll_interval_seconds})"
            )
        return self


DEFAULT_SETTINGS = MonitorSettings()
