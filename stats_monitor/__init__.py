"""Poll a host statistics endpoint and print threshold alerts."""

from stats_monitor.config import DEFAULT_SETTINGS, MonitorSettings
from stats_monitor.errors import FailureKind, PollError
from stats_monitor.models import RawMetrics

__all__ = [
    "DEFAULT_SETTINGS",
    "FailureKind",
    "MonitorSettings",
    "PollError",
    "RawMetrics",
]
