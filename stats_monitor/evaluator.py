from __future__ import annotations

import math
from decimal import Decimal

from stats_monitor.config import DEFAULT_SETTINGS, MonitorSettings
from stats_monitor.models import RawMetrics

BYTES_PER_MB = 1024 * 1024
BYTES_PER_MBIT = 1_000_000
INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)


def format_float(value: float) -> str:
    """Shortest text that parses back to ``value``, never in exponent form."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def round_half_away(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        # Saturate like a 64-bit integer conversion would.
        return INT64_MAX if value > 0 else INT64_MIN
    if value >= 0:
        return int(value + 0.5)
    return int(value - 0.5)


def _usage_ratio(used: int, total: int) -> float | None:
    if total <= 0:
        return None
    return float(used) / float(total)


def evaluate(metrics: RawMetrics, settings: MonitorSettings = DEFAULT_SETTINGS) -> list[str]:
    alerts: list[str] = []

    if metrics.load_average > settings.load_average_max:
        alerts.append(f"Load Average is too high: {format_float(metrics.load_average)}")

    mem_ratio = _usage_ratio(metrics.memory_used, metrics.memory_total)
    if mem_ratio is not None and mem_ratio > settings.memory_usage_max:
        alerts.append(f"Memory usage too high: {round_half_away(100.0 * mem_ratio)}%")

    disk_ratio = _usage_ratio(metrics.disk_used, metrics.disk_total)
    if disk_ratio is not None and disk_ratio > settings.disk_usage_max:
        free_bytes = max(0, metrics.disk_total - metrics.disk_used)
        alerts.append(f"Free disk space is too low: {free_bytes // BYTES_PER_MB} Mb left")

    net_ratio = _usage_ratio(metrics.network_used, metrics.network_capacity)
    if net_ratio is not None and net_ratio > settings.network_usage_max:
        free_bps = max(0, metrics.network_capacity - metrics.network_used)
        # Bytes/sec divided straight down, without the x8 to bits.
        free_mbit = free_bps / BYTES_PER_MBIT
        alerts.append(f"Network bandwidth usage high: {format_float(free_mbit)} Mbit/s available")

    return alerts
