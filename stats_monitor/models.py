from __future__ import annotations

from typing import NamedTuple, Sequence

from stats_monitor.errors import FailureKind, PollError


class RawMetrics(NamedTuple):
    load_average: float
    memory_total: int  # bytes
    memory_used: int  # bytes
    disk_total: int  # bytes
    disk_used: int  # bytes
    network_capacity: int  # bytes/sec
    network_used: int  # bytes/sec

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "RawMetrics":
        expected = len(cls._fields)
        if len(values) != expected:
            raise PollError(
                FailureKind.SHAPE,
                f"invalid fields count: got {len(values)}, want {expected}",
            )
        load_average, *counters = values
        return cls(float(load_average), *(_to_count(v) for v in counters))


def _to_count(value: float) -> int:
    # Counters are whole bytes; fractional parts are dropped.
    try:
        return int(value)
    except (OverflowError, ValueError):
        # inf/nan cannot be a byte count
        return 0
