"""Turn a raw stats payload into a list of numbers.

The endpoint answers with one comma-separated line, but blank lines and
surrounding whitespace are tolerated::

    12.5, 1000, 500, 2000, 1000, 100, 10
"""

from __future__ import annotations

import math
import re

from stats_monitor.errors import FailureKind, PollError

_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?)|nan",
    re.IGNORECASE | re.ASCII,
)
_HEX_NUMBER_RE = re.compile(
    r"[+-]?0x(?:[0-9a-f]+(?:\.[0-9a-f]*)?|\.[0-9a-f]+)p[+-]?\d+",
    re.IGNORECASE | re.ASCII,
)


def normalize_body(raw: bytes, *, max_line_bytes: int = 1 << 20) -> str:
    lines: list[str] = []
    for idx, chunk in enumerate(raw.split(b"\n")):
        if len(chunk) > max_line_bytes:
            raise PollError(FailureKind.READ, f"line {idx + 1} longer than {max_line_bytes} bytes")
        # Undecodable bytes become U+FFFD and fail later as a bad field.
        line = chunk.decode("utf-8", errors="replace").strip()
        if line:
            lines.append(line)
    return "\n".join(lines).strip()


def _parse_number(field: str) -> float:
    if _HEX_NUMBER_RE.fullmatch(field):
        try:
            return float.fromhex(field)
        except OverflowError as e:
            raise PollError(FailureKind.FORMAT, f'parse number "{field}": value out of range') from e
    if not _NUMBER_RE.fullmatch(field):
        raise PollError(FailureKind.FORMAT, f'parse number "{field}": invalid syntax')
    value = float(field)
    if math.isinf(value) and "inf" not in field.lower():
        # e.g. 1e400: representable as text, not as a float64
        raise PollError(FailureKind.FORMAT, f'parse number "{field}": value out of range')
    return value


def parse_csv_numbers(text: str) -> list[float]:
    line = text.split("\n", 1)[0]
    out: list[float] = []
    for part in line.strip().split(","):
        field = part.strip()
        if not field:
            continue
        out.append(_parse_number(field))
    if not out:
        raise PollError(FailureKind.FORMAT, "no numbers parsed")
    return out
