from __future__ import annotations

import argparse
import asyncio
import os
import time
from typing import Callable

import httpx
import structlog

from stats_monitor.config import DEFAULT_SETTINGS, MonitorSettings
from stats_monitor.errors import PollError
from stats_monitor.evaluator import evaluate
from stats_monitor.fetcher import fetch_stats
from stats_monitor.logging_setup import configure_logging
from stats_monitor.models import RawMetrics
from stats_monitor.parsing import normalize_body, parse_csv_numbers
from stats_monitor.ticker import Ticker

logger = structlog.get_logger(__name__)

FETCH_FAILED_MESSAGE = "Unable to fetch server statistic."
MAX_REDIRECTS = 10


def print_line(line: str) -> None:
    print(line, flush=True)


async def poll_once(client: httpx.AsyncClient, settings: MonitorSettings = DEFAULT_SETTINGS) -> list[str]:
    raw = await fetch_stats(client, settings.stats_url, timeout=settings.http_timeout_seconds)
    text = normalize_body(raw, max_line_bytes=settings.max_line_bytes)
    metrics = RawMetrics.from_values(parse_csv_numbers(text))
    return evaluate(metrics, settings)


def update_failure_streak(*, streak: int, poll_ok: bool, error_threshold: int) -> tuple[int, bool]:
    """Return (next_streak, report_now).

    Any success clears the streak. Failures accumulate silently until the
    threshold is reached, which reports once and starts counting again.
    """
    if poll_ok:
        return 0, False

    streak = int(streak) + 1
    if streak >= max(1, int(error_threshold)):
        return 0, True
    return streak, False


def _record_failure(
    settings: MonitorSettings,
    streak: int,
    *,
    kind: str,
    detail: str,
    emit: Callable[[str], None],
) -> int:
    streak, report = update_failure_streak(streak=streak, poll_ok=False, error_threshold=settings.error_threshold)
    logger.info("Poll failed", kind=kind, detail=detail, streak=streak, report=report)
    if report:
        logger.warning("Consecutive poll failures reached threshold", threshold=settings.error_threshold)
        emit(FETCH_FAILED_MESSAGE)
    return streak


async def run_cycle(
    client: httpx.AsyncClient,
    settings: MonitorSettings,
    streak: int,
    *,
    emit: Callable[[str], None] = print_line,
) -> int:
    started = time.perf_counter()
    try:
        alerts = await poll_once(client, settings)
    except PollError as e:
        return _record_failure(settings, streak, kind=e.kind.value, detail=e.detail, emit=emit)
    except Exception as e:
        # Never let one bad cycle end the monitor.
        logger.exception("Unexpected error during poll")
        return _record_failure(settings, streak, kind="unexpected", detail=f"{type(e).__name__}: {e}", emit=emit)

    for line in alerts:
        emit(line)
    streak, _ = update_failure_streak(streak=streak, poll_ok=True, error_threshold=settings.error_threshold)
    logger.debug(
        "Poll complete",
        alerts=len(alerts),
        elapsed_ms=round((time.perf_counter() - started) * 1000.0, 3),
    )
    return streak


async def run_loop(
    settings: MonitorSettings = DEFAULT_SETTINGS,
    *,
    once: bool = False,
    max_cycles: int | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    ticker: Ticker | None = None,
    emit: Callable[[str], None] = print_line,
) -> int:
    if once:
        max_cycles = 1
    ticker = ticker or Ticker(settings.poll_interval_seconds)
    logger.info(
        "Starting stats monitor",
        url=settings.stats_url,
        interval_seconds=settings.poll_interval_seconds,
        timeout_seconds=settings.http_timeout_seconds,
    )

    streak = 0
    cycles = 0
    async with httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.http_timeout_seconds,
        max_redirects=MAX_REDIRECTS,
        transport=transport,
    ) as http_client:
        while True:
            streak = await run_cycle(http_client, settings, streak, emit=emit)
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                return 0
            await ticker.wait()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="GigaCorp server statistics monitor")
    parser.add_argument("--once", action="store_true", help="Run one poll cycle and exit")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "WARNING"),
        help="Diagnostic logging level on stderr (DEBUG, INFO, WARNING, ...)",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        return asyncio.run(run_loop(DEFAULT_SETTINGS, once=bool(args.once)))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
