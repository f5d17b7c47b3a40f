from __future__ import annotations

import pytest

from stats_monitor.ticker import Ticker


class _FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.mark.asyncio
async def test_ticker_waits_out_the_rest_of_the_interval() -> None:
    clock = _FakeClock()
    ticker = Ticker(5.0, clock=clock, sleep=clock.sleep)

    clock.now += 1.5  # poll took 1.5s
    await ticker.wait()
    clock.now += 0.25
    await ticker.wait()

    assert clock.sleeps == [3.5, 4.75]
    assert clock.now == 10.0


@pytest.mark.asyncio
async def test_ticker_fires_immediately_after_overrun_and_drops_missed_ticks() -> None:
    clock = _FakeClock()
    ticker = Ticker(5.0, clock=clock, sleep=clock.sleep)

    clock.now = 12.0  # ticks at 5 and 10 were missed
    await ticker.wait()
    assert clock.sleeps == []

    await ticker.wait()
    assert clock.sleeps == [3.0]
    assert clock.now == 15.0


def test_ticker_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        Ticker(0)
