from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable


class Ticker:
    """Fires once per ``interval`` on a fixed grid anchored at creation time.

    A wait that starts after one or more ticks were already due returns
    immediately and the missed ticks are dropped.
    """

    def __init__(
        self,
        interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = float(interval)
        self._clock = clock
        self._sleep = sleep
        self._next_due = clock() + self.interval

    async def wait(self) -> None:
        now = self._clock()
        if now < self._next_due:
            await self._sleep(self._next_due - now)
            self._next_due += self.interval
            return

        behind = now - self._next_due
        self._next_due += self.interval * (int(behind // self.interval) + 1)
