"""Fixed-interval tick gate and its asyncio driver."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from grid_snake.collision import Outcome

if TYPE_CHECKING:
    from grid_snake.engine import GameEngine

logger = logging.getLogger(__name__)

_EPSILON = 1e-9


class TickScheduler:
    """Repeating timer that admits one simulation step per firing.

    :meth:`tick` is fed elapsed time and reports whether the interval
    completed. Leftover time carries over to the next interval; a delta
    spanning several periods still yields a single firing.
    """

    def __init__(self, period: float = 1.0) -> None:
        if period <= 0:
            raise ValueError("period must be positive.")
        self.period = period
        self.elapsed = 0.0
        self.cancelled = False
        self._last: float | None = None

    def tick(self, delta: float) -> bool:
        """Accumulate *delta* seconds. Returns True when the timer fires."""
        if self.cancelled:
            return False
        self.elapsed += delta
        if self.elapsed < self.period:
            return False
        self.elapsed %= self.period
        # A remainder within rounding of a full period is a whole period.
        if self.period - self.elapsed < self.period * _EPSILON:
            self.elapsed = 0.0
        return True

    def cancel(self) -> None:
        """Stop the scheduler permanently."""
        self.cancelled = True

    async def next_firing(self) -> bool:
        """Sleep until the timer fires. Returns False once cancelled."""
        if self._last is None:
            self._last = time.monotonic()
        while not self.cancelled:
            await asyncio.sleep(max(self.period - self.elapsed, 0.0))
            now = time.monotonic()
            fired = self.tick(now - self._last)
            self._last = now
            if fired:
                return True
        return False

    async def run(
        self,
        engine: GameEngine,
        on_tick: Callable[[dict], object] | None = None,
    ) -> Outcome:
        """Step *engine* once per period until it reports TERMINAL.

        *on_tick* receives the state after every admitted step and may be a
        coroutine function.
        """
        while await self.next_firing():
            outcome = engine.step()
            if on_tick is not None:
                result = on_tick(engine.get_state())
                if asyncio.iscoroutine(result):
                    await result
            if outcome is Outcome.TERMINAL:
                self.cancel()
                logger.info("Scheduler stopped after tick %d.", engine.tick)
                return outcome
        return Outcome.TERMINAL if engine.game_over else Outcome.CONTINUE
