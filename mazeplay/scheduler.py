"""Cancellable tick messages used to pace step-log playback."""

from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple


@dataclass(eq=False)
class TickHandle:
    due: float
    sequence: int
    callback: Callable[[], None] = field(repr=False)
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class TickScheduler:
    """Single-threaded scheduler with a millisecond clock.

    The clock only moves when :meth:`advance` or :meth:`run_until_idle` is
    called, so playback is fully deterministic unless ``realtime`` sleeping
    is requested. Ticks due at the same moment fire in scheduling order.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[Tuple[float, int, TickHandle]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if handle.active)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TickHandle:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        handle = TickHandle(due=self._now + delay_ms, sequence=next(self._sequence), callback=callback)
        heapq.heappush(self._queue, (handle.due, handle.sequence, handle))
        return handle

    def cancel(self, handle: Optional[TickHandle]) -> None:
        if handle is not None and handle.active:
            handle.cancelled = True

    def advance(self, delay_ms: float) -> int:
        """Move the clock forward and fire every tick that falls due; returns the count fired."""

        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        target = self._now + delay_ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            handle = self._pop()
            if handle is None:
                continue
            self._now = max(self._now, handle.due)
            self._fire(handle)
            fired += 1
        self._now = target
        return fired

    def run_until_idle(
        self,
        *,
        realtime: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Fire ticks until none remain, sleeping the real gaps when ``realtime`` is set."""

        fired = 0
        while self._queue:
            handle = self._pop()
            if handle is None:
                continue
            if realtime and handle.due > self._now:
                sleep((handle.due - self._now) / 1000.0)
            self._now = max(self._now, handle.due)
            self._fire(handle)
            fired += 1
        return fired

    def _pop(self) -> Optional[TickHandle]:
        _, _, handle = heapq.heappop(self._queue)
        return handle if handle.active else None

    @staticmethod
    def _fire(handle: TickHandle) -> None:
        handle.fired = True
        handle.callback()


__all__ = ["TickHandle", "TickScheduler"]
