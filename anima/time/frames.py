# anima/time/frames.py
"""
Frame sources - the boundary to the host's per-frame clock.

Schedulers never keep their own timers: after each completed tick they ask
the source for exactly one more callback.
"""

from __future__ import annotations
from typing import Callable, Dict, Iterable, Optional, Protocol
import time as time_module

FrameCallback = Callable[[float], None]


def perf_counter_ms() -> float:
    """Monotonic milliseconds, for hosts that have no frame timestamp."""
    return time_module.perf_counter() * 1000.0


class FrameSource(Protocol):
    def request(self, callback: FrameCallback) -> int: ...

    def cancel(self, handle: int) -> None: ...


class ManualFrameSource:
    """
    Frame source pumped by the host (or a test) one tick at a time.

    Callbacks requested during a tick fire on the following tick.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self.clock = clock or perf_counter_ms
        self._pending: Dict[int, FrameCallback] = {}
        self._next_id: int = 1

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_id
        self._next_id += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def tick(self, tick: Optional[float] = None) -> int:
        """Fire every pending callback once; returns how many fired."""
        if tick is None:
            tick = self.clock()
        callbacks, self._pending = self._pending, {}
        for callback in callbacks.values():
            callback(tick)
        return len(callbacks)

    def run(self, ticks: Iterable[float]) -> int:
        fired = 0
        for tick in ticks:
            fired += self.tick(tick)
        return fired
