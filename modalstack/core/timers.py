"""Frame-driven one-shot timers.

The game loop advances the scheduler once per frame with the elapsed time
(``update(dt)`` in seconds, matching ``clock.tick() / 1000.0``). Callbacks
whose deadline has been reached run in deadline order, ties broken by
scheduling order. Nothing here blocks or sleeps.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional
import itertools


@dataclass(eq=False)
class Timer:
    """Handle for a scheduled callback."""
    due_ms: float
    callback: Callable[[], None]
    seq: int
    name: str = ""
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


class TimerScheduler:
    def __init__(self, start_ms: float = 0.0):
        self.now_ms: float = start_ms
        self._timers: List[Timer] = []
        self._seq = itertools.count()

    def schedule(self, delay_ms: float, callback: Callable[[], None], name: str = "") -> Timer:
        timer = Timer(self.now_ms + max(0.0, delay_ms), callback, next(self._seq), name)
        self._timers.append(timer)
        return timer

    def cancel(self, timer: Optional[Timer]) -> None:
        if timer is None:
            return
        timer.cancel()
        if timer in self._timers:
            self._timers.remove(timer)

    def pending(self) -> List[Timer]:
        return [t for t in self._timers if t.pending]

    def update(self, dt: float) -> int:
        """Advance by ``dt`` seconds; returns how many callbacks ran."""
        return self.advance(dt * 1000.0)

    def advance(self, delta_ms: float) -> int:
        self.now_ms += max(0.0, delta_ms)
        ran = 0
        # Callbacks may schedule new timers; those due now run in this same pass.
        while True:
            due = [t for t in self._timers if t.pending and t.due_ms <= self.now_ms]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due_ms, t.seq))
            self._timers.remove(timer)
            timer.fired = True
            try:
                timer.callback()
            except Exception as e:
                print(f"Warning: timer {timer.name or timer.seq} failed: {e}")
            ran += 1
        self._timers = [t for t in self._timers if t.pending]
        return ran

    def clear(self) -> None:
        for t in self._timers:
            t.cancel()
        self._timers.clear()

__all__ = ["Timer", "TimerScheduler"]
