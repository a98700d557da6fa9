"""Frame-driven timers.

Timer state is kept in integer nanoseconds. Frame deltas are converted once
with :func:`to_nanos` and ``tick`` reports *where inside the frame* each
completion happened, so completions of independent timers compare exactly
whatever the frame size.
"""
from __future__ import annotations

from typing import List

NANOS_PER_SECOND = 1_000_000_000


def to_nanos(seconds: float) -> int:
    return round(seconds * NANOS_PER_SECOND)


def to_seconds(nanos: int) -> float:
    return nanos / NANOS_PER_SECOND


class Timer:
    def __init__(self, duration: float, *, repeating: bool = False):
        self.duration_ns = to_nanos(duration)
        if self.duration_ns <= 0:
            raise ValueError("timer duration must be positive")
        self.repeating = repeating
        self.elapsed_ns = 0
        self.running = True
        self.times_finished = 0

    @property
    def duration(self) -> float:
        return to_seconds(self.duration_ns)

    @property
    def elapsed(self) -> float:
        return to_seconds(self.elapsed_ns)

    @property
    def remaining_ns(self) -> int:
        if not self.running:
            return 0
        return max(self.duration_ns - self.elapsed_ns, 0)

    @property
    def remaining(self) -> float:
        return to_seconds(self.remaining_ns)

    @property
    def finished(self) -> bool:
        return not self.repeating and not self.running

    def expiry_offset(self, dt_ns: int) -> int | None:
        """Offset within a frame of ``dt_ns`` at which a one-shot timer expires, if it does."""
        if not self.running:
            return None
        remaining = self.duration_ns - self.elapsed_ns
        return remaining if remaining <= dt_ns else None

    def tick(self, dt_ns: int, *, limit: int | None = None) -> List[int]:
        """Advance by ``dt_ns`` and return the in-frame offsets of each completion.

        ``limit`` caps how many offsets are reported; further completions of a
        repeating timer are still counted so its phase stays correct.
        """
        if dt_ns < 0:
            raise ValueError("frame delta must be non-negative")
        if not self.running:
            return []
        offsets: List[int] = []
        consumed = 0
        left = dt_ns
        while self.running and self.duration_ns - self.elapsed_ns <= left:
            step = self.duration_ns - self.elapsed_ns
            if self.repeating and limit is not None and len(offsets) >= limit:
                left -= step
                skipped, self.elapsed_ns = divmod(left, self.duration_ns)
                self.times_finished += 1 + skipped
                return offsets
            consumed += step
            left -= step
            offsets.append(consumed)
            self.times_finished += 1
            if self.repeating:
                self.elapsed_ns = 0
            else:
                self.elapsed_ns = self.duration_ns
                self.running = False
        if self.running:
            self.elapsed_ns += left
        return offsets

    def stop(self):
        self.running = False
