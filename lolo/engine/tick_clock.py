"""TickClock — turns elapsed host time into a count of due enemy ticks.

The clock never reads wall time itself; the host feeds it deltas. That keeps
the engine deterministic and lets tests replay any timing exactly.
"""

from __future__ import annotations


class TickClock:
    """Fixed-interval accumulator."""

    __slots__ = ("_interval_ms", "_accumulated_ms")

    def __init__(self, interval_ms: float = 300.0) -> None:
        if interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_ms}")
        self._interval_ms = float(interval_ms)
        self._accumulated_ms = 0.0

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @property
    def pending_ms(self) -> float:
        """Time accumulated toward the next tick."""
        return self._accumulated_ms

    def advance(self, elapsed_ms: float) -> int:
        """Add *elapsed_ms* and return how many ticks became due."""
        if elapsed_ms < 0:
            raise ValueError(f"Elapsed time cannot be negative, got {elapsed_ms}")
        self._accumulated_ms += elapsed_ms
        due = int(self._accumulated_ms // self._interval_ms)
        self._accumulated_ms -= due * self._interval_ms
        return due

    def cancel_pending(self) -> None:
        """Withdraw the partially accumulated tick."""
        self._accumulated_ms = 0.0
