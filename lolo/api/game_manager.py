"""GameManager — host wrapper that pulses enemy ticks on a background thread.

Every call into the StageController goes through one lock, so at most one
Stage mutation is in flight whether it comes from an HTTP request or the
tick thread. Readers get immutable StageSnapshots.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Any

from lolo.core.enums import Outcome
from lolo.core.levels import LEVELS
from lolo.engine.stage_controller import StageController

if TYPE_CHECKING:
    from lolo.config import GameConfig
    from lolo.core.snapshot import StageSnapshot
    from lolo.utils.event_log import EventLog

logger = logging.getLogger(__name__)


class GameManager:
    """Owns the controller plus the tick thread's lifecycle.

    Provides thread-safe access to:
      - latest snapshot
      - event log (lock-guarded deque)
      - player requests (move / reset / advance)
      - tick control (start / pause / resume / manual tick)
    """

    def __init__(
        self,
        config: GameConfig,
        levels: tuple[tuple[str, tuple[str, ...]], ...] = LEVELS,
    ) -> None:
        self._config = config
        self.config = config
        self._lock = threading.Lock()
        self._controller = StageController(config, levels)

        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._stop_requested = threading.Event()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def event_log(self) -> EventLog:
        return self._controller.event_log

    @property
    def level_names(self) -> list[str]:
        return self._controller.level_names

    # -- snapshot access --

    def get_snapshot(self) -> StageSnapshot:
        with self._lock:
            return self._controller.snapshot()

    # -- player requests --

    def move(self, direction: Any) -> tuple[StageSnapshot, bool, Outcome]:
        """Apply a step. Raises InvalidRequest for a malformed direction."""
        with self._lock:
            snapshot = self._controller.move(direction)
            return snapshot, self._controller.last_accepted, self._controller.last_outcome

    def tick(self) -> StageSnapshot:
        """Run exactly one enemy tick, independent of the timer."""
        with self._lock:
            return self._controller.tick()

    def reset(self, level_index: int | None = None) -> StageSnapshot:
        with self._lock:
            return self._controller.reset(level_index)

    def advance(self) -> StageSnapshot:
        with self._lock:
            return self._controller.advance()

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="tick-loop", daemon=True)
        self._thread.start()
        logger.info("GameManager started (tick interval=%.0fms)", self._config.tick_interval_ms)

    def pause(self) -> None:
        """Stop pulsing and withdraw the partially accumulated tick."""
        self._paused.set()
        with self._lock:
            self._controller.clock.cancel_pending()
        logger.info("GameManager paused")

    def resume(self) -> None:
        self._paused.clear()
        logger.info("GameManager resumed")

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("GameManager stopped.")

    # -- internals --

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Tick thread started.")
        last = time.perf_counter()

        while not self._stop_requested.is_set():
            time.sleep(self._config.host_poll_seconds)
            now = time.perf_counter()
            elapsed_ms = (now - last) * 1000.0
            last = now

            if self._paused.is_set():
                continue

            try:
                with self._lock:
                    self._controller.pulse(elapsed_ms)
            except Exception:
                logger.exception("Tick pulse failed")

        self._running.clear()
        logger.info("Tick thread exited.")
