"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a play session."""

    # Board
    grid_width: int = 13
    grid_height: int = 13

    # Levels
    start_level: int = 0

    # Timing
    tick_interval_ms: float = 300.0
    max_ticks_per_pulse: int = 10     # Catch-up cap when the host stalls

    # Host
    host: str = "127.0.0.1"
    port: int = 8000
    host_poll_seconds: float = 0.01   # Background thread sleep between clock reads

    # Logging
    log_level: str = "INFO"
    replay_file: str = "replay.json"
