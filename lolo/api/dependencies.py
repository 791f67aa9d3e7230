"""FastAPI dependency injection — provides the GameManager singleton."""

from __future__ import annotations

from lolo.api.game_manager import GameManager

_game_manager: GameManager | None = None


def set_game_manager(manager: GameManager | None) -> None:
    global _game_manager
    _game_manager = manager


def get_game_manager() -> GameManager:
    if _game_manager is None:
        raise RuntimeError("GameManager not initialized — server not started correctly.")
    return _game_manager
