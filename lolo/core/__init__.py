"""Core data models and stage representation."""

from lolo.core.enums import ActionType, Direction, EnemyKind, GameState, Outcome, Tile
from lolo.core.errors import InvalidRequest, LoloError, MalformedLevel
from lolo.core.models import Enemy, Vector2
from lolo.core.grid import Grid
from lolo.core.stage import Stage
from lolo.core.snapshot import StageSnapshot

__all__ = [
    "ActionType",
    "Direction",
    "Enemy",
    "EnemyKind",
    "GameState",
    "Grid",
    "InvalidRequest",
    "LoloError",
    "MalformedLevel",
    "Outcome",
    "Stage",
    "StageSnapshot",
    "Tile",
    "Vector2",
]
