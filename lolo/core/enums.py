"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Tile(IntEnum):
    """Static terrain occupying one grid cell."""

    EMPTY = 0
    WALL = 1
    BLOCK = 2
    COLLECTIBLE = 3
    GATE_CLOSED = 4
    GOAL_OPEN = 5
    STONE = 6
    TREE = 7
    WATER = 8
    BRIDGE = 9
    CHEST = 10      # Decorative, impassable and opaque


@unique
class EnemyKind(IntEnum):
    """Closed set of enemy behaviours."""

    LINE_SIGHT = 0  # Medusa: static, zaps along an unobstructed row/column
    PURSUER = 1     # Skull: dormant until every collectible is gone, then chases
    PASSIVE = 2     # Snake: occupies a cell, never moves, never a threat


@unique
class Direction(IntEnum):
    """Cardinal movement directions."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@unique
class ActionType(IntEnum):
    """Requests the stage controller accepts."""

    MOVE = 0
    TICK = 1
    RESET = 2
    ADVANCE = 3


@unique
class GameState(IntEnum):
    """Lifecycle of the current stage."""

    PLAYING = 0
    LOST = 1
    WON = 2


@unique
class Outcome(IntEnum):
    """Signal produced by a single step or tick."""

    NONE = 0
    ALL_COLLECTED = 1
    GATE_OPENED = 2
    CLEARED = 3
    ZAPPED = 4
    CAUGHT = 5
    STEPPED_ON_ENEMY = 6

    @property
    def lethal(self) -> bool:
        return self in (Outcome.ZAPPED, Outcome.CAUGHT, Outcome.STEPPED_ON_ENEMY)
