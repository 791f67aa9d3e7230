"""Core data models: Vector2, Enemy."""

from __future__ import annotations

from dataclasses import dataclass

from lolo.core.enums import Direction, EnemyKind


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    @property
    def is_unit(self) -> bool:
        """True for the four orthogonal unit steps."""
        return abs(self.x) + abs(self.y) == 1

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


DIRECTION_OFFSETS: dict[Direction, Vector2] = {
    Direction.NORTH: Vector2(0, -1),
    Direction.EAST: Vector2(1, 0),
    Direction.SOUTH: Vector2(0, 1),
    Direction.WEST: Vector2(-1, 0),
}


@dataclass(slots=True)
class Enemy:
    """A dynamic occupant of the stage, tagged by behaviour kind.

    Position is tracked here, never in the tile grid.
    """

    kind: EnemyKind
    pos: Vector2
    awake: bool = False

    @property
    def lethal_on_contact(self) -> bool:
        """Whether walking into this enemy kills the player."""
        if self.kind == EnemyKind.LINE_SIGHT:
            return True
        return self.kind == EnemyKind.PURSUER and self.awake

    def copy(self) -> Enemy:
        return Enemy(kind=self.kind, pos=self.pos, awake=self.awake)

    def __repr__(self) -> str:
        state = "awake" if self.awake else "dormant"
        return f"Enemy({self.kind.name}@{self.pos}, {state})"
