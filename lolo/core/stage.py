"""Stage: the full playable state of one level at one point in time.

A Stage is treated as a value. Resolvers never mutate the Stage they are
handed; they ``clone()`` it, work on the copy and return either the copy or
the untouched original.
"""

from __future__ import annotations

from lolo.core.enums import EnemyKind, Tile
from lolo.core.errors import MalformedLevel
from lolo.core.grid import Grid
from lolo.core.models import Enemy, Vector2


class Stage:
    """Grid + player + enemies + optional gate."""

    __slots__ = ("name", "grid", "player", "enemies", "gate", "gate_opened")

    def __init__(
        self,
        name: str,
        grid: Grid,
        player: Vector2,
        enemies: list[Enemy] | None = None,
        gate: Vector2 | None = None,
        gate_opened: bool = False,
    ) -> None:
        self.name = name
        self.grid = grid
        self.player = player
        self.enemies: list[Enemy] = list(enemies) if enemies else []
        self.gate = gate
        self.gate_opened = gate_opened
        self._validate()

    def _validate(self) -> None:
        seen: set[Vector2] = set()
        for enemy in self.enemies:
            if not self.grid.in_bounds(enemy.pos):
                raise MalformedLevel(self.name, f"enemy {enemy.kind.name} off grid at {enemy.pos}")
            if enemy.pos in seen:
                raise MalformedLevel(self.name, f"two enemies share cell {enemy.pos}")
            seen.add(enemy.pos)
        if not self.grid.in_bounds(self.player):
            raise MalformedLevel(self.name, f"player off grid at {self.player}")
        if self.gate is not None:
            expected = Tile.GOAL_OPEN if self.gate_opened else Tile.WALL
            if self.grid.get(self.gate) != expected:
                raise MalformedLevel(
                    self.name, f"gate at {self.gate} must be {expected.name}")

    # -- queries --

    def entity_at(self, pos: Vector2) -> Enemy | None:
        """Return the enemy occupying *pos*, if any (unique by construction)."""
        for enemy in self.enemies:
            if enemy.pos == pos:
                return enemy
        return None

    def enemies_of(self, kind: EnemyKind) -> list[Enemy]:
        return [e for e in self.enemies if e.kind == kind]

    def collectibles_left(self) -> int:
        return self.grid.count(Tile.COLLECTIBLE)

    # -- copy / compare --

    def clone(self) -> Stage:
        """Fully independent deep copy: no mutable state shared with *self*."""
        new = Stage.__new__(Stage)
        new.name = self.name
        new.grid = self.grid.copy()
        new.player = self.player
        new.enemies = [e.copy() for e in self.enemies]
        new.gate = self.gate
        new.gate_opened = self.gate_opened
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stage):
            return NotImplemented
        return (
            self.name == other.name
            and self.grid == other.grid
            and self.player == other.player
            and self.enemies == other.enemies
            and self.gate == other.gate
            and self.gate_opened == other.gate_opened
        )

    def __repr__(self) -> str:
        return (
            f"Stage({self.name!r}, player={self.player}, enemies={len(self.enemies)}, "
            f"collectibles={self.collectibles_left()}, gate_opened={self.gate_opened})"
        )
