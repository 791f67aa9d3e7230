"""Immutable, read-only view of a Stage handed to the host after each request."""

from __future__ import annotations

import struct
from dataclasses import dataclass

import xxhash

from lolo.core.enums import EnemyKind, GameState, Tile
from lolo.core.models import Vector2
from lolo.core.stage import Stage

_TILE_CHARS: dict[Tile, str] = {
    Tile.EMPTY: ".",
    Tile.WALL: "W",
    Tile.BLOCK: "B",
    Tile.COLLECTIBLE: "H",
    Tile.GATE_CLOSED: "G",
    Tile.GOAL_OPEN: "O",
    Tile.STONE: "R",
    Tile.TREE: "T",
    Tile.WATER: "A",
    Tile.BRIDGE: "D",
    Tile.CHEST: "C",
}

_ENEMY_CHARS: dict[EnemyKind, str] = {
    EnemyKind.PASSIVE: "S",
    EnemyKind.LINE_SIGHT: "M",
    EnemyKind.PURSUER: "K",
}


@dataclass(frozen=True, slots=True)
class EnemyView:
    kind: EnemyKind
    pos: Vector2
    awake: bool


@dataclass(frozen=True, slots=True)
class StageSnapshot:
    """Frozen copy of the observable game state.

    Shares nothing with the live Stage, so it can be handed to another
    thread or serialized while the controller keeps mutating.
    """

    tick: int
    level_index: int
    name: str
    width: int
    height: int
    tiles: tuple[tuple[Tile, ...], ...]
    player: Vector2
    enemies: tuple[EnemyView, ...]
    gate: Vector2 | None
    gate_opened: bool
    collectibles_left: int
    state: GameState
    message: str

    @classmethod
    def from_stage(
        cls,
        stage: Stage,
        *,
        tick: int = 0,
        level_index: int = 0,
        state: GameState = GameState.PLAYING,
        message: str = "",
    ) -> StageSnapshot:
        return cls(
            tick=tick,
            level_index=level_index,
            name=stage.name,
            width=stage.grid.width,
            height=stage.grid.height,
            tiles=tuple(tuple(row) for row in stage.grid.rows()),
            player=stage.player,
            enemies=tuple(EnemyView(e.kind, e.pos, e.awake) for e in stage.enemies),
            gate=stage.gate,
            gate_opened=stage.gate_opened,
            collectibles_left=stage.collectibles_left(),
            state=state,
            message=message,
        )

    def tile_at(self, pos: Vector2) -> Tile:
        return self.tiles[pos.y][pos.x]

    def fingerprint(self) -> str:
        """xxhash64 digest of board, entities and gate (tick and message excluded)."""
        h = xxhash.xxh64()
        h.update(struct.pack("<ii", self.width, self.height))
        h.update(bytes(int(t) for row in self.tiles for t in row))
        h.update(struct.pack("<ii", self.player.x, self.player.y))
        for e in self.enemies:
            h.update(struct.pack("<iii?", int(e.kind), e.pos.x, e.pos.y, e.awake))
        if self.gate is not None:
            h.update(struct.pack("<ii?", self.gate.x, self.gate.y, self.gate_opened))
        h.update(struct.pack("<i", int(self.state)))
        return h.hexdigest()

    def to_ascii(self) -> list[str]:
        """Render the board with the level legend; open goals print as ``O``."""
        rows = [[_TILE_CHARS[t] for t in row] for row in self.tiles]
        if self.gate is not None and not self.gate_opened:
            rows[self.gate.y][self.gate.x] = "E"
        for e in self.enemies:
            rows[e.pos.y][e.pos.x] = _ENEMY_CHARS[e.kind]
        rows[self.player.y][self.player.x] = "P"
        return ["".join(r) for r in rows]
