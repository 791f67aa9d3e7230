"""Grid / tile system."""

from __future__ import annotations

from lolo.core.enums import Tile
from lolo.core.models import Vector2

# Bridge stays impassable: it exists in the tile set only for level art.
PASSABLE_TILES = frozenset({Tile.EMPTY, Tile.COLLECTIBLE, Tile.GOAL_OPEN})

SIGHT_BLOCKING_TILES = frozenset({
    Tile.WALL, Tile.BLOCK, Tile.TREE, Tile.STONE, Tile.CHEST, Tile.GATE_CLOSED,
})


def is_passable(tile: Tile) -> bool:
    return tile in PASSABLE_TILES


def is_sight_blocking(tile: Tile) -> bool:
    return tile in SIGHT_BLOCKING_TILES


class Grid:
    """2D tile grid backed by a flat list. Shape is fixed, content is mutable."""

    __slots__ = ("width", "height", "_tiles")

    def __init__(self, width: int, height: int, default: Tile = Tile.EMPTY) -> None:
        self.width = width
        self.height = height
        self._tiles: list[Tile] = [default] * (width * height)

    @classmethod
    def from_rows(cls, rows: list[list[Tile]]) -> Grid:
        height = len(rows)
        width = len(rows[0]) if rows else 0
        grid = cls(width, height)
        grid._tiles = [tile for row in rows for tile in row]
        return grid

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def get(self, pos: Vector2) -> Tile:
        if not self.in_bounds(pos):
            return Tile.WALL
        return self._tiles[self._idx(pos.x, pos.y)]

    def set(self, pos: Vector2, tile: Tile) -> None:
        if self.in_bounds(pos):
            self._tiles[self._idx(pos.x, pos.y)] = tile

    def is_passable(self, pos: Vector2) -> bool:
        return self.in_bounds(pos) and is_passable(self.get(pos))

    # -- fast raw-coordinate access --

    def in_bounds_xy(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # -- whole-grid queries --

    def count(self, tile: Tile) -> int:
        return self._tiles.count(tile)

    def replace_all(self, old: Tile, new: Tile) -> int:
        """Swap every *old* tile for *new*. Returns the number of cells changed."""
        changed = 0
        for i, tile in enumerate(self._tiles):
            if tile == old:
                self._tiles[i] = new
                changed += 1
        return changed

    def rows(self) -> list[list[Tile]]:
        w = self.width
        return [self._tiles[y * w:(y + 1) * w] for y in range(self.height)]

    # -- line-of-sight (axis aligned) --

    def has_line_of_sight(self, a: Vector2, b: Vector2) -> bool:
        """Check for a clear straight row/column line between *a* and *b*.

        Diagonal pairs and identical cells never have sight. Every cell
        strictly between the endpoints must be on the grid and transparent.
        Entities are ignored, only tiles matter.
        """
        if (a.x == b.x) == (a.y == b.y):
            return False
        dx = (b.x > a.x) - (b.x < a.x)
        dy = (b.y > a.y) - (b.y < a.y)
        cx, cy = a.x + dx, a.y + dy
        while cx != b.x or cy != b.y:
            if not self.in_bounds_xy(cx, cy):
                return False
            if is_sight_blocking(self._tiles[cy * self.width + cx]):
                return False
            cx += dx
            cy += dy
        return True

    # -- copy / compare --

    def copy(self) -> Grid:
        new = Grid.__new__(Grid)
        new.width = self.width
        new.height = self.height
        new._tiles = list(self._tiles)
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._tiles == other._tiles
        )
