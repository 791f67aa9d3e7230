"""Level loader: compact ASCII descriptions → Stage.

Legend (one character per cell):
  W wall · . empty · B block · R stone · A water · D bridge · H collectible
  G closed goal (opens when every collectible is gone) · C chest · T tree
  S passive enemy · M line-sight enemy · K pursuer · P player start
  E gate (a wall cell that opens into the exit)
Any other character is read as empty floor.
"""

from __future__ import annotations

import logging

from lolo.core.enums import EnemyKind, Tile
from lolo.core.errors import InvalidRequest, MalformedLevel
from lolo.core.grid import Grid
from lolo.core.models import Enemy, Vector2
from lolo.core.stage import Stage

logger = logging.getLogger(__name__)

LEVEL_WIDTH = 13
LEVEL_HEIGHT = 13

_DEFAULT_PLAYER = Vector2(1, 1)

_TILE_TOKENS: dict[str, Tile] = {
    "W": Tile.WALL,
    ".": Tile.EMPTY,
    "B": Tile.BLOCK,
    "R": Tile.STONE,
    "A": Tile.WATER,
    "D": Tile.BRIDGE,
    "H": Tile.COLLECTIBLE,
    "G": Tile.GATE_CLOSED,
    "C": Tile.CHEST,
    "T": Tile.TREE,
}

# token -> (kind, awake at spawn); the cell underneath is empty floor
_ENEMY_TOKENS: dict[str, tuple[EnemyKind, bool]] = {
    "S": (EnemyKind.PASSIVE, False),
    "M": (EnemyKind.LINE_SIGHT, True),
    "K": (EnemyKind.PURSUER, False),
}


def load_level(
    name: str,
    rows: list[str] | tuple[str, ...],
    width: int = LEVEL_WIDTH,
    height: int = LEVEL_HEIGHT,
) -> Stage:
    """Build a fresh Stage from *rows*.

    Raises MalformedLevel unless there are exactly *height* rows of exactly
    *width* characters. If several ``P`` appear the last one in row-major
    order is the start position.
    """
    if len(rows) != height:
        raise MalformedLevel(name, f"expected {height} rows, got {len(rows)}")
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MalformedLevel(name, f"row {y} has {len(row)} cells, expected {width}")

    tiles: list[list[Tile]] = []
    enemies: list[Enemy] = []
    players: list[Vector2] = []
    gate: Vector2 | None = None

    for y, row in enumerate(rows):
        tile_row: list[Tile] = []
        for x, ch in enumerate(row):
            pos = Vector2(x, y)
            if ch in _TILE_TOKENS:
                tile_row.append(_TILE_TOKENS[ch])
            elif ch in _ENEMY_TOKENS:
                kind, awake = _ENEMY_TOKENS[ch]
                enemies.append(Enemy(kind=kind, pos=pos, awake=awake))
                tile_row.append(Tile.EMPTY)
            elif ch == "P":
                players.append(pos)
                tile_row.append(Tile.EMPTY)
            elif ch == "E":
                if gate is not None:
                    raise MalformedLevel(name, f"second gate at {pos}, first at {gate}")
                gate = pos
                tile_row.append(Tile.WALL)
            else:
                tile_row.append(Tile.EMPTY)
        tiles.append(tile_row)

    if not players:
        logger.warning("Level %r has no player start, defaulting to %s", name, _DEFAULT_PLAYER)
        player = _DEFAULT_PLAYER
    else:
        if len(players) > 1:
            logger.warning("Level %r has %d player starts, using the last at %s",
                           name, len(players), players[-1])
        player = players[-1]

    stage = Stage(
        name=name,
        grid=Grid.from_rows(tiles),
        player=player,
        enemies=enemies,
        gate=gate,
    )
    logger.debug("Loaded %r: %d enemies, %d collectibles, gate=%s",
                 name, len(enemies), stage.collectibles_left(), gate)
    return stage


def parse_level_text(
    name: str,
    text: str,
    width: int = LEVEL_WIDTH,
    height: int = LEVEL_HEIGHT,
) -> Stage:
    """Load a plain-text description (one row per line)."""
    rows = text.splitlines()
    # A single trailing blank line is an editor artefact, not a row
    if rows and rows[-1] == "":
        rows.pop()
    return load_level(name, rows, width, height)


# =====================================================================
# Built-in stages
# =====================================================================

LEVELS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Stage 1",
        (
            "WWWWWWWGWWWWW",
            "WRRRRRR.RRTTW",
            "WRTTRH..RRTTW",
            "W.TTRRR.RRRTW",
            "W..TTRR.RRRTW",
            "WP...RR.RRTHW",
            "W......S.R..W",
            "W.TT........W",
            "WTTTT...TT..W",
            "WTTTT...TTT.W",
            "WRTTRC...TT.W",
            "WRRRRRR    .W",
            "WWWWWWWWWWWWW",
        ),
    ),
    (
        "Stage 2",
        (
            "WWWWWWEWWWWWW",
            "W....T.T....W",
            "W.H..T.T..H.W",
            "W....T.T....W",
            "W.TTTT.TTTT.W",
            "W...........W",
            "W..B..G..B..W",
            "W...........W",
            "WM.R.....R.KW",
            "W...........W",
            "W.RR..P..RR.W",
            "W.....S.....W",
            "WWWWWWWWWWWWW",
        ),
    ),
)


def level_count() -> int:
    return len(LEVELS)


def build_level(
    index: int,
    levels: tuple[tuple[str, tuple[str, ...]], ...] = LEVELS,
    width: int = LEVEL_WIDTH,
    height: int = LEVEL_HEIGHT,
) -> Stage:
    """Return a brand-new Stage for level *index* of *levels*."""
    if not 0 <= index < len(levels):
        raise InvalidRequest(f"Level index {index} out of range (0..{len(levels) - 1})")
    name, rows = levels[index]
    return load_level(name, rows, width, height)
