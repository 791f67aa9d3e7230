"""Perception — which enemies can currently reach the player.

All methods are stateless and read the Stage without mutating it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lolo.core.enums import EnemyKind

if TYPE_CHECKING:
    from lolo.core.models import Enemy
    from lolo.core.stage import Stage


class Perception:
    """Stateless sight utilities."""

    __slots__ = ()

    @staticmethod
    def line_sight_threats(stage: Stage) -> list[Enemy]:
        """Return awake line-sight enemies with a clear row/column to the player."""
        grid = stage.grid
        target = stage.player
        return [
            e for e in stage.enemies
            if e.kind == EnemyKind.LINE_SIGHT and e.awake
            and grid.has_line_of_sight(e.pos, target)
        ]

    @staticmethod
    def player_in_sight(stage: Stage) -> bool:
        return bool(Perception.line_sight_threats(stage))

    @staticmethod
    def pursuers_on_player(stage: Stage) -> list[Enemy]:
        return [
            e for e in stage.enemies
            if e.kind == EnemyKind.PURSUER and e.awake and e.pos == stage.player
        ]
