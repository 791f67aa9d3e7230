"""EnemyScheduler — advances every enemy by one discrete tick."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from lolo.ai.behaviors import BEHAVIOR_HANDLERS
from lolo.ai.perception import Perception
from lolo.core.enums import Outcome
from lolo.core.models import Vector2
from lolo.core.stage import Stage

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TickResult:
    stage: Stage
    outcome: Outcome = Outcome.NONE
    moved: int = 0


class EnemyScheduler:
    """Collects one proposal per enemy from a single pre-tick Stage, then applies them.

    Resolution policies:
    - A proposal may only target a cell that is free of enemies before the tick.
    - Two proposals for the same cell cancel each other; neither enemy moves.
      The outcome is therefore independent of enemy ordering.
    - After the moves: a pursuer on the player's cell is CAUGHT, otherwise any
      line-sight enemy with a clear view is ZAPPED.
    """

    __slots__ = ()

    def tick(self, stage: Stage) -> TickResult:
        proposals: dict[int, Vector2] = {}
        for idx, enemy in enumerate(stage.enemies):
            dest = BEHAVIOR_HANDLERS[enemy.kind](enemy, stage)
            if dest is not None:
                proposals[idx] = dest

        claims = Counter(proposals.values())
        moves = {idx: dest for idx, dest in proposals.items() if claims[dest] == 1}
        if len(moves) != len(proposals):
            logger.debug("Contested cells, holding: %s",
                         sorted({d for d in proposals.values() if claims[d] > 1}, key=lambda v: (v.y, v.x)))

        working = stage
        if moves:
            working = stage.clone()
            for idx, dest in moves.items():
                working.enemies[idx].pos = dest

        if Perception.pursuers_on_player(working):
            return TickResult(working, Outcome.CAUGHT, len(moves))
        if Perception.player_in_sight(working):
            return TickResult(working, Outcome.ZAPPED, len(moves))
        return TickResult(working, Outcome.NONE, len(moves))
