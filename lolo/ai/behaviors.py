"""Per-kind enemy behaviours, dispatched by EnemyKind.

Each handler looks at one enemy and the pre-tick Stage and returns the cell
it wants to step into, or None to stay put. Handlers never mutate the
Stage; the EnemyScheduler applies the proposals.

  LINE_SIGHT → never moves (its threat is the sight check)
  PURSUER    → dormant until woken, then greedy orthogonal chase
  PASSIVE    → never moves
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from lolo.core.enums import EnemyKind
from lolo.core.models import Vector2

if TYPE_CHECKING:
    from lolo.core.models import Enemy
    from lolo.core.stage import Stage

BehaviorHandler = Callable[["Enemy", "Stage"], "Vector2 | None"]


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def chase_candidates(origin: Vector2, target: Vector2) -> list[Vector2]:
    """Unit steps toward *target*, larger-delta axis first.

    Equal deltas prefer the horizontal step. Zero-length steps are dropped,
    so a target in the same row or column yields a single candidate.
    """
    dx = target.x - origin.x
    dy = target.y - origin.y
    horizontal = Vector2(_sign(dx), 0)
    vertical = Vector2(0, _sign(dy))
    ordered = [horizontal, vertical] if abs(dx) >= abs(dy) else [vertical, horizontal]
    return [step for step in ordered if step.is_unit]


def pursue(enemy: Enemy, stage: Stage) -> Vector2 | None:
    if not enemy.awake:
        return None
    grid = stage.grid
    for step in chase_candidates(enemy.pos, stage.player):
        dest = enemy.pos + step
        if grid.is_passable(dest) and stage.entity_at(dest) is None:
            return dest
    return None


def hold(enemy: Enemy, stage: Stage) -> Vector2 | None:
    return None


BEHAVIOR_HANDLERS: dict[EnemyKind, BehaviorHandler] = {
    EnemyKind.LINE_SIGHT: hold,
    EnemyKind.PURSUER: pursue,
    EnemyKind.PASSIVE: hold,
}

_unhandled = set(EnemyKind) - BEHAVIOR_HANDLERS.keys()
if _unhandled:
    raise RuntimeError(f"No behaviour registered for {sorted(k.name for k in _unhandled)}")
