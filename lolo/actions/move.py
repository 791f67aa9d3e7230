"""MoveAction — validates and applies a single player step.

Works copy-on-write: the incoming Stage is never touched. An accepted step
returns a mutated clone; a rejected one returns the very same object, so
callers can detect rejection by identity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lolo.ai.perception import Perception
from lolo.core.enums import EnemyKind, Outcome, Tile
from lolo.core.models import Vector2
from lolo.core.stage import Stage

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StepResult:
    """Result of one step request."""

    stage: Stage
    outcome: Outcome = Outcome.NONE
    accepted: bool = False
    pushed: bool = False
    collected: bool = False


class MoveAction:
    """Stateless handler for player MOVE requests."""

    @staticmethod
    def resolve(stage: Stage, direction: Vector2) -> StepResult:
        """Apply one orthogonal step to the player.

        *direction* must already be a unit vector (see ``parse_direction``).
        """
        grid = stage.grid
        target = stage.player + direction
        if not grid.in_bounds(target):
            logger.debug("Step %s rejected: %s off grid", direction, target)
            return StepResult(stage)

        tile = grid.get(target)
        if tile == Tile.BLOCK:
            beyond = target + direction
            if not grid.in_bounds(beyond) or grid.get(beyond) != Tile.EMPTY:
                logger.debug("Push rejected: %s is not empty floor", beyond)
                return StepResult(stage)
            if stage.entity_at(beyond) is not None:
                logger.debug("Push rejected: enemy at %s", beyond)
                return StepResult(stage)
            working = stage.clone()
            working.grid.set(beyond, Tile.BLOCK)
            working.grid.set(target, Tile.EMPTY)
            working.player = target
            collected, outcome = MoveAction.after_player_move(working)
            return StepResult(working, outcome, accepted=True, pushed=True, collected=collected)

        if tile == Tile.WALL or not grid.is_passable(target):
            logger.debug("Step rejected: %s is %s", target, tile.name)
            return StepResult(stage)

        enemy = stage.entity_at(target)
        if enemy is not None and enemy.lethal_on_contact:
            logger.debug("Step onto %r at %s is lethal", enemy, target)
            return StepResult(stage, Outcome.STEPPED_ON_ENEMY)

        working = stage.clone()
        working.player = target
        collected, outcome = MoveAction.after_player_move(working)
        return StepResult(working, outcome, accepted=True, collected=collected)

    @staticmethod
    def after_player_move(stage: Stage) -> tuple[bool, Outcome]:
        """Post-move resolution on a working copy.

        Order: collect → line-sight check → goal/gate check. Returns whether
        a collectible was picked up and the single resulting outcome.
        """
        grid = stage.grid
        pos = stage.player
        collected = False
        outcome = Outcome.NONE

        if grid.get(pos) == Tile.COLLECTIBLE:
            grid.set(pos, Tile.EMPTY)
            collected = True
            if stage.collectibles_left() == 0:
                unlock_goals(stage)
                outcome = Outcome.ALL_COLLECTED

        threats = Perception.line_sight_threats(stage)
        if threats:
            logger.debug("Player at %s zapped by %r", pos, threats[0])
            return collected, Outcome.ZAPPED

        if grid.get(pos) == Tile.GOAL_OPEN:
            if stage.gate is not None and not stage.gate_opened:
                grid.set(stage.gate, Tile.GOAL_OPEN)
                stage.gate_opened = True
                logger.info("Gate opened at %s", stage.gate)
                return collected, Outcome.GATE_OPENED
            if stage.gate is None or pos == stage.gate:
                return collected, Outcome.CLEARED

        return collected, outcome


def unlock_goals(stage: Stage) -> None:
    """Flip every closed goal open and wake every pursuer, in one transition."""
    opened = stage.grid.replace_all(Tile.GATE_CLOSED, Tile.GOAL_OPEN)
    woken = 0
    for enemy in stage.enemies:
        if enemy.kind == EnemyKind.PURSUER and not enemy.awake:
            enemy.awake = True
            woken += 1
    logger.info("All collectibles gone: %d goals opened, %d pursuers woke", opened, woken)
