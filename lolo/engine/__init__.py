"""Engine layer: enemy scheduler, tick clock, stage controller."""

from lolo.engine.enemy_scheduler import EnemyScheduler, TickResult
from lolo.engine.stage_controller import StageController
from lolo.engine.tick_clock import TickClock

__all__ = ["EnemyScheduler", "StageController", "TickClock", "TickResult"]
