"""StageController — owns the authoritative Stage and the game state machine.

  PLAYING → LOST     any lethal contact (zapped, caught, stepped on an enemy)
  PLAYING → WON      stage cleared
  PLAYING → PLAYING  ordinary step, gate progress or quiet tick

LOST and WON are terminal for the current stage: moves and ticks are ignored
until a reset or advance reloads a level from its description.

Calls are expected to be serialized by the host; the controller holds no lock.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from lolo.actions.base import ActionProposal
from lolo.actions.move import MoveAction
from lolo.config import GameConfig
from lolo.core.enums import ActionType, GameState, Outcome
from lolo.core.errors import InvalidRequest
from lolo.core.levels import LEVELS, build_level
from lolo.core.snapshot import StageSnapshot
from lolo.engine.enemy_scheduler import EnemyScheduler
from lolo.engine.tick_clock import TickClock
from lolo.utils.event_log import EventLog, SimEvent

if TYPE_CHECKING:
    from lolo.core.stage import Stage
    from lolo.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)

START_MESSAGE = "Collect all hearts to open the chests."

OUTCOME_MESSAGES: dict[Outcome, str] = {
    Outcome.ALL_COLLECTED: "No hearts left. The chests are open!",
    Outcome.GATE_OPENED: "A gate opened in the wall! Go there to clear the stage.",
    Outcome.CLEARED: "Stage cleared! Advance to the next stage.",
    Outcome.ZAPPED: "Zapped by Medusa! Reset to retry.",
    Outcome.CAUGHT: "You were caught! Reset to retry.",
    Outcome.STEPPED_ON_ENEMY: "Stepped onto an enemy! Reset to retry.",
}

_OUTCOME_CATEGORY: dict[Outcome, str] = {
    Outcome.ALL_COLLECTED: "unlock",
    Outcome.GATE_OPENED: "progress",
    Outcome.CLEARED: "victory",
    Outcome.ZAPPED: "defeat",
    Outcome.CAUGHT: "defeat",
    Outcome.STEPPED_ON_ENEMY: "defeat",
}


class StageController:
    """Translates requests into resolver/scheduler calls and signals into game state."""

    __slots__ = (
        "_config",
        "_levels",
        "_level_index",
        "_stage",
        "_state",
        "_message",
        "_tick",
        "_last_outcome",
        "_last_accepted",
        "_clock",
        "_scheduler",
        "_event_log",
        "_recorder",
        "_snapshot",
    )

    def __init__(
        self,
        config: GameConfig | None = None,
        levels: tuple[tuple[str, tuple[str, ...]], ...] = LEVELS,
        event_log: EventLog | None = None,
        recorder: ReplayRecorder | None = None,
    ) -> None:
        if not levels:
            raise InvalidRequest("At least one level is required")
        self._config = config or GameConfig()
        self._levels = levels
        self._clock = TickClock(self._config.tick_interval_ms)
        self._scheduler = EnemyScheduler()
        self._event_log = event_log if event_log is not None else EventLog()
        self._recorder = recorder
        self._snapshot: StageSnapshot | None = None
        self._load(self._config.start_level)
        if self._recorder is not None:
            self._recorder.record_start(self.snapshot())

    # -- public properties --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def message(self) -> str:
        return self._message

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def level_index(self) -> int:
        return self._level_index

    @property
    def level_count(self) -> int:
        return len(self._levels)

    @property
    def level_names(self) -> list[str]:
        return [name for name, _rows in self._levels]

    @property
    def last_outcome(self) -> Outcome:
        return self._last_outcome

    @property
    def last_accepted(self) -> bool:
        """Whether the most recent request changed the stage."""
        return self._last_accepted

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def clock(self) -> TickClock:
        return self._clock

    # -- requests --

    def move(self, direction: Any) -> StageSnapshot:
        return self.handle(ActionProposal.move(direction))

    def tick(self) -> StageSnapshot:
        return self.handle(ActionProposal(verb=ActionType.TICK))

    def reset(self, level_index: int | None = None) -> StageSnapshot:
        return self.handle(ActionProposal(verb=ActionType.RESET, level_index=level_index))

    def advance(self) -> StageSnapshot:
        return self.handle(ActionProposal(verb=ActionType.ADVANCE))

    def pulse(self, elapsed_ms: float) -> int:
        """Feed host time to the tick clock and run the ticks that fell due.

        Returns the number of ticks actually applied.
        """
        due = min(self._clock.advance(elapsed_ms), self._config.max_ticks_per_pulse)
        ran = 0
        for _ in range(due):
            if self._state != GameState.PLAYING:
                self._clock.cancel_pending()
                break
            self.tick()
            ran += 1
        return ran

    def handle(self, proposal: ActionProposal) -> StageSnapshot:
        """Apply one request and return the resulting read-only snapshot.

        A request that changes nothing hands back the identical snapshot object.
        """
        accepted = False
        outcome = Outcome.NONE

        match proposal.verb:
            case ActionType.MOVE:
                if self._state != GameState.PLAYING:
                    logger.debug("Ignoring %r: stage is %s", proposal, self._state.name)
                else:
                    result = MoveAction.resolve(self._stage, proposal.direction)
                    accepted = result.accepted
                    outcome = result.outcome
                    if result.accepted:
                        self._swap(result.stage)
                        if result.collected:
                            self._emit("collect", f"Heart collected at {result.stage.player}, "
                                                  f"{result.stage.collectibles_left()} left")
                    self._apply_outcome(outcome)

            case ActionType.TICK:
                if self._state != GameState.PLAYING:
                    logger.debug("Ignoring tick: stage is %s", self._state.name)
                else:
                    result = self._scheduler.tick(self._stage)
                    accepted = True
                    outcome = result.outcome
                    self._tick += 1
                    self._swap(result.stage)
                    self._snapshot = None
                    self._apply_outcome(outcome)

            case ActionType.RESET:
                index = self._level_index if proposal.level_index is None else proposal.level_index
                self._load(index)
                accepted = True

            case ActionType.ADVANCE:
                self._load((self._level_index + 1) % len(self._levels))
                accepted = True

        self._last_outcome = outcome
        self._last_accepted = accepted
        snapshot = self.snapshot()
        if self._recorder is not None:
            self._recorder.record(proposal, accepted, outcome, snapshot)
        return snapshot

    def snapshot(self) -> StageSnapshot:
        if self._snapshot is None:
            self._snapshot = StageSnapshot.from_stage(
                self._stage,
                tick=self._tick,
                level_index=self._level_index,
                state=self._state,
                message=self._message,
            )
        return self._snapshot

    # -- internals --

    def _load(self, index: int) -> None:
        stage = build_level(index, self._levels, self._config.grid_width, self._config.grid_height)
        self._level_index = index
        self._stage = stage
        self._state = GameState.PLAYING
        self._message = START_MESSAGE
        self._tick = 0
        self._last_outcome = Outcome.NONE
        self._last_accepted = False
        self._clock.cancel_pending()
        self._snapshot = None
        # Tick numbering restarts, so events of the previous attempt must go
        self._event_log.clear()
        logger.info("Loaded level %d (%s)", index, stage.name)
        self._emit("level", f"{stage.name} started")

    def _swap(self, stage: Stage) -> None:
        if stage is not self._stage:
            self._stage = stage
            self._snapshot = None

    def _apply_outcome(self, outcome: Outcome) -> None:
        if outcome == Outcome.NONE:
            return
        self._message = OUTCOME_MESSAGES[outcome]
        if outcome.lethal:
            self._state = GameState.LOST
        elif outcome == Outcome.CLEARED:
            self._state = GameState.WON
        self._snapshot = None
        logger.info("%s on %s at tick %d → %s", outcome.name, self._stage.name,
                    self._tick, self._state.name)
        self._emit(_OUTCOME_CATEGORY[outcome], self._message)

    def _emit(self, category: str, message: str) -> None:
        self._event_log.append(SimEvent(
            tick=self._tick,
            category=category,
            message=message,
            level_index=self._level_index,
        ))
