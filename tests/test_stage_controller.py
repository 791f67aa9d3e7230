"""Tests for the StageController — game state machine, requests and pulses.

Uses StageBench boards so each scenario is readable at a glance.
"""

import json
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.stage_builder import StageBench
from lolo.core.enums import EnemyKind, GameState, Outcome
from lolo.core.errors import InvalidRequest
from lolo.core.models import Vector2
from lolo.engine.stage_controller import OUTCOME_MESSAGES, START_MESSAGE, StageController
from lolo.utils.replay import ReplayRecorder

_GATE_ROOM = (
    "WWEWW",
    "W.G.W",
    "WPH.W",
    "W...W",
    "WK..W",
)

_TWO_ROOMS = (
    ("Room A", ("P.H", "..G")),
    ("Room B", ("H.P", "G..")),
)


class TestInitialState:

    def test_fresh_controller(self):
        bench = StageBench(*_GATE_ROOM)
        snap = bench.snapshot
        assert snap.state == GameState.PLAYING
        assert snap.message == START_MESSAGE
        assert snap.tick == 0
        assert snap.level_index == 0
        assert snap.collectibles_left == 1

    def test_board_renders_with_legend(self):
        bench = StageBench(*_GATE_ROOM)
        assert bench.board() == list(_GATE_ROOM)

    def test_default_levels(self):
        controller = StageController()
        assert controller.level_count >= 2
        assert controller.stage.name == "Stage 1"

    def test_no_levels_rejected(self):
        with pytest.raises(InvalidRequest):
            StageController(levels=())


class TestTransitions:

    def test_zapped_step_loses(self):
        bench = StageBench("M...", "T..P")
        snap = bench.move("up")
        assert snap.state == GameState.LOST
        assert snap.message == OUTCOME_MESSAGES[Outcome.ZAPPED]
        assert snap.player == Vector2(3, 0)
        assert bench.controller.last_outcome == Outcome.ZAPPED

    def test_stepping_on_enemy_loses_without_moving(self):
        bench = StageBench("PM.")
        snap = bench.move("right")
        assert snap.state == GameState.LOST
        assert snap.player == Vector2(0, 0)
        assert bench.controller.last_outcome == Outcome.STEPPED_ON_ENEMY
        assert not bench.controller.last_accepted

    def test_collect_then_goal_wins(self):
        bench = StageBench("PHG")
        snap = bench.move("right")
        assert snap.state == GameState.PLAYING
        assert snap.message == OUTCOME_MESSAGES[Outcome.ALL_COLLECTED]
        snap = bench.move("right")
        assert snap.state == GameState.WON
        assert snap.message == OUTCOME_MESSAGES[Outcome.CLEARED]

    def test_gate_flow(self):
        bench = StageBench(*_GATE_ROOM)
        bench.play("R")
        snap = bench.play("U")
        assert snap.state == GameState.PLAYING
        assert snap.gate_opened
        assert snap.message == OUTCOME_MESSAGES[Outcome.GATE_OPENED]
        assert bench.play("U").state == GameState.WON

    def test_caught_by_pursuer(self):
        bench = StageBench(*_GATE_ROOM)
        bench.play("R")
        snap = bench.tick(3)
        assert snap.state == GameState.LOST
        assert snap.message == OUTCOME_MESSAGES[Outcome.CAUGHT]
        assert snap.tick == 3


class TestIdentityAndTerminal:

    def test_rejected_step_returns_same_snapshot(self):
        bench = StageBench("PW.")
        before = bench.snapshot
        after = bench.move("right")
        assert after is before
        assert not bench.controller.last_accepted

    def test_accepted_step_returns_new_snapshot(self):
        bench = StageBench("P..")
        before = bench.snapshot
        after = bench.move("right")
        assert after is not before
        assert before.player == Vector2(0, 0)
        assert after.player == Vector2(1, 0)

    def test_lost_ignores_moves_and_ticks(self):
        bench = StageBench("M...", "T..P")
        lost = bench.move("up")
        assert bench.move("down") is lost
        assert bench.tick() is lost
        assert bench.controller.tick_count == 0

    def test_won_ignores_moves(self):
        bench = StageBench("PHG.")
        won = bench.play("RR")
        assert won.state == GameState.WON
        assert bench.move("right") is won

    def test_tick_always_advances_counter(self):
        bench = StageBench("P.S")
        first = bench.tick()
        second = bench.tick()
        assert (first.tick, second.tick) == (1, 2)
        assert first is not second


class TestResetAndAdvance:

    def test_reset_restores_level(self):
        bench = StageBench(*_GATE_ROOM)
        initial = bench.snapshot
        bench.play("R..")
        snap = bench.controller.reset()
        assert snap.tick == 0
        assert snap.state == GameState.PLAYING
        assert snap.player == initial.player
        assert snap.fingerprint() == initial.fingerprint()
        assert not bench.stage.enemies_of(EnemyKind.PURSUER)[0].awake

    def test_reset_after_loss(self):
        bench = StageBench("M...", "T..P")
        bench.move("up")
        assert bench.play("r").state == GameState.PLAYING

    def test_reset_to_index(self):
        bench = StageBench(levels=_TWO_ROOMS)
        snap = bench.controller.reset(1)
        assert snap.name == "Room B"
        assert snap.level_index == 1

    def test_advance_wraps(self):
        bench = StageBench(levels=_TWO_ROOMS)
        assert bench.play("n").name == "Room B"
        assert bench.play("n").name == "Room A"

    def test_invalid_reset_index_keeps_state(self):
        bench = StageBench(levels=_TWO_ROOMS)
        bench.move("right")
        with pytest.raises(InvalidRequest):
            bench.controller.reset(7)
        assert bench.controller.level_index == 0
        assert bench.player == Vector2(1, 0)

    def test_invalid_direction_keeps_state(self):
        bench = StageBench("P..")
        before = bench.snapshot
        with pytest.raises(InvalidRequest):
            bench.move("diagonal")
        assert bench.snapshot is before


class TestPulse:

    def test_pulse_runs_due_ticks(self):
        bench = StageBench("P.S", tick_interval_ms=100.0)
        assert bench.controller.pulse(250) == 2
        assert bench.controller.tick_count == 2
        assert bench.controller.clock.pending_ms == pytest.approx(50)
        assert bench.controller.pulse(50) == 1

    def test_pulse_is_capped(self):
        bench = StageBench("P.S", tick_interval_ms=100.0, max_ticks_per_pulse=4)
        assert bench.controller.pulse(10_000) == 4
        assert bench.controller.tick_count == 4

    def test_pulse_stops_at_terminal_state(self):
        bench = StageBench("M.P", tick_interval_ms=100.0)
        assert bench.controller.pulse(500) == 1
        assert bench.snapshot.state == GameState.LOST
        assert bench.controller.clock.pending_ms == 0

    def test_reset_drops_pending_time(self):
        bench = StageBench("P.S", tick_interval_ms=100.0)
        bench.controller.pulse(90)
        bench.controller.reset()
        assert bench.controller.pulse(20) == 0


class TestEventsAndReplay:

    def test_event_categories(self):
        bench = StageBench("PHG")
        bench.play("RR")
        categories = [e.category for e in bench.events()]
        assert categories == ["level", "collect", "unlock", "victory"]

    def test_defeat_event(self):
        bench = StageBench("M...", "T..P")
        bench.move("up")
        assert bench.events("defeat")

    def test_reset_drops_events_of_previous_attempt(self):
        bench = StageBench(*_GATE_ROOM)
        bench.play("R...")
        assert bench.snapshot.state == GameState.LOST
        assert [e.tick for e in bench.events("defeat")] == [3]

        bench.controller.reset()
        bench.tick()
        assert bench.controller.event_log.since_tick(1) == []
        assert [e.category for e in bench.events()] == ["level"]

    def test_advance_starts_a_fresh_event_feed(self):
        bench = StageBench(levels=_TWO_ROOMS)
        bench.play("RR")
        assert bench.events("collect")
        bench.play("n")
        assert [(e.category, e.level_index) for e in bench.events()] == [("level", 1)]

    def test_replay_records_each_request(self, tmp_path):
        path = tmp_path / "replay.json"
        recorder = ReplayRecorder(path)
        bench = StageBench("PWHG", "....", recorder=recorder)
        bench.play("RDRRU")
        recorder.flush()

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["version"] == "1.0"
        assert data["initial"]["board"] == ["PWHG", "...."]
        assert data["total_requests"] == 5
        requests = data["requests"]
        assert requests[0]["accepted"] is False
        assert requests[1]["direction"] == [0, 1]
        assert [r["outcome"] for r in requests] == ["NONE"] * 4 + ["ALL_COLLECTED"]
        assert requests[-1]["player"] == [2, 0]

    def test_same_script_same_fingerprints(self):
        script = "RU..RR.L"
        runs = []
        for _ in range(2):
            bench = StageBench(*_GATE_ROOM)
            fingerprints = []
            for ch in script:
                fingerprints.append(bench.play(ch).fingerprint())
            runs.append(fingerprints)
        assert runs[0] == runs[1]
