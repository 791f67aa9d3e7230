"""Tests for StageSnapshot — frozen views, ASCII rendering and fingerprints."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.stage_builder import make_stage
from lolo.actions.move import MoveAction
from lolo.core.enums import GameState, Tile
from lolo.core.models import Vector2
from lolo.core.snapshot import StageSnapshot
from lolo.utils.event_log import EventLog, SimEvent


class TestSnapshotView:

    def test_detached_from_stage(self):
        stage = make_stage("P.K")
        snap = StageSnapshot.from_stage(stage)
        stage.player = Vector2(1, 0)
        stage.grid.set(Vector2(1, 0), Tile.BLOCK)
        stage.enemies[0].awake = True
        assert snap.player == Vector2(0, 0)
        assert snap.tile_at(Vector2(1, 0)) == Tile.EMPTY
        assert not snap.enemies[0].awake

    def test_frozen(self):
        snap = StageSnapshot.from_stage(make_stage("P."))
        with pytest.raises(AttributeError):
            snap.tick = 5

    def test_open_goal_and_gate_render(self):
        stage = make_stage("WEW", "WGW", "WHW", "WPW")
        stage = MoveAction.resolve(stage, Vector2(0, -1)).stage
        rows = StageSnapshot.from_stage(stage).to_ascii()
        assert rows == ["WEW", "WOW", "WPW", "W.W"]


class TestFingerprint:

    def test_ignores_tick_and_message(self):
        stage = make_stage("P.H")
        a = StageSnapshot.from_stage(stage, tick=1, message="one")
        b = StageSnapshot.from_stage(stage, tick=9, message="two")
        assert a.fingerprint() == b.fingerprint()

    def test_tracks_state_and_board(self):
        stage = make_stage("P.H")
        base = StageSnapshot.from_stage(stage)
        lost = StageSnapshot.from_stage(stage, state=GameState.LOST)
        moved = StageSnapshot.from_stage(MoveAction.resolve(stage, Vector2(1, 0)).stage)
        assert base.fingerprint() != lost.fingerprint()
        assert base.fingerprint() != moved.fingerprint()

    def test_tracks_enemy_wake(self):
        stage = make_stage("P.K")
        before = StageSnapshot.from_stage(stage).fingerprint()
        stage.enemies[0].awake = True
        assert StageSnapshot.from_stage(stage).fingerprint() != before


class TestEventLog:

    def test_since_tick_and_latest(self):
        log = EventLog()
        log.append_many([SimEvent(tick=t, category="tick", message=str(t)) for t in range(5)])
        assert [e.tick for e in log.since_tick(3)] == [3, 4]
        assert [e.tick for e in log.latest(2)] == [3, 4]
        assert len(log) == 5

    def test_bounded(self):
        log = EventLog(maxlen=3)
        for t in range(10):
            log.append(SimEvent(tick=t, category="tick", message=""))
        assert [e.tick for e in log.latest()] == [7, 8, 9]
        log.clear()
        assert len(log) == 0
