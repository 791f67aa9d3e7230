"""Tests for the host layer — GameManager and the route handlers.

Route functions are called directly with an explicit manager, the same
way FastAPI would after resolving ``Depends(get_game_manager)``.
"""

import sys
import os

import pytest
from fastapi import HTTPException

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from lolo.api.app import create_app
from lolo.api.dependencies import get_game_manager, set_game_manager
from lolo.api.game_manager import GameManager
from lolo.api.routes.config import get_config
from lolo.api.routes.control import ControlAction, control
from lolo.api.routes.levels import get_levels
from lolo.api.routes.move import move
from lolo.api.routes.state import get_events, get_state
from lolo.config import GameConfig
from lolo.core.enums import Outcome

_SMALL_LEVELS = (
    ("Corridor", ("P.HG",)),
    ("Trap", ("M..P",)),
)


def _manager(**overrides) -> GameManager:
    defaults = dict(grid_width=4, grid_height=1, log_level="WARNING", tick_interval_ms=50.0)
    defaults.update(overrides)
    return GameManager(GameConfig(**defaults), _SMALL_LEVELS)


class TestGameManager:

    def test_move_reports_acceptance(self):
        mgr = _manager()
        snap, accepted, outcome = mgr.move("right")
        assert accepted
        assert outcome == Outcome.NONE
        assert snap.player.x == 1

        snap2, accepted, _ = mgr.move("left")
        snap3, accepted, _ = mgr.move("left")
        assert not accepted
        assert snap3 is snap2

    def test_manual_tick(self):
        mgr = _manager()
        assert mgr.tick().tick == 1

    def test_reset_and_advance(self):
        mgr = _manager()
        assert mgr.advance().name == "Trap"
        assert mgr.reset(0).name == "Corridor"

    def test_tick_thread_lifecycle(self):
        mgr = _manager(host_poll_seconds=0.001)
        mgr.start()
        try:
            assert mgr.running
            mgr.start()
            assert mgr.running
        finally:
            mgr.stop()
        assert not mgr.running

    def test_pause_drops_pending_time(self):
        mgr = _manager()
        mgr._controller.clock.advance(30)
        mgr.pause()
        assert mgr.paused
        assert mgr._controller.clock.pending_ms == 0
        mgr.resume()
        assert not mgr.paused


class TestRoutes:

    def test_state(self):
        mgr = _manager()
        state = get_state(manager=mgr)
        assert state.level_name == "Corridor"
        assert state.tiles == [[0, 0, 3, 4]]
        assert state.player.x == 0
        assert state.state == "PLAYING"
        assert state.gate is None
        assert len(state.fingerprint) == 16

    def test_move_route(self):
        mgr = _manager()
        resp = move("right", manager=mgr)
        assert resp.accepted
        assert resp.stage.player.x == 1
        resp = move("right", manager=mgr)
        assert resp.outcome == "ALL_COLLECTED"
        assert resp.stage.collectibles_left == 0

    def test_move_route_bad_direction(self):
        with pytest.raises(HTTPException) as exc:
            move("sideways", manager=_manager())
        assert exc.value.status_code == 400

    def test_control_reset_and_advance(self):
        mgr = _manager()
        resp = control(ControlAction.advance, level=None, manager=mgr)
        assert resp.status == "ok"
        assert "Trap" in resp.message
        resp = control(ControlAction.reset, level=0, manager=mgr)
        assert "Corridor" in resp.message

    def test_control_reset_bad_level(self):
        with pytest.raises(HTTPException) as exc:
            control(ControlAction.reset, level=9, manager=_manager())
        assert exc.value.status_code == 400

    def test_control_tick_loses_on_trap(self):
        mgr = _manager()
        control(ControlAction.advance, level=None, manager=mgr)
        resp = control(ControlAction.tick, level=None, manager=mgr)
        assert resp.state == "LOST"
        assert resp.tick == 1

    def test_control_pause_twice_is_noop(self):
        mgr = _manager()
        assert control(ControlAction.pause, level=None, manager=mgr).status == "ok"
        assert control(ControlAction.pause, level=None, manager=mgr).status == "noop"
        assert control(ControlAction.resume, level=None, manager=mgr).status == "ok"
        assert not mgr.paused

    def test_events_route(self):
        mgr = _manager()
        mgr.move("right")
        mgr.move("right")
        events = get_events(since_tick=0, manager=mgr)
        assert [e.category for e in events] == ["level", "collect", "unlock"]

    def test_events_route_after_reset(self):
        mgr = _manager()
        control(ControlAction.advance, level=None, manager=mgr)
        control(ControlAction.tick, level=None, manager=mgr)
        assert [e.category for e in get_events(since_tick=1, manager=mgr)] == ["defeat"]

        control(ControlAction.reset, level=None, manager=mgr)
        assert get_events(since_tick=1, manager=mgr) == []
        assert [e.category for e in get_events(since_tick=0, manager=mgr)] == ["level"]

    def test_levels_route(self):
        resp = get_levels(manager=_manager())
        assert resp.current == 0
        assert [lvl.name for lvl in resp.levels] == ["Corridor", "Trap"]

    def test_config_route(self):
        resp = get_config(manager=_manager())
        assert resp.grid_width == 4
        assert resp.tick_interval_ms == 50.0


class TestAppWiring:

    def test_dependency_requires_manager(self):
        set_game_manager(None)
        with pytest.raises(RuntimeError):
            get_game_manager()

    def test_dependency_returns_manager(self):
        mgr = _manager()
        set_game_manager(mgr)
        try:
            assert get_game_manager() is mgr
        finally:
            set_game_manager(None)

    def test_routes_registered(self):
        app = create_app(GameConfig(log_level="WARNING"))
        paths = app.openapi()["paths"]
        for path in ("/api/v1/state", "/api/v1/events", "/api/v1/move/{direction}",
                     "/api/v1/control/{action}", "/api/v1/levels", "/api/v1/config"):
            assert path in paths
