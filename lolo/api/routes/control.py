"""POST /api/v1/control/{action} — level and tick-timer controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from lolo.api.dependencies import get_game_manager
from lolo.api.game_manager import GameManager
from lolo.api.schemas import ControlResponse
from lolo.core.errors import InvalidRequest

router = APIRouter()


class ControlAction(str, Enum):
    reset = "reset"
    advance = "advance"
    pause = "pause"
    resume = "resume"
    tick = "tick"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    level: int | None = Query(None, ge=0, description="Level index for reset"),
    manager: GameManager = Depends(get_game_manager),
) -> ControlResponse:
    match action:
        case ControlAction.reset:
            try:
                snapshot = manager.reset(level)
            except InvalidRequest as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            return ControlResponse(status="ok", message=f"{snapshot.name} reset.",
                                   state=snapshot.state.name, tick=snapshot.tick)

        case ControlAction.advance:
            snapshot = manager.advance()
            return ControlResponse(status="ok", message=f"Advanced to {snapshot.name}.",
                                   state=snapshot.state.name, tick=snapshot.tick)

        case ControlAction.pause:
            if manager.paused:
                snapshot = manager.get_snapshot()
                return ControlResponse(status="noop", message="Already paused.",
                                       state=snapshot.state.name, tick=snapshot.tick)
            manager.pause()
            snapshot = manager.get_snapshot()
            return ControlResponse(status="ok", message="Enemy ticks paused.",
                                   state=snapshot.state.name, tick=snapshot.tick)

        case ControlAction.resume:
            manager.resume()
            snapshot = manager.get_snapshot()
            return ControlResponse(status="ok", message="Enemy ticks resumed.",
                                   state=snapshot.state.name, tick=snapshot.tick)

        case ControlAction.tick:
            snapshot = manager.tick()
            return ControlResponse(status="ok", message="Single tick executed.",
                                   state=snapshot.state.name, tick=snapshot.tick)
