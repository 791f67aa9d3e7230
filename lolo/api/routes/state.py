"""GET /api/v1/state and /events — the read-only stage view polled by the UI."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from lolo.api.dependencies import get_game_manager
from lolo.api.game_manager import GameManager
from lolo.api.schemas import (
    EnemySchema,
    EventSchema,
    GateSchema,
    StageStateResponse,
    VectorSchema,
)
from lolo.core.snapshot import StageSnapshot

router = APIRouter()


def serialize_snapshot(snapshot: StageSnapshot) -> StageStateResponse:
    gate = None
    if snapshot.gate is not None:
        gate = GateSchema(x=snapshot.gate.x, y=snapshot.gate.y, opened=snapshot.gate_opened)
    return StageStateResponse(
        tick=snapshot.tick,
        level_index=snapshot.level_index,
        level_name=snapshot.name,
        width=snapshot.width,
        height=snapshot.height,
        tiles=[[int(t) for t in row] for row in snapshot.tiles],
        player=VectorSchema(x=snapshot.player.x, y=snapshot.player.y),
        enemies=[
            EnemySchema(kind=e.kind.name.lower(), x=e.pos.x, y=e.pos.y, awake=e.awake)
            for e in snapshot.enemies
        ],
        gate=gate,
        collectibles_left=snapshot.collectibles_left,
        state=snapshot.state.name,
        message=snapshot.message,
        fingerprint=snapshot.fingerprint(),
    )


@router.get("/state", response_model=StageStateResponse)
def get_state(manager: GameManager = Depends(get_game_manager)) -> StageStateResponse:
    return serialize_snapshot(manager.get_snapshot())


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    manager: GameManager = Depends(get_game_manager),
) -> list[EventSchema]:
    return [
        EventSchema(tick=ev.tick, category=ev.category, message=ev.message, level_index=ev.level_index)
        for ev in manager.event_log.since_tick(since_tick)
    ]
