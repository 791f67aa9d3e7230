"""POST /api/v1/move/{direction} — one discrete player step."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from lolo.api.dependencies import get_game_manager
from lolo.api.game_manager import GameManager
from lolo.api.routes.state import serialize_snapshot
from lolo.api.schemas import MoveResponse
from lolo.core.errors import InvalidRequest

router = APIRouter()


@router.post("/move/{direction}", response_model=MoveResponse)
def move(
    direction: str,
    manager: GameManager = Depends(get_game_manager),
) -> MoveResponse:
    try:
        snapshot, accepted, outcome = manager.move(direction)
    except InvalidRequest as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return MoveResponse(accepted=accepted, outcome=outcome.name, stage=serialize_snapshot(snapshot))
