"""GET /api/v1/levels — built-in stage list."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lolo.api.dependencies import get_game_manager
from lolo.api.game_manager import GameManager
from lolo.api.schemas import LevelSchema, LevelsResponse

router = APIRouter()


@router.get("/levels", response_model=LevelsResponse)
def get_levels(manager: GameManager = Depends(get_game_manager)) -> LevelsResponse:
    snapshot = manager.get_snapshot()
    return LevelsResponse(
        current=snapshot.level_index,
        levels=[LevelSchema(index=i, name=name) for i, name in enumerate(manager.level_names)],
    )
