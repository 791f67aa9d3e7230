"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lolo.api.dependencies import get_game_manager
from lolo.api.game_manager import GameManager
from lolo.api.schemas import GameConfigResponse

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(manager: GameManager = Depends(get_game_manager)) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        grid_width=cfg.grid_width,
        grid_height=cfg.grid_height,
        start_level=cfg.start_level,
        tick_interval_ms=cfg.tick_interval_ms,
        max_ticks_per_pulse=cfg.max_ticks_per_pulse,
    )
