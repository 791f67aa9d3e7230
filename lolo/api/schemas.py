"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Stage ---

class VectorSchema(BaseModel):
    x: int
    y: int


class EnemySchema(BaseModel):
    kind: str
    x: int
    y: int
    awake: bool


class GateSchema(BaseModel):
    x: int
    y: int
    opened: bool = False


class StageStateResponse(BaseModel):
    tick: int
    level_index: int
    level_name: str
    width: int
    height: int
    tiles: list[list[int]] = Field(description="Rows of Tile enum values (0=Empty, 1=Wall, 2=Block, ...)")
    player: VectorSchema
    enemies: list[EnemySchema] = Field(default_factory=list)
    gate: GateSchema | None = None
    collectibles_left: int
    state: str
    message: str
    fingerprint: str


class MoveResponse(BaseModel):
    accepted: bool
    outcome: str
    stage: StageStateResponse


# --- Events ---

class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    level_index: int = 0


# --- Levels ---

class LevelSchema(BaseModel):
    index: int
    name: str


class LevelsResponse(BaseModel):
    current: int
    levels: list[LevelSchema]


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    state: str = "PLAYING"
    tick: int = 0


# --- Config ---

class GameConfigResponse(BaseModel):
    grid_width: int
    grid_height: int
    start_level: int
    tick_interval_ms: float
    max_ticks_per_pulse: int
