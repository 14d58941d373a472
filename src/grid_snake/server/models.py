"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class GameStatus(str, enum.Enum):
    """Lifecycle states for a session."""

    ACTIVE = "active"
    FINISHED = "finished"


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    grid_width: int = Field(default=16, ge=3, le=128)
    grid_height: int = Field(default=16, ge=3, le=128)
    tick_period: float = Field(default=1.0, ge=0.02, le=10.0)
    initial_body_length: int = Field(default=1, ge=1)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /games/{game_id}/direction."""

    direction: str = Field(min_length=1, max_length=16)


class DirectionResponse(BaseModel):
    game_id: str
    accepted: bool


class GameSummary(BaseModel):
    """Compact session info for list endpoints."""

    game_id: str
    status: GameStatus
    tick: int
    score: int
    tick_period: float
