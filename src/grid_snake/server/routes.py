"""REST API route handlers for game sessions."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.config import GameConfig
from grid_snake.server.models import (
    CreateGameRequest,
    DirectionRequest,
    DirectionResponse,
    GameSummary,
)
from grid_snake.server.session_manager import SessionManager

router = APIRouter(prefix="/games", tags=["games"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a game session and start ticking."""
    try:
        config = GameConfig(
            grid_width=body.grid_width,
            grid_height=body.grid_height,
            tick_period=body.tick_period,
            initial_body_length=body.initial_body_length,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    session = _get_manager(request).create_game(config)
    return session.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List running sessions."""
    return _get_manager(request).list_games()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get session metadata and the latest state."""
    try:
        session = _get_manager(request).get_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found.") from exc
    result = session.summary().model_dump(mode="json")
    result["state"] = session.engine.get_state()
    return result


@router.post("/{game_id}/direction", status_code=202)
async def send_direction(
    game_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Queue a direction for the next tick; unknown directions are ignored."""
    try:
        accepted = await _get_manager(request).send_direction(
            game_id, body.direction,
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found.") from exc
    return DirectionResponse(game_id=game_id, accepted=accepted)
