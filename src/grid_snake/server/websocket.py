"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grid_snake.server.models import GameStatus
from grid_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Send directions, receive the game state after each tick."""
    manager = _get_manager(websocket)
    try:
        session = manager.get_game(game_id)
    except KeyError:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    async with session.lock:
        # Initial snapshot so the client can draw before the first tick.
        await websocket.send_text(
            json.dumps(session.engine.get_state(), separators=(",", ":")),
        )
        if session.status != GameStatus.ACTIVE:
            await websocket.close(code=1000, reason="Game finished.")
            return
        session.clients.append(websocket)
    logger.info("Client connected to game %s.", game_id)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            direction = msg.get("direction")
            if isinstance(direction, str):
                await manager.send_direction(game_id, direction)
    except WebSocketDisconnect:
        logger.info("Client disconnected from game %s.", game_id)
    finally:
        if websocket in session.clients:
            session.clients.remove(websocket)
