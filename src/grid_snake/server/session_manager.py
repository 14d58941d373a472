"""In-memory session registry and per-session tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.collision import Outcome
from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.scheduler import TickScheduler
from grid_snake.server.models import GameStatus, GameSummary
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

_MAX_FINISHED_GAMES = 100


@dataclass
class GameSession:
    """All state for a single running game."""

    game_id: str
    engine: GameEngine
    scheduler: TickScheduler
    status: GameStatus = GameStatus.ACTIVE
    clients: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> GameSummary:
        return GameSummary(
            game_id=self.game_id,
            status=self.status,
            tick=self.engine.tick,
            score=self.engine.score,
            tick_period=self.scheduler.period,
        )


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(self, max_finished_games: int = _MAX_FINISHED_GAMES) -> None:
        if max_finished_games < 0:
            raise ValueError("max_finished_games must be >= 0.")
        self._games: dict[str, GameSession] = {}
        self._max_finished_games = max_finished_games

    def create_game(self, config: GameConfig) -> GameSession:
        """Create a session and start its tick loop."""
        session = GameSession(
            game_id=uuid.uuid4().hex[:12],
            engine=GameEngine(config),
            scheduler=TickScheduler(config.tick_period),
        )
        self._games[session.game_id] = session
        session._task = asyncio.create_task(self._tick_loop(session))
        logger.info(
            "Game %s created (%dx%d, period=%.2fs).",
            session.game_id, config.grid_width, config.grid_height,
            config.tick_period,
        )
        return session

    def get_game(self, game_id: str) -> GameSession:
        session = self._games.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        return session

    def list_games(self) -> list[GameSummary]:
        """Return summaries of running sessions."""
        return [
            g.summary() for g in self._games.values()
            if g.status == GameStatus.ACTIVE
        ]

    async def send_direction(
        self, game_id: str, direction: Direction | str,
    ) -> bool:
        """Queue a direction for a session's next tick."""
        session = self.get_game(game_id)
        async with session.lock:
            if session.status != GameStatus.ACTIVE:
                return False
            return session.engine.enqueue_direction(direction)

    async def _tick_loop(self, session: GameSession) -> None:
        """Run the tick loop, broadcasting state after every admitted tick."""
        try:
            while await session.scheduler.next_firing():
                async with session.lock:
                    outcome = session.engine.step()
                    state = session.engine.get_state()
                    if outcome is Outcome.TERMINAL:
                        self._mark_game_finished(session)
                await self._broadcast(session, state)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for game %s.", session.game_id)
        except Exception:
            logger.exception("Tick loop error in game %s.", session.game_id)
        finally:
            self._mark_game_finished(session)
            await self._close_connections(session)
            self._prune_finished_games()

    def _mark_game_finished(self, session: GameSession) -> None:
        if session.status != GameStatus.FINISHED:
            session.status = GameStatus.FINISHED
            session.finished_at = time.monotonic()
            session.scheduler.cancel()

    async def _broadcast(self, session: GameSession, state: dict) -> None:
        """Send the state to every connected client."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []
        for ws in list(session.clients):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in session.clients:
                session.clients.remove(ws)

    async def _close_connections(self, session: GameSession) -> None:
        for ws in list(session.clients):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game finished.")
            except Exception:
                logger.warning(
                    "Failed closing client socket in game %s.", session.game_id,
                )
        session.clients.clear()

    def _prune_finished_games(self) -> None:
        """Bound retained finished sessions."""
        finished = [
            g for g in self._games.values() if g.status == GameStatus.FINISHED
        ]
        overflow = len(finished) - self._max_finished_games
        if overflow <= 0:
            return
        finished.sort(
            key=lambda g: g.finished_at if g.finished_at is not None else g.created_at,
        )
        for stale in finished[:overflow]:
            self._games.pop(stale.game_id, None)
        logger.info("Pruned %d finished games.", overflow)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [
            g._task for g in self._games.values()
            if g._task and not g._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
