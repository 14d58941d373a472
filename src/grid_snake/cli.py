"""Command-line launcher for headless games and the API server."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from grid_snake.collision import Outcome
from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.queues import parse_direction
from grid_snake.scheduler import TickScheduler

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid snake simulation and server tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- run ---
    run_p = sub.add_parser("run", help="Play a headless game from scripted moves.")
    run_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override it).",
    )
    run_p.add_argument("--grid-width", type=int, default=None)
    run_p.add_argument("--grid-height", type=int, default=None)
    run_p.add_argument("--seed", type=int, default=None)
    run_p.add_argument("--tick-period", type=float, default=None)
    run_p.add_argument(
        "--moves", type=str, default="",
        help="One character per tick: U, L, D, R, or '.' for no input.",
    )
    run_p.add_argument(
        "--max-ticks", type=int, default=1000,
        help="Stop after this many ticks if the game has not ended.",
    )
    run_p.add_argument(
        "--realtime", action="store_true",
        help="Pace ticks with the scheduler instead of running flat out.",
    )

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()
    return config.replace(
        grid_width=args.grid_width,
        grid_height=args.grid_height,
        seed=args.seed,
        tick_period=args.tick_period,
    )


def _queue_move(engine: GameEngine, moves: str, index: int) -> None:
    if index < len(moves):
        direction = parse_direction(moves[index])
        if direction is not None:
            engine.enqueue_direction(direction)


async def _run_realtime(
    engine: GameEngine, moves: str, max_ticks: int, period: float,
) -> None:
    scheduler = TickScheduler(period)
    _queue_move(engine, moves, 0)

    def _on_tick(state: dict) -> None:
        logger.debug("tick=%d head=%s", state["tick"], state["snake"]["head"])
        if engine.tick >= max_ticks:
            scheduler.cancel()
        else:
            _queue_move(engine, moves, engine.tick)

    await scheduler.run(engine, on_tick=_on_tick)


def _run_game(args: argparse.Namespace) -> int:
    try:
        config = _load_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    engine = GameEngine(config)
    if args.realtime:
        asyncio.run(
            _run_realtime(engine, args.moves, args.max_ticks, config.tick_period),
        )
    else:
        for i in range(args.max_ticks):
            _queue_move(engine, args.moves, i)
            if engine.step() is Outcome.TERMINAL:
                break

    print(json.dumps(engine.get_state(), indent=2))  # noqa: T201
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from grid_snake.server.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "run": _run_game,
        "serve": _run_serve,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
