"""Entry point: ``python -m lolo``.

Supports three modes:
  - ``python -m lolo``                  → Launch the FastAPI host (enemy ticks on a timer)
  - ``python -m lolo play --moves ...`` → Headless scripted run with a replay file
  - ``python -m lolo levels``           → List the built-in stages
"""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lolo.engine.stage_controller import StageController

logger = logging.getLogger(__name__)

# Script alphabet for ``play``: one character per request
_SCRIPT_MOVES = {"U": "up", "D": "down", "L": "left", "R": "right"}
_SCRIPT_TICK = "."
_SCRIPT_RESET = "r"
_SCRIPT_ADVANCE = "n"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lolo grid puzzle-chase engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI host (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--level", type=int, default=0)
    srv.add_argument("--tick-ms", type=float, default=300.0)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless scripted mode ---
    play = sub.add_parser("play", help="Run a scripted session headless")
    play.add_argument("--level", type=int, default=0)
    play.add_argument(
        "--moves", type=str, default="",
        help="U/D/L/R = step, '.' = enemy tick, 'r' = reset, 'n' = next level",
    )
    play.add_argument("--replay", type=str, default="replay.json")
    play.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    sub.add_parser("levels", help="List built-in levels")

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from lolo.api.app import create_app
    from lolo.config import GameConfig

    config = GameConfig(
        start_level=args.level,
        tick_interval_ms=args.tick_ms,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


def run_script(controller: StageController, moves: str) -> None:
    """Feed a request script into *controller*, one character per request."""
    from lolo.core.errors import InvalidRequest

    for ch in moves:
        if ch.isspace():
            continue
        if ch in _SCRIPT_MOVES:
            controller.move(_SCRIPT_MOVES[ch])
        elif ch == _SCRIPT_TICK:
            controller.tick()
        elif ch == _SCRIPT_RESET:
            controller.reset()
        elif ch == _SCRIPT_ADVANCE:
            controller.advance()
        else:
            raise InvalidRequest(f"Unknown script character {ch!r}")


def _run_play(args: argparse.Namespace) -> None:
    from lolo.config import GameConfig
    from lolo.engine.stage_controller import StageController
    from lolo.utils.logging import setup_logging
    from lolo.utils.replay import ReplayRecorder

    config = GameConfig(start_level=args.level, replay_file=args.replay, log_level=args.log_level)
    setup_logging(config.log_level)

    recorder = ReplayRecorder(config.replay_file)
    controller = StageController(config, recorder=recorder)
    try:
        run_script(controller, args.moves)
    finally:
        recorder.flush()

    snapshot = controller.snapshot()
    for row in snapshot.to_ascii():
        print(row)
    print(f"{snapshot.name}: {snapshot.state.name} after {snapshot.tick} ticks | {snapshot.message}")


def _run_levels() -> None:
    from lolo.core.levels import LEVELS

    for index, (name, _rows) in enumerate(LEVELS):
        print(f"{index}: {name}")


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "play":
        _run_play(args)
    elif args.command == "levels":
        _run_levels()


if __name__ == "__main__":
    main()
