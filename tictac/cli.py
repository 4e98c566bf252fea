"""
Tictac CLI - Command-line interface.

Usage:
    tictac serve [--host HOST] [--port PORT]   Run the API server
    tictac play [--seed N] [--delay MS]        Play in the terminal
"""

import argparse
import asyncio
import logging
import sys

from .config import Settings

logger = logging.getLogger(__name__)

SYMBOLS = {"rabbit": "R", "carrot": "C"}
POLL_SECONDS = 0.05


def main():
    """Main CLI entry point."""
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        description="Tic-tac-toe against a random opponent",
        prog="tictac",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Opponent random seed")
    play_parser.add_argument(
        "--delay", type=int, default=settings.opponent_delay_ms,
        help="Opponent thinking time in milliseconds",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "play":
        cmd_play(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    logger.info("Serving on %s:%d", args.host, args.port)
    uvicorn.run(
        "tictac.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )


def cmd_play(args):
    """Play one or more games in the terminal."""
    try:
        asyncio.run(play(seed=args.seed, delay_ms=args.delay))
    except KeyboardInterrupt:
        print()


def render_board(session) -> str:
    """Draw the board; empty cells show their 1-9 key."""
    rows = []
    for row in range(3):
        cells = []
        for col in range(3):
            index = row * 3 + col
            mark = session.get_cell_display(index)
            cells.append(SYMBOLS[mark.value] if mark else str(index + 1))
        rows.append(" " + " | ".join(cells))
    return "\n---+---+---\n".join(rows)


async def play(seed: int | None = None, delay_ms: int = 500):
    """Interactive loop around a GameSession."""
    from .bots import RandomPolicy
    from .engine_core.state import GamePhase
    from .session import GameSession

    session = GameSession(bot=RandomPolicy(seed=seed), opponent_delay=delay_ms / 1000)

    try:
        while True:
            # Wait out the opponent's thinking time
            while session.get_status().phase == GamePhase.OPPONENT_TURN:
                await asyncio.sleep(POLL_SECONDS)

            print()
            print(render_board(session))
            print(f"\n{session.status_text()}")

            prompt = "[r]estart or [q]uit: " if session.get_status().is_over else "Cell 1-9, [r]estart, [q]uit: "
            try:
                # Nothing is scheduled while the human is to move or the game is over
                line = input(prompt)
            except EOFError:
                break

            choice = line.strip().lower()
            if choice == "q":
                break
            if choice == "r":
                session.on_restart()
                continue
            if not choice.isdigit():
                print("Enter a cell number from 1 to 9.")
                continue
            if not session.on_cell_activated(int(choice) - 1):
                print("That cell is not available.")
    finally:
        session.close()


if __name__ == "__main__":
    main()
