#!/usr/bin/env python3
"""
Minefield - command-line driver.

Each invocation loads the saved game, applies one command, saves it back
and prints the board.

Usage:
    python main.py new [--size N] [--seed S]
    python main.py show [--debug]
    python main.py reveal ROW COL
    python main.py flag ROW COL
"""
import argparse
import logging
import random
import sys
from typing import List, Optional, Tuple

from src.minefield import (
    CorruptSaveError,
    DEFAULT_SAVE_PATH,
    DEFAULT_SIZE,
    GameSession,
    GameState,
    InvalidSizeError,
    SaveStore,
    render_text,
)

EXIT_OK = 0
EXIT_NO_GAME = 1
EXIT_CORRUPT = 2
EXIT_IO_ERROR = 3
EXIT_BAD_ARGUMENT = 4


def print_board(session: GameSession, debug: bool = False) -> None:
    """Print the board followed by a status line."""
    snapshot = session.snapshot(debug=debug)
    print(render_text(snapshot))
    print(f"\nMines: {snapshot.total_mines} | Flags: {snapshot.flags_placed}")
    if snapshot.outcome == GameState.WON:
        print("*** You cleared the board! ***")
    elif snapshot.outcome == GameState.LOST:
        print("*** BOOM! You hit a mine. ***")


def load_session(args: argparse.Namespace) -> Tuple[Optional[GameSession], int]:
    """Load the saved game, printing why when there is none."""
    session = GameSession(store=SaveStore(args.save_file))
    try:
        found = session.load_game()
    except CorruptSaveError as exc:
        print(f"Saved game is corrupt: {exc}")
        return None, EXIT_CORRUPT
    if not found:
        print("No saved game. Start one with: python main.py new")
        return None, EXIT_NO_GAME
    return session, EXIT_OK


def save_session(session: GameSession, args: argparse.Namespace) -> int:
    if session.save_game():
        return EXIT_OK
    print(f"Could not write save file {args.save_file}")
    return EXIT_IO_ERROR


def new_game(args: argparse.Namespace) -> int:
    """Start a new game and save it."""
    rng = random.Random(args.seed) if args.seed is not None else None
    session = GameSession(store=SaveStore(args.save_file), rng=rng)
    try:
        session.new_game(args.size)
    except InvalidSizeError as exc:
        print(exc)
        return EXIT_BAD_ARGUMENT
    print_board(session)
    return save_session(session, args)


def show(args: argparse.Namespace) -> int:
    """Print the saved board."""
    session, status = load_session(args)
    if session is None:
        return status
    print_board(session, debug=args.debug)
    return EXIT_OK


def reveal(args: argparse.Namespace) -> int:
    """Reveal one cell of the saved board."""
    session, status = load_session(args)
    if session is None:
        return status
    if session.board.is_over:
        print("Game is over. Start a new one with: python main.py new")
        print_board(session)
        return EXIT_OK

    result = session.reveal(args.row, args.col)
    if not result:
        print(f"Nothing to reveal at ({args.row}, {args.col})")
    print_board(session)
    return save_session(session, args)


def flag(args: argparse.Namespace) -> int:
    """Toggle a flag on the saved board."""
    session, status = load_session(args)
    if session is None:
        return status
    if session.board.is_over:
        print("Game is over. Start a new one with: python main.py new")
        print_board(session)
        return EXIT_OK

    if not session.toggle_flag(args.row, args.col):
        print(f"Cannot flag ({args.row}, {args.col})")
    print_board(session)
    return save_session(session, args)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(description="Minefield - deduce the mines")
    parser.add_argument(
        "--save-file", default=DEFAULT_SAVE_PATH, help="Path of the save file"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # New game command
    new_parser = subparsers.add_parser("new", help="Start a new game")
    new_parser.add_argument(
        "--size", type=int, default=DEFAULT_SIZE, help="Board size (NxN)"
    )
    new_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine placement"
    )

    # Show command
    show_parser = subparsers.add_parser("show", help="Print the saved board")
    show_parser.add_argument(
        "--debug", action="store_true", help="Show hidden mines"
    )

    # Move commands
    for name, help_text in (("reveal", "Reveal a cell"), ("flag", "Toggle a flag")):
        move_parser = subparsers.add_parser(name, help=help_text)
        move_parser.add_argument("row", type=int, help="Row index")
        move_parser.add_argument("col", type=int, help="Column index")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    if args.command == "new":
        return new_game(args)
    elif args.command == "show":
        return show(args)
    elif args.command == "reveal":
        return reveal(args)
    elif args.command == "flag":
        return flag(args)
    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
