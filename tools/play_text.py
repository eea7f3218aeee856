"""
Text Play Mode
==============

Play a Breakfast Blitz level from the terminal.

Commands:
    r1 c1 r2 c2        Swap two cells (zero-indexed)
    p KEY [row col]    Use a power-up, e.g. "p hammer 3 4" or "p shuffle"
    hint               Show one swap that makes a match
    pause / resume     Pause or resume the level
    reset              Restart the level
    q                  Quit

Usage:
    python -m tools.play_text [--level LEVEL] [--seed SEED] [--obstacles] [--debug]
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from breakfast_blitz.blitz_core.board import Board, adjacent_swaps
from breakfast_blitz.blitz_core.config_loader import load_config
from breakfast_blitz.blitz_core.exceptions import InvalidCoordinate, NonAdjacentSwap, UnknownPowerUp
from breakfast_blitz.blitz_core.level_catalog import LevelCatalog
from breakfast_blitz.blitz_core.match_detector import has_match
from breakfast_blitz.blitz_core.session import GameSession

# One letter per piece kind; obstacles in lower case
SYMBOLS = {
    "empty": ".",
    "toast": "T",
    "pancake": "P",
    "honey": "H",
    "butter": "B",
    "waffle": "W",
    "syrup": "S",
    "burnt-toast": "x",
    "melting-butter": "m",
    "sticky-honey": "s",
}


def format_board(board: Board) -> str:
    header = "   " + " ".join(str(c) for c in range(board.size))
    lines = [header]
    for r, row in enumerate(board.rows()):
        lines.append(f"{r:>2} " + " ".join(SYMBOLS[piece.type.value] for piece in row))
    return "\n".join(lines)


def format_status(session: GameSession) -> str:
    level = session.current_level
    counts = session.inventory.as_dict()
    inventory = ", ".join(f"{key}={count}" for key, count in counts.items() if count)
    return (
        f"Level {level.id}: {level.name}\n"
        f"Score {session.score}/{level.target_score} | "
        f"Moves {session.moves_remaining} | {session.status.value}\n"
        f"Power-ups: {inventory or 'none'}"
    )


def find_hint(board: Board) -> Optional[str]:
    for source, destination in adjacent_swaps(board.size):
        candidate = board.clone()
        candidate.swap(source, destination)
        if has_match(candidate):
            return f"{source.row} {source.col} {destination.row} {destination.col}"
    return None


def handle_command(session: GameSession, words: List[str]) -> str:
    """Run one command and return the message to print."""
    command = words[0].lower()

    if command == "hint":
        hint = find_hint(session.board)
        return f"Try: {hint}" if hint else "No matching swap on this board"
    if command == "pause":
        session.pause_game()
        return "Paused"
    if command == "resume":
        session.resume_game()
        return "Resumed"
    if command == "reset":
        session.reset_game()
        return "Level restarted"

    if command == "p":
        if len(words) not in (2, 4):
            return "Usage: p KEY [row col]"
        row = col = None
        if len(words) == 4:
            row, col = int(words[2]), int(words[3])
        result = session.use_power_up(words[1], row, col)
        if not result.applied:
            return f"{result.key.value} refused: {result.reason}"
        return (f"{result.key.value}: +{result.score_delta} points, "
                f"+{result.moves_added} moves, {len(result.affected)} cells")

    if len(words) != 4:
        return "Usage: r1 c1 r2 c2"
    fr, fc, tr, tc = (int(w) for w in words)
    result = session.make_move(fr, fc, tr, tc)
    if not result.matched:
        return f"No match ({result.reason})"
    combo = f", combo x{result.cascades}" if result.cascades > 1 else ""
    return f"+{result.score_delta} points{combo}"


def main():
    parser = argparse.ArgumentParser(description="Play Breakfast Blitz in the terminal")
    parser.add_argument("--level", type=int, default=1, help="Level id")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--obstacles", action="store_true", help="Seed obstacles into the board")
    parser.add_argument("--debug", action="store_true", help="Print debug output")

    args = parser.parse_args()

    config = load_config()
    catalog = LevelCatalog(config)
    level = catalog.get_level(args.level)
    if level is None:
        print(f"Unknown level: {args.level}")
        return 1

    session = GameSession(
        config=config,
        seed=args.seed,
        level=level,
        catalog=catalog,
        with_obstacles=args.obstacles,
        debug=args.debug
    )

    while True:
        print()
        print(format_status(session))
        print(format_board(session.board))

        if session.is_over:
            completion = session.level_result()
            if completion is not None:
                print(f"Level complete! {completion.stars} star(s), {completion.coins} coins")
            else:
                print("Out of moves.")
            answer = input("Play again? [y/N] ").strip().lower()
            if answer != "y":
                return 0
            session.reset_game()
            continue

        try:
            words = input("> ").split()
        except EOFError:
            return 0
        if not words:
            continue
        if words[0].lower() in ("q", "quit", "exit"):
            return 0

        try:
            print(handle_command(session, words))
        except (InvalidCoordinate, NonAdjacentSwap, UnknownPowerUp, ValueError) as e:
            print(f"Invalid: {e}")


if __name__ == "__main__":
    sys.exit(main())
