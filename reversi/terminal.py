#!/usr/bin/env python3
"""Play a local two-player Othello game in the terminal."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Iterable, Optional, Tuple, Union

from .game import BLACK, WHITE
from .turns import GameSnapshot, Outcome, TurnController, color_name

SYMBOLS = {BLACK: "X", WHITE: "O"}

Command = Union[str, Tuple[int, int]]


def render(snapshot: GameSnapshot) -> str:
    """Return ``snapshot`` as text: ``X`` black, ``O`` white, ``*`` legal move."""
    valid = set(snapshot.valid_moves)
    lines = ["  " + " ".join(str(c) for c in range(len(snapshot.board)))]
    for r, row in enumerate(snapshot.board):
        cells = []
        for c, value in enumerate(row):
            if value in SYMBOLS:
                cells.append(SYMBOLS[value])
            elif (r, c) in valid:
                cells.append("*")
            else:
                cells.append(".")
        lines.append(f"{r} " + " ".join(cells))
    lines.append(f"Black (X): {snapshot.black}  White (O): {snapshot.white}")
    if snapshot.passed is not None:
        lines.append(f"{color_name(snapshot.passed).capitalize()} has no legal move and passes.")
    if snapshot.outcome is Outcome.IN_PROGRESS:
        lines.append(f"{color_name(snapshot.current).capitalize()} to move")
    elif snapshot.outcome is Outcome.DRAW:
        lines.append(f"Draw! ({snapshot.black} - {snapshot.white})")
    else:
        winner = "Black" if snapshot.outcome is Outcome.BLACK_WINS else "White"
        lines.append(f"{winner} wins! ({snapshot.black} - {snapshot.white})")
    return "\n".join(lines)


def parse_command(line: str) -> Optional[Command]:
    """Parse ``"row col"``, ``new`` or ``quit``. Returns ``None`` if unrecognised."""
    parts = line.replace(",", " ").split()
    if len(parts) == 1 and parts[0].lower() in ("new", "quit"):
        return parts[0].lower()
    if len(parts) == 2:
        try:
            return int(parts[0]), int(parts[1])
        except ValueError:
            return None
    return None


def play(
    lines: Iterable[str],
    write: Callable[[str], None],
    controller: Optional[TurnController] = None,
) -> TurnController:
    """Drive a game from ``lines`` of input, writing the board after each command."""
    if controller is None:
        controller = TurnController()
    write(render(controller.snapshot()))
    for line in lines:
        command = parse_command(line)
        if command is None:
            write("Enter a move as 'row col', 'new' or 'quit'.")
            continue
        if command == "quit":
            break
        if command == "new":
            controller.reset()
        else:
            row, col = command
            if not controller.board.inside(row, col):
                write(f"({row}, {col}) is off the board.")
                continue
            if not controller.attempt_move(row, col):
                write(f"({row}, {col}) is not a legal move.")
                continue
        write(render(controller.snapshot()))
        # The pass notice is shown once.
        controller.dismiss_pass()
    return controller


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Othello in the terminal")
    parser.add_argument("--verbose", action="store_true", help="Log every move")
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    play(sys.stdin, print)


if __name__ == "__main__":
    main()
