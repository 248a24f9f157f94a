"""Turn management for a local two-player Othello session."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from .game import BLACK, BOARD_SIZE, WHITE, Board, Coord

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    IN_PROGRESS = "in_progress"
    BLACK_WINS = "black_wins"
    WHITE_WINS = "white_wins"
    DRAW = "draw"


def color_name(player: Optional[int]) -> Optional[str]:
    if player == BLACK:
        return "black"
    if player == WHITE:
        return "white"
    return None


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a display needs after an inbound call."""

    board: List[List[int]]
    current: Optional[int]
    valid_moves: List[Coord]
    black: int
    white: int
    passed: Optional[int] = None
    outcome: Outcome = Outcome.IN_PROGRESS
    last_move: Optional[Coord] = None
    flipped: List[Coord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": self.board,
            "current": self.current,
            "valid": [list(m) for m in self.valid_moves],
            "black": self.black,
            "white": self.white,
            "passed": self.passed,
            "outcome": self.outcome.value,
            "last": list(self.last_move) if self.last_move is not None else None,
            "flipped": [list(m) for m in self.flipped],
        }


class TurnController:
    """Owns whose turn it is and runs the pass/end-of-game protocol."""

    def __init__(self) -> None:
        self.reset()

    @classmethod
    def from_board(cls, board: Board, player: int = BLACK) -> "TurnController":
        """Return a controller positioned on ``board`` with ``player`` to move.

        If ``player`` has no legal move the turn protocol runs straight away:
        the other side moves with a pass flagged, or the game ends.
        """
        # Bypass ``__init__`` to avoid setting up a fresh game first.
        controller = cls.__new__(cls)
        controller._start(board, player)
        return controller

    def reset(self) -> None:
        self._start(Board(), BLACK)
        logger.info("New game started")

    def _start(self, board: Board, player: int) -> None:
        self.board = board
        self.current_player: Optional[int] = player
        self.active = True
        self.passed: Optional[int] = None
        self.outcome = Outcome.IN_PROGRESS
        self.last_move: Optional[Coord] = None
        self.last_flipped: Set[Coord] = set()
        self.valid_moves: Set[Coord] = self.compute_legal_moves(player)
        if not self.valid_moves:
            self._advance(-player)

    def compute_legal_moves(self, player: int) -> Set[Coord]:
        return {
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.board.is_legal_move(row, col, player)
        }

    def attempt_move(self, row: int, col: int) -> bool:
        """Play ``row``, ``col`` for the active player.

        Returns ``False`` without changing anything when the game is over or
        the cell is not a legal move. Out-of-range coordinates raise
        ``ValueError``.
        """
        if not self.board.inside(row, col):
            raise ValueError(f"Coordinates out of range: ({row}, {col})")
        if not self.active or (row, col) not in self.valid_moves:
            logger.debug("Ignoring move (%d, %d)", row, col)
            return False
        player = self.current_player
        self.last_flipped = self.board.apply_move(row, col, player)
        self.last_move = (row, col)
        self.passed = None
        logger.debug(
            "%s played (%d, %d), flipped %d", color_name(player), row, col, len(self.last_flipped)
        )
        self._advance(player)
        return True

    def _advance(self, player: int) -> None:
        # Switch to the opponent first, then fall back to the player who just moved.
        opponent = -player
        self.current_player = opponent
        self.valid_moves = self.compute_legal_moves(opponent)
        if self.valid_moves:
            return
        self.current_player = player
        self.valid_moves = self.compute_legal_moves(player)
        if self.valid_moves:
            self.passed = opponent
            logger.info("%s has no legal move and passes", color_name(opponent))
            return
        self._end_game()

    def _end_game(self) -> None:
        black, white = self.board.count_stones()
        if black > white:
            self.outcome = Outcome.BLACK_WINS
        elif white > black:
            self.outcome = Outcome.WHITE_WINS
        else:
            self.outcome = Outcome.DRAW
        self.active = False
        self.current_player = None
        self.valid_moves = set()
        logger.info("Game over: %s (%d - %d)", self.outcome.value, black, white)

    def dismiss_pass(self) -> None:
        self.passed = None

    def snapshot(self) -> GameSnapshot:
        black, white = self.board.count_stones()
        return GameSnapshot(
            board=self.board.rows(),
            current=self.current_player,
            valid_moves=sorted(self.valid_moves),
            black=black,
            white=white,
            passed=self.passed,
            outcome=self.outcome,
            last_move=self.last_move,
            flipped=sorted(self.last_flipped),
        )
