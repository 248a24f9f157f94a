"""Othello board and rules engine."""
from __future__ import annotations

from typing import Iterable, List, Set, Tuple

BOARD_SIZE = 8

EMPTY = 0
BLACK = 1
WHITE = -1

# Directions: 8 surrounding directions
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

Coord = Tuple[int, int]


class IllegalMoveError(ValueError):
    """Raised when a stone is applied to a cell that captures nothing."""

    def __init__(self, row: int, col: int, player: int) -> None:
        super().__init__(f"Illegal move ({row}, {col}) for player {player}")
        self.row = row
        self.col = col
        self.player = player


class Board:
    """8x8 Othello grid: 0 empty, 1 black, -1 white."""

    def __init__(self) -> None:
        self.grid: List[List[int]] = [[EMPTY for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        mid = BOARD_SIZE // 2
        # Starting pieces
        self.grid[mid - 1][mid - 1] = WHITE
        self.grid[mid - 1][mid] = BLACK
        self.grid[mid][mid - 1] = BLACK
        self.grid[mid][mid] = WHITE

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> "Board":
        """Build a board from an explicit grid of cell values.

        ``rows`` must be 8 rows of 8 values, each one of ``EMPTY``,
        ``BLACK`` or ``WHITE``. The rows are copied.
        """
        grid = [list(row) for row in rows]
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
        for row in grid:
            for cell in row:
                if cell not in (EMPTY, BLACK, WHITE):
                    raise ValueError(f"Invalid cell value: {cell!r}")
        # Bypass ``__init__`` to avoid laying out the opening only to
        # overwrite it immediately.
        board = cls.__new__(cls)
        board.grid = grid
        return board

    def rows(self) -> List[List[int]]:
        return [row[:] for row in self.grid]

    def inside(self, row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def _check_coords(self, row: int, col: int) -> None:
        if not self.inside(row, col):
            raise ValueError(f"Coordinates out of range: ({row}, {col})")

    def is_legal_move(self, row: int, col: int, player: int) -> bool:
        self._check_coords(row, col)
        if self.grid[row][col] != EMPTY:
            return False
        for dr, dc in DIRECTIONS:
            if self.capture_run(row, col, dr, dc, player):
                return True
        return False

    def capture_run(self, row: int, col: int, dr: int, dc: int, player: int) -> List[Coord]:
        """Return the opponent stones bracketed along one direction.

        The run only counts when it is closed by one of ``player``'s own
        stones. Hitting an empty cell or the edge of the board first yields
        an empty list.
        """
        opponent = -player
        run: List[Coord] = []
        r, c = row + dr, col + dc
        while self.inside(r, c):
            cell = self.grid[r][c]
            if cell == EMPTY:
                return []
            if cell == opponent:
                run.append((r, c))
            else:
                return run
            r += dr
            c += dc
        return []

    def captures(self, row: int, col: int, player: int) -> List[Coord]:
        """All stones ``player`` would flip by playing at ``row``, ``col``."""
        self._check_coords(row, col)
        captured: List[Coord] = []
        if self.grid[row][col] != EMPTY:
            return captured
        for dr, dc in DIRECTIONS:
            captured.extend(self.capture_run(row, col, dr, dc, player))
        return captured

    def apply_move(self, row: int, col: int, player: int) -> Set[Coord]:
        """Place a stone for ``player`` and flip every captured stone.

        Returns the set of flipped coordinates. Raises ``IllegalMoveError``
        without touching the grid if the move captures nothing.
        """
        captured = self.captures(row, col, player)
        if not captured:
            raise IllegalMoveError(row, col, player)
        self.grid[row][col] = player
        for cr, cc in captured:
            self.grid[cr][cc] = player
        return set(captured)

    def count_stones(self) -> Tuple[int, int]:
        black = sum(cell == BLACK for row in self.grid for cell in row)
        white = sum(cell == WHITE for row in self.grid for cell in row)
        return black, white
