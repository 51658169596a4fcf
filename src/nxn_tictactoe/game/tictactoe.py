"""
Rules for N x N tic-tac-toe.

A board is a read-only ``int8`` numpy array of shape (N, N) holding
``PLAYER_X`` (1), ``PLAYER_O`` (-1) or ``EMPTY`` (0). Every move produces a
fresh array, so a board can be shared freely between readers.

A game is won by filling one full line: a row, a column, the main diagonal
or the anti-diagonal. There are exactly 2N + 2 such lines for any N.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterator, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from nxn_tictactoe.config import SEARCH_CONFIG
from nxn_tictactoe.marks import EMPTY, PLAYER_O, PLAYER_X, SYMBOLS

_PARSE_SYMBOLS = {'X': PLAYER_X, 'O': PLAYER_O, '_': EMPTY, '.': EMPTY}

Line = Tuple[Tuple[int, int], ...]


class IllegalMoveError(ValueError):
    """Raised when a move targets an off-board or occupied cell."""

    def __init__(self, row: int, col: int):
        super().__init__(f"Invalid move: position [{row}, {col}] is not available")
        self.row = row
        self.col = col


@dataclass(frozen=True)
class Move:
    """A board coordinate, optionally carrying an advisory score."""
    row: int
    col: int
    score: Optional[float] = field(default=None, compare=False)

    def __iter__(self):
        yield self.row
        yield self.col

    def __repr__(self):
        if self.score is None:
            return f"Move({self.row}, {self.col})"
        return f"Move({self.row}, {self.col}, score={self.score})"


class WinnerInfo(NamedTuple):
    winner: Optional[int]
    winning_line: Optional[Line]


@lru_cache(maxsize=None)
def generate_lines(size: int) -> Tuple[Line, ...]:
    """
    All winnable lines for a board of the given size.

    Order: rows (top to bottom), columns (left to right), main diagonal,
    anti-diagonal. Winner detection relies on this order.
    """
    if size < 1:
        raise ValueError(f"Board size must be at least 1, got {size}")

    lines = []
    for row in range(size):
        lines.append(tuple((row, col) for col in range(size)))
    for col in range(size):
        lines.append(tuple((row, col) for row in range(size)))
    lines.append(tuple((i, i) for i in range(size)))
    lines.append(tuple((i, size - 1 - i) for i in range(size)))
    return tuple(lines)


@lru_cache(maxsize=None)
def _flat_lines(size: int) -> Tuple[Tuple[int, ...], ...]:
    # Same lines as row-major flat indices, for scanning a raveled board
    return tuple(tuple(row * size + col for row, col in line) for line in generate_lines(size))


def _freeze(board: np.ndarray) -> np.ndarray:
    board.flags.writeable = False
    return board


def empty_board(size: int) -> np.ndarray:
    """Returns an N x N board of empty cells."""
    if size < 1:
        raise ValueError(f"Board size must be at least 1, got {size}")
    return _freeze(np.zeros((size, size), dtype=np.int8))


def clone_board(board) -> np.ndarray:
    """Value copy of a board (accepts any square array-like of marks)."""
    copy = np.array(board, dtype=np.int8, copy=True)
    if copy.ndim != 2 or copy.shape[0] != copy.shape[1]:
        raise ValueError(f"Board must be square, got shape {copy.shape}")
    return _freeze(copy)


def is_legal_move(board: np.ndarray, row: int, col: int) -> bool:
    size = board.shape[0]
    return 0 <= row < size and 0 <= col < size and board[row, col] == EMPTY


def apply_move(board: np.ndarray, row: int, col: int, mark: int) -> np.ndarray:
    """
    Returns a new board with `mark` placed at (row, col).

    Raises:
        IllegalMoveError: if the cell is off-board or already occupied
    """
    if mark not in (PLAYER_X, PLAYER_O):
        raise ValueError(f"Unknown mark: {mark}")
    if not is_legal_move(board, row, col):
        raise IllegalMoveError(row, col)

    new_board = board.copy()
    new_board[row, col] = mark
    return _freeze(new_board)


def available_moves(board: np.ndarray) -> Iterator[Move]:
    """Empty cells in row-major order. Recomputed on every call."""
    rows, cols = np.nonzero(board == EMPTY)
    for row, col in zip(rows.tolist(), cols.tolist()):
        yield Move(row, col)


def check_winner(board: np.ndarray) -> WinnerInfo:
    """
    Returns the winning mark and line, or (None, None).

    Lines are scanned in generation order and the first complete one is
    reported, even if several lines are complete at once.
    """
    size = board.shape[0]
    cells = board.ravel().tolist()

    for line, flat in zip(generate_lines(size), _flat_lines(size)):
        first = cells[flat[0]]
        if first != EMPTY and all(cells[i] == first for i in flat[1:]):
            return WinnerInfo(first, line)

    return WinnerInfo(None, None)


def is_board_full(board: np.ndarray) -> bool:
    return not bool((board == EMPTY).any())


def is_game_over(board: np.ndarray) -> bool:
    return check_winner(board).winner is not None or is_board_full(board)


def get_opponent(mark: int) -> int:
    return -mark


def evaluate_board(board: np.ndarray, mark: int) -> int:
    """
    Terminal evaluation from `mark`'s point of view: +10 win, -10 loss,
    0 for a draw or an unfinished game.
    """
    winner = check_winner(board).winner
    if winner == mark:
        return SEARCH_CONFIG['win_score']
    elif winner == get_opponent(mark):
        return -SEARCH_CONFIG['win_score']
    return 0


def get_center_position(size: int) -> Move:
    center = size // 2
    return Move(center, center)


def get_corner_positions(size: int) -> list:
    last = size - 1
    return [Move(0, 0), Move(0, last), Move(last, 0), Move(last, last)]


def get_edge_positions(size: int) -> list:
    """Border cells that are not corners."""
    last = size - 1
    edges = []
    for col in range(1, last):
        edges.append(Move(0, col))
        edges.append(Move(last, col))
    for row in range(1, last):
        edges.append(Move(row, 0))
        edges.append(Move(row, last))
    return edges


def count_marks_in_line(board: np.ndarray, line: Line, mark: int) -> int:
    return sum(1 for row, col in line if board[row, col] == mark)


def is_line_empty(board: np.ndarray, line: Line) -> bool:
    return all(board[row, col] == EMPTY for row, col in line)


def is_winning_position(row: int, col: int, winning_line: Optional[Line]) -> bool:
    if not winning_line:
        return False
    return (row, col) in winning_line


def board_to_string(board: np.ndarray) -> str:
    return "\n".join(" ".join(SYMBOLS[int(cell)] for cell in row) for row in board)


def board_from_rows(rows: Sequence[str]) -> np.ndarray:
    """
    Build a board from text rows, e.g. ``["XX_", "OO_", "___"]``.

    Whitespace inside a row is ignored; ``_`` and ``.`` both mean empty.
    """
    grid = []
    for text in rows:
        symbols = [ch for ch in text.upper() if not ch.isspace()]
        try:
            grid.append([_PARSE_SYMBOLS[ch] for ch in symbols])
        except KeyError as e:
            raise ValueError(f"Unknown board symbol {e.args[0]!r} in row {text!r}") from None
    if any(len(row) != len(grid) for row in grid):
        raise ValueError(f"Board rows must form a square, got {[len(r) for r in grid]}")
    return clone_board(grid)


def board_from_string(text: str) -> np.ndarray:
    return board_from_rows([line for line in text.strip().splitlines() if line.strip()])

