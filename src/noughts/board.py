"""
Board model: 9 cells in row-major order.

Teaching notes:
- A board is a tuple of 9 ints: 0=empty, 1=X, 2=O. X always starts.
- Index i lives at row i // 3, column i % 3.
- Boards are never mutated; place() returns a new tuple, so any "what if"
  evaluation works on its own copy.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Tuple

from .errors import IllegalMoveError

EMPTY = 0
SIZE = 9

Board = Tuple[int, ...]


class Mark(IntEnum):
    X = 1
    O = 2

    @property
    def other(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X

    @property
    def symbol(self) -> str:
        return self.name


def new_board() -> Board:
    return tuple([EMPTY] * SIZE)


def as_board(cells: Iterable[int]) -> Board:
    """Validate a 9-cell sequence of 0/1/2 and return it as a board tuple."""
    b = tuple(int(v) for v in cells)
    if len(b) != SIZE:
        raise ValueError(f"board must have {SIZE} cells, got {len(b)}")
    if any(v not in (EMPTY, Mark.X, Mark.O) for v in b):
        raise ValueError(f"board cells must be 0, 1 or 2: {b}")
    return b


def place(board: Board, idx: int, mark: Mark) -> Board:
    if not 0 <= idx < SIZE:
        raise IllegalMoveError(idx, "out of range")
    if board[idx] != EMPTY:
        raise IllegalMoveError(idx, "cell is occupied")
    lst = list(board)
    lst[idx] = int(mark)
    return tuple(lst)
