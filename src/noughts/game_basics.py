"""
Game basics: rules, winner/draw checks, validity.

Teaching notes:
- Winning lines are checked in a fixed order (rows, columns, then the two
  diagonals), so even an unreachable board with two finished lines has a
  deterministic answer.
- A "ply" is a half-move (one player's turn).
- Valid states have counts either equal (X to move) or X has one more (O to move).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .board import EMPTY, Mark

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6],
]


@dataclass(frozen=True)
class Outcome:
    winner: Optional[Mark]
    is_draw: bool

    @property
    def is_terminal(self) -> bool:
        return self.winner is not None or self.is_draw


def empty_cells(board: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def get_winner(board: Sequence[int]) -> Optional[Mark]:
    for a, b, c in WIN_PATTERNS:
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return Mark(v)
    return None


def is_full(board: Sequence[int]) -> bool:
    return EMPTY not in board


def is_draw(board: Sequence[int]) -> bool:
    return is_full(board) and get_winner(board) is None


def outcome(board: Sequence[int]) -> Outcome:
    w = get_winner(board)
    return Outcome(winner=w, is_draw=w is None and is_full(board))


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    return list(board).count(Mark.X), list(board).count(Mark.O)


def current_player(board: Sequence[int]) -> Mark:
    x, o = get_piece_counts(board)
    return Mark.O if x > o else Mark.X


def is_valid_state(board: Sequence[int]) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))

    if count_wins(Mark.X) > 0 and count_wins(Mark.O) > 0:
        return False
    w = get_winner(board)
    if w is Mark.X and x_count != o_count + 1:
        return False
    if w is Mark.O and x_count != o_count:
        return False
    return True
