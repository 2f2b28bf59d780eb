"""
Tactics and simple motifs: immediate wins/blocks, forks, positional order.
Teaching notes:
- One ply of lookahead already finds every win-now and every must-block.
- Only the lines through the candidate cell count.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from .board import EMPTY, Board, Mark, place
from .game_basics import WIN_PATTERNS

# center, corners, edges
POSITIONAL_ORDER = [4, 0, 2, 6, 8, 1, 3, 5, 7]


def completes_line(board: Sequence[int], idx: int, mark: Mark) -> bool:
    """True if `mark` at `idx` fills a triple through `idx`; other lines are ignored."""
    for pat in WIN_PATTERNS:
        if idx in pat and all(j == idx or board[j] == mark for j in pat):
            return True
    return False


def immediate_winning_moves(board: Board, mark: Mark) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY and completes_line(board, i, mark)]


def blocking_moves(board: Board, mark: Mark) -> List[int]:
    """Cells where the opponent of `mark` would complete a line next ply."""
    return immediate_winning_moves(board, mark.other)


def fork_moves(board: Board, mark: Mark) -> List[int]:
    forks: List[int] = []
    for i, v in enumerate(board):
        if v != EMPTY:
            continue
        if len(immediate_winning_moves(place(board, i, mark), mark)) >= 2:
            forks.append(i)
    return forks


def positional_move(board: Sequence[int]) -> Optional[int]:
    for i in POSITIONAL_ORDER:
        if board[i] == EMPTY:
            return i
    return None


def gives_opponent_immediate_win(board: Board, mark: Mark, move: int) -> bool:
    if board[move] != EMPTY:
        return False
    return len(immediate_winning_moves(place(board, move, mark), mark.other)) > 0
