"""
Exhaustive game-tree search (plain minimax), scored from a fixed player's view.

Scoring:
- +10 when `me` completes a line, -10 when the opponent does, 0 for a draw.
- No depth discount: a win in one ply and a win in five score the same.
- `me` maximizes, the opponent minimizes.
- Among equal root scores the first move in empty_cells order wins.

The tree is at most 9 plies deep, so there is no transposition table; every
child is a fresh board tuple.
"""
from __future__ import annotations

import logging
from typing import List, Tuple

from .board import Board, Mark, place
from .game_basics import empty_cells, get_winner

WIN_SCORE = 10
DRAW_SCORE = 0


class Search:
    """Minimax over one root position; counts the nodes it visits."""

    def __init__(self, me: Mark) -> None:
        self.me = me
        self.nodes = 0

    def minimax(self, board: Board, to_move: Mark) -> int:
        self.nodes += 1
        w = get_winner(board)
        if w is not None:
            return WIN_SCORE if w is self.me else -WIN_SCORE
        moves = empty_cells(board)
        if not moves:
            return DRAW_SCORE
        scores = [self.minimax(place(board, mv, to_move), to_move.other) for mv in moves]
        return max(scores) if to_move is self.me else min(scores)

    def score_moves(self, board: Board) -> List[Tuple[int, int]]:
        return [
            (mv, self.minimax(place(board, mv, self.me), self.me.other))
            for mv in empty_cells(board)
        ]


def minimax(board: Board, to_move: Mark, me: Mark) -> int:
    return Search(me).minimax(board, to_move)


def score_moves(board: Board, mark: Mark) -> List[Tuple[int, int]]:
    """Score every legal move of `mark`, in empty_cells order."""
    return Search(mark).score_moves(board)


def pick_best(scored: List[Tuple[int, int]]) -> Tuple[int, int]:
    if not scored:
        raise ValueError("no legal moves available")
    best_idx, best_score = scored[0]
    for mv, score in scored[1:]:
        if score > best_score:
            best_idx, best_score = mv, score
    return best_idx, best_score


def best_move(board: Board, mark: Mark) -> Tuple[int, int]:
    """Return (index, score) of the best move for `mark`; raises ValueError on a full board."""
    search = Search(mark)
    best_idx, best_score = pick_best(search.score_moves(board))
    logging.debug(
        "minimax for %s evaluated %d positions: best=%d score=%d",
        mark.symbol, search.nodes, best_idx, best_score,
    )
    return best_idx, best_score
