"""
Move selection for the computer player, in three tiers of strength.

- RANDOM: uniform over the empty cells.
- HEURISTIC: win now, else block, else center/corner/edge order.
- EXHAUSTIVE: full minimax (see solver).
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional, Union

import numpy as np

from .board import Board, Mark
from .errors import ContractViolation
from .game_basics import empty_cells
from .solver import best_move
from .tactics import blocking_moves, immediate_winning_moves, positional_move


class Difficulty(IntEnum):
    RANDOM = 1
    HEURISTIC = 2
    EXHAUSTIVE = 3

    @classmethod
    def parse(cls, raw: Union[str, int, None]) -> "Difficulty":
        """Map 1/2/3 (text or int) to a tier; anything else falls back to HEURISTIC."""
        try:
            return cls(int(str(raw).strip()))
        except ValueError:
            logging.warning("Unrecognized difficulty %r; using %s", raw, cls.HEURISTIC.name.lower())
            return cls.HEURISTIC


def random_move(board: Board, rng: Optional[np.random.Generator] = None) -> int:
    moves = empty_cells(board)
    if not moves:
        raise ContractViolation("random_move called on a full board")
    if rng is None:
        rng = np.random.default_rng()
    return int(rng.choice(moves))


def heuristic_move(
    board: Board,
    mark: Mark,
    rng: Optional[np.random.Generator] = None,
    positional: bool = True,
) -> int:
    wins = immediate_winning_moves(board, mark)
    if wins:
        return wins[0]
    blocks = blocking_moves(board, mark)
    if blocks:
        return blocks[0]
    if positional:
        mv = positional_move(board)
        if mv is not None:
            return mv
    return random_move(board, rng)


def exhaustive_move(board: Board, mark: Mark) -> int:
    idx, _ = best_move(board, mark)
    return idx


def select_move(
    board: Board,
    mark: Mark,
    difficulty: Difficulty,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """Choose a cell for `mark`.

    Raises ContractViolation when the board has no empty cell or the
    difficulty is not a Difficulty member; both are caller bugs.
    """
    if not empty_cells(board):
        raise ContractViolation("select_move called on a full board")
    if not isinstance(difficulty, Difficulty):
        raise ContractViolation(f"unrecognized difficulty: {difficulty!r}")

    if difficulty is Difficulty.RANDOM:
        mv = random_move(board, rng)
    elif difficulty is Difficulty.HEURISTIC:
        mv = heuristic_move(board, mark, rng)
    elif difficulty is Difficulty.EXHAUSTIVE:
        mv = exhaustive_move(board, mark)
    else:
        raise ContractViolation(f"unhandled difficulty: {difficulty!r}")
    logging.debug("%s (%s) selects %d", mark.symbol, difficulty.name.lower(), mv)
    return mv
