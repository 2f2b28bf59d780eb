"""noughts package.

Tic-tac-toe rules, a three-tier computer opponent, a turn controller and a
small console CLI.

Convenience imports are exposed for common workflows.
"""

from .board import Mark, new_board, place
from .errors import ContractViolation, IllegalMoveError, SnapshotError
from .game_basics import empty_cells, get_winner, outcome
from .selector import Difficulty, select_move
from .snapshot import format_snapshot, parse_snapshot
from .turns import AwaitingMove, Draw, Game, GameState, Won

__all__ = [
    "Mark",
    "new_board",
    "place",
    "empty_cells",
    "get_winner",
    "outcome",
    "Difficulty",
    "select_move",
    "parse_snapshot",
    "format_snapshot",
    "GameState",
    "Game",
    "AwaitingMove",
    "Won",
    "Draw",
    "SnapshotError",
    "IllegalMoveError",
    "ContractViolation",
]
