"""
Turn controller.

Teaching notes:
- Status is one of AwaitingMove(mark), Won(mark) or Draw(); the last two are
  terminal.
- GameState is immutable; apply() returns the next state.
- Game drives a full game: human marks read text through `read_line`,
  computer marks ask the move selector.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, FrozenSet, Iterable, Optional, Tuple, Union

import numpy as np

from .board import EMPTY, Board, Mark, as_board, new_board, place
from .errors import GameOverError
from .game_basics import current_player, empty_cells, get_winner
from .render import render_board
from .selector import Difficulty, select_move
from .snapshot import parse_snapshot


@dataclass(frozen=True)
class AwaitingMove:
    mark: Mark


@dataclass(frozen=True)
class Won:
    mark: Mark


@dataclass(frozen=True)
class Draw:
    pass


Status = Union[AwaitingMove, Won, Draw]


def status_of(board: Board, to_move: Mark) -> Status:
    w = get_winner(board)
    if w is not None:
        return Won(w)
    if not empty_cells(board):
        return Draw()
    return AwaitingMove(to_move)


@dataclass(frozen=True)
class GameState:
    board: Board
    to_move: Mark
    difficulty: Difficulty = Difficulty.HEURISTIC
    history: Tuple[int, ...] = field(default=())

    @classmethod
    def new(cls, difficulty: Difficulty = Difficulty.HEURISTIC) -> "GameState":
        return cls(board=new_board(), to_move=Mark.X, difficulty=difficulty)

    @classmethod
    def from_board(
        cls,
        board: Iterable[int],
        difficulty: Difficulty = Difficulty.HEURISTIC,
        to_move: Optional[Mark] = None,
    ) -> "GameState":
        b = as_board(board)
        return cls(board=b, to_move=to_move or current_player(b), difficulty=difficulty)

    @classmethod
    def from_snapshot(cls, text: str, difficulty: Difficulty = Difficulty.HEURISTIC) -> "GameState":
        snap = parse_snapshot(text)
        return cls(board=snap.board, to_move=snap.to_move, difficulty=difficulty)

    @property
    def status(self) -> Status:
        return status_of(self.board, self.to_move)

    @property
    def is_over(self) -> bool:
        return not isinstance(self.status, AwaitingMove)

    def apply(self, index: int) -> "GameState":
        """Place the side-to-move's mark at `index` and pass the turn."""
        if self.is_over:
            raise GameOverError(f"game is over ({self.status})")
        board = place(self.board, index, self.to_move)
        return replace(self, board=board, to_move=self.to_move.other, history=self.history + (index,))


def parse_position(raw: str) -> Optional[int]:
    """Turn 1-based position text into a 0-based index, or None if it is not 1..9."""
    try:
        pos = int(raw.strip())
    except ValueError:
        return None
    if 1 <= pos <= 9:
        return pos - 1
    return None


ReadLine = Callable[[str], str]
Write = Callable[[str], None]
Render = Callable[[Board], str]


class Game:
    def __init__(
        self,
        state: GameState,
        human_marks: Iterable[Mark] = (Mark.X,),
        read_line: ReadLine = input,
        write: Write = print,
        render: Render = render_board,
        rng: Optional[np.random.Generator] = None,
        tiers: Optional[Dict[Mark, Difficulty]] = None,
    ) -> None:
        self.state = state
        self.human_marks: FrozenSet[Mark] = frozenset(human_marks)
        self.read_line = read_line
        self.write = write
        self.render = render
        self.rng = rng
        self.tiers: Dict[Mark, Difficulty] = dict(tiers or {})

    def prompt_human(self, mark: Mark) -> int:
        while True:
            raw = self.read_line(f"Player {mark.symbol}, enter a position (1-9): ")
            idx = parse_position(raw)
            if idx is not None and self.state.board[idx] == EMPTY:
                return idx
            self.write("Invalid input. Please try again.")

    def difficulty_for(self, mark: Mark) -> Difficulty:
        return self.tiers.get(mark, self.state.difficulty)

    def next_move(self) -> int:
        mark = self.state.to_move
        if mark in self.human_marks:
            return self.prompt_human(mark)
        idx = select_move(self.state.board, mark, self.difficulty_for(mark), self.rng)
        self.write(f"Computer ({mark.symbol}) plays {idx + 1}")
        return idx

    def step(self) -> Status:
        if self.state.is_over:
            raise GameOverError(f"game is over ({self.state.status})")
        idx = self.next_move()
        self.state = self.state.apply(idx)
        logging.debug("ply %d: %s", len(self.state.history), self.state.history)
        return self.state.status

    def play(self) -> Status:
        status = self.state.status
        while isinstance(status, AwaitingMove):
            self.write("\n" + self.render(self.state.board))
            status = self.step()
        self.write("\n" + self.render(self.state.board))
        if isinstance(status, Won):
            self.write(f"Player {status.mark.symbol} wins!")
        else:
            self.write("It's a draw!")
        return status
