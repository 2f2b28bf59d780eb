"""Text snapshots of a board: 9 characters, row-major, e.g. ``XOX____OX``."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

from .board import EMPTY, SIZE, Board, Mark
from .errors import SnapshotError
from .game_basics import current_player


@dataclass(frozen=True)
class Snapshot:
    board: Board
    to_move: Mark


@dataclass(frozen=True)
class Codec:
    x: str = "X"
    o: str = "O"
    empty: str = "_"

    def __post_init__(self) -> None:
        symbols = (self.x, self.o, self.empty)
        if any(len(s) != 1 for s in symbols) or len(set(symbols)) != 3:
            raise ValueError(f"codec symbols must be three distinct characters: {symbols}")

    @property
    def decode_map(self) -> Dict[str, int]:
        return {self.x: int(Mark.X), self.o: int(Mark.O), self.empty: EMPTY}

    def parse(self, text: str) -> Snapshot:
        raw = text.strip()
        if len(raw) > SIZE:
            raise SnapshotError(text, f"expected {SIZE} characters, got {len(raw)}", position=SIZE)
        lookup = self.decode_map
        cells = []
        for pos, ch in enumerate(raw):
            if ch not in lookup:
                raise SnapshotError(text, f"unexpected character {ch!r}", position=pos)
            cells.append(lookup[ch])
        if len(cells) < SIZE:
            raise SnapshotError(text, f"expected {SIZE} characters, got {len(raw)}", position=len(raw))
        board = tuple(cells)
        return Snapshot(board=board, to_move=current_player(board))

    def format(self, board: Sequence[int]) -> str:
        encode = {v: k for k, v in self.decode_map.items()}
        return "".join(encode[int(v)] for v in board)


DEFAULT_CODEC = Codec()


def parse_snapshot(text: str) -> Snapshot:
    return DEFAULT_CODEC.parse(text)


def format_snapshot(board: Sequence[int]) -> str:
    return DEFAULT_CODEC.format(board)
