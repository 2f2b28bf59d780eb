"""Console rendering of a board."""
from __future__ import annotations

from typing import List, Sequence

from .board import EMPTY, Mark

INDEX_MAP = "1 | 2 | 3\n4 | 5 | 6\n7 | 8 | 9"


def symbol(cell: int) -> str:
    return " " if cell == EMPTY else Mark(cell).symbol


def render_board(board: Sequence[int]) -> str:
    lines: List[str] = []
    for r in range(3):
        row = board[3 * r: 3 * r + 3]
        lines.append(" " + " | ".join(symbol(v) for v in row) + " ")
        if r < 2:
            lines.append("---+---+---")
    return "\n".join(lines)
