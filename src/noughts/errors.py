"""
Error types.

Two separate families:
- NoughtsError (a ValueError): bad user-facing input such as a malformed
  snapshot or an illegal move. Callers catch these and recover.
- ContractViolation (an AssertionError): a caller bug, e.g. asking the move
  selector to play on a full board. Nothing catches these.
"""
from __future__ import annotations

from typing import Optional


class NoughtsError(ValueError):
    """Base class for recoverable errors."""


class SnapshotError(NoughtsError):
    def __init__(self, text: str, reason: str, position: Optional[int] = None) -> None:
        self.text = text
        self.reason = reason
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"invalid snapshot {text!r}{where}: {reason}")


class IllegalMoveError(NoughtsError):
    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"illegal move at index {index}: {reason}")


class GameOverError(NoughtsError):
    """Raised when a move is applied to a finished game."""


class ContractViolation(AssertionError):
    """Programming error; not meant to be handled."""
