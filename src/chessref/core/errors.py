"""Rule-violation taxonomy.

Kernel checks report violations as values (booleans, ``None`` or a
:class:`~chessref.core.legality.MoveAttempt` carrying one of these
exceptions); they are only raised by helpers that explicitly ask for it.
"""

from __future__ import annotations


class ChessRuleError(ValueError):
    """Base class for every rule violation reported by the engine."""


class MalformedInputError(ChessRuleError):
    """Notation outside ``[a-h][1-8]`` or a move string without one ``-``."""


class IllegalMoveError(ChessRuleError):
    """Well-formed move that the rules reject."""

    def __init__(self, notation: str, reason: str) -> None:
        super().__init__(f"Illegal move {notation}: {reason}")
        self.notation = notation
        self.reason = reason


class InvariantViolationError(ChessRuleError):
    """Board that breaks a structural precondition, e.g. no king to move."""
