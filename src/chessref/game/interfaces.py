"""Abstract interfaces for the game layer.

The controller depends on these ABCs, not on concrete players.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessref.core.enums import Color

if TYPE_CHECKING:
    from chessref.core.board import Board
    from chessref.core.move import Move


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # recommender is working
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    CHECKMATE = auto()
    STALEMATE = auto()
    RESIGNATION = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or recommender-backed)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, board: Board, history: Sequence[Move]) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via the UI).
        For recommender players this hands the position to whoever
        runs the recommender, typically a worker thread.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an in-flight recommendation (no-op for humans)."""
