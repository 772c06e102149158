"""Game state machine: tracks phase transitions and move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chessref.analysis.models import TacticalSituation
from chessref.analysis.tactics import analyze_tactics
from chessref.core.attacks import king_in_check
from chessref.core.board import Board
from chessref.core.enums import Color, Winner
from chessref.core.errors import IllegalMoveError, InvariantViolationError
from chessref.core.legality import apply_move
from chessref.core.move import Move
from chessref.core.notation import board_to_placement, history_to_text
from chessref.core.rules import GameStateValidation, validate
from chessref.game.interfaces import GameEndReason, GamePhase

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    placement_after: str
    was_check: bool = False
    was_capture: bool = False
    commentary: str = ""


@dataclass
class GameState:
    """Owns one game's board and history: phase, result, move records.

    The board is replaced, never mutated, on every ply; the boards before
    each ply are kept so a move can be taken back.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: Winner | None = field(default=None, init=False)
    end_reason: GameEndReason | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_board: Board = field(default_factory=Board.initial, init=False)
    _boards: list[Board] = field(default_factory=list, init=False, repr=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Initialise (or reset) the game.

        Raises:
            InvariantViolationError: a side has no king.
        """
        board = board if board is not None else Board.initial()
        for color in Color:
            if board.king_square(color) is None:
                raise InvariantViolationError(f"No {color} king on board")

        self.start_board = board
        self.board = board
        self.side_to_move = side_to_move
        self.phase = GamePhase.AWAITING_MOVE
        self.result = None
        self.end_reason = None
        self.move_history.clear()
        self._boards.clear()
        self._check_game_over()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move, commentary: str = "") -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for the legality check.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            raise IllegalMoveError(move.notation, "no piece on the origin square")

        self._boards.append(self.board)
        self.board = apply_move(self.board, move.from_sq, move.to_sq, move.promotion)
        self.side_to_move = self.side_to_move.opposite

        record = MoveRecord(
            move=move,
            notation=move.notation,
            placement_after=board_to_placement(self.board),
            was_check=king_in_check(self.board, self.side_to_move),
            was_capture=move.is_capture,
            commentary=commentary,
        )
        self.move_history.append(record)

        self._check_game_over()
        return record

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None

        record = self.move_history.pop()
        self.board = self._boards.pop()
        self.side_to_move = self.side_to_move.opposite

        # Reset result if we un-did a game-ending move
        if self.result is not None:
            self.result = None
            self.end_reason = None
            self.phase = GamePhase.AWAITING_MOVE

        return record.move

    # ── Resignation ──────────────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self.result = Winner.of(color.opposite)
        self.end_reason = GameEndReason.RESIGNATION
        self.phase = GamePhase.GAME_OVER

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def moves(self) -> list[Move]:
        return [record.move for record in self.move_history]

    def transcript(self) -> str:
        return history_to_text(self.moves)

    def validation(self) -> GameStateValidation:
        return validate(self.board, self.side_to_move)

    def tactics(self) -> TacticalSituation:
        return analyze_tactics(self.board, self.side_to_move)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return list(self.validation().legal_moves)

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> None:
        state = self.validation()
        if not state.game_over:
            return
        self.result = state.winner
        self.end_reason = (
            GameEndReason.CHECKMATE if state.is_checkmate else GameEndReason.STALEMATE
        )
        self.phase = GamePhase.GAME_OVER
        _LOGGER.info(
            "Game over after %d plies: %s (%s)",
            self.ply_count,
            self.result,
            self.end_reason.name.lower(),
        )
