"""High-level chess rules: check, checkmate, stalemate, game result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessref.core.attacks import checking_pieces, king_in_check
from chessref.core.enums import Color, PieceType, Winner
from chessref.core.legality import all_legal_moves

if TYPE_CHECKING:
    from chessref.core.board import Board
    from chessref.core.move import Move
    from chessref.core.types import Square


@dataclass(frozen=True, slots=True)
class GameStateValidation:
    """Everything a caller needs before accepting a move for *color*.

    ``is_checkmate`` implies ``in_check`` with no legal moves,
    ``is_stalemate`` implies no check and no legal moves, and ``game_over``
    is exactly one of the two.
    """

    in_check: bool
    is_checkmate: bool
    is_stalemate: bool
    checking_pieces: tuple[Square, ...]
    legal_moves: tuple[Move, ...]
    game_over: bool
    winner: Winner | None

    @property
    def legal_notations(self) -> list[str]:
        return [move.notation for move in self.legal_moves]


def validate(board: Board, color: Color) -> GameStateValidation:
    """Authoritative state of *board* with *color* to move."""
    in_check = king_in_check(board, color)
    checkers = tuple(checking_pieces(board, color)) if in_check else ()
    legal = tuple(all_legal_moves(board, color))

    is_checkmate = in_check and not legal
    is_stalemate = not in_check and not legal

    winner: Winner | None = None
    if is_checkmate:
        winner = Winner.of(color.opposite)
    elif is_stalemate:
        winner = Winner.DRAW

    return GameStateValidation(
        in_check=in_check,
        is_checkmate=is_checkmate,
        is_stalemate=is_stalemate,
        checking_pieces=checkers,
        legal_moves=legal,
        game_over=is_checkmate or is_stalemate,
        winner=winner,
    )


class Rules:
    """Static rule-checker that operates on a board and a side to move."""

    # Draws by repetition or the fifty-move rule are not tracked: a board
    # value carries no history.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return king_in_check(board, color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        if not king_in_check(board, color):
            return False
        return len(all_legal_moves(board, color)) == 0

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        if king_in_check(board, color):
            return False
        return len(all_legal_moves(board, color)) == 0

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K and K+minor vs K.  Reported only; it never ends a game."""
        non_kings = [
            piece
            for _sq, piece in board.pieces()
            if piece.piece_type != PieceType.KING
        ]
        if not non_kings:
            return True
        if len(non_kings) == 1:
            return non_kings[0].piece_type in (PieceType.KNIGHT, PieceType.BISHOP)
        return False

    @staticmethod
    def game_result(board: Board, color: Color) -> Winner | None:
        """Winner if the game is decided on the board, else ``None``."""
        return validate(board, color).winner
