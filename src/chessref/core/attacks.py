"""Attack and check detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chessref.core.enums import Color
from chessref.core.movement import attacks
from chessref.core.types import Square

if TYPE_CHECKING:
    from chessref.core.board import Board

_LOGGER = logging.getLogger(__name__)


def attackers_of(board: Board, square: Square, by_color: Color) -> list[Square]:
    """Squares of every *by_color* piece attacking *square*, row-major."""
    return [
        sq for sq, _piece in board.pieces(by_color) if attacks(board, sq, square)
    ]


def square_is_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Is *square* attacked by any piece of *by_color*?"""
    return any(attacks(board, sq, square) for sq, _piece in board.pieces(by_color))


def king_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    A board without such a king reports "not in check".
    """
    king_sq = board.king_square(color)
    if king_sq is None:
        _LOGGER.debug("No %s king on board; treating as not in check", color)
        return False
    return square_is_attacked(board, king_sq, color.opposite)


def checking_pieces(board: Board, color: Color) -> list[Square]:
    """Enemy squares currently giving check to *color*'s king."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return []
    return attackers_of(board, king_sq, color.opposite)
