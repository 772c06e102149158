"""Piece movement geometry: pseudo-legal moves and attack patterns.

Nothing here looks at check.  :func:`is_pseudo_legal` answers "is this
move shaped correctly"; :func:`attacks` answers "does this piece hit that
square", which differs only for pawns (diagonals count even when empty)
and for the occupant of the target (own pieces count, i.e. defence).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessref.core.enums import Color, PieceType
from chessref.core.geometry import (
    BISHOP_DIRS,
    QUEEN_DIRS,
    ROOK_DIRS,
    is_aligned,
    is_diagonal,
    is_orthogonal,
    path_clear,
    ray,
)
from chessref.core.types import ALL_SQUARES, Square

if TYPE_CHECKING:
    from chessref.core.board import Board
    from chessref.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for sq in ALL_SQUARES:
        moves = [sq.offset(d_row, d_col) for d_row, d_col in offsets]
        targets[sq] = tuple(sorted(m for m in moves if m is not None))
    return targets


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)


def pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


# -- Pseudo-legal moves -----------------------------------------------------


def is_pseudo_legal(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Whether the piece on *from_sq* may move to *to_sq*, ignoring check."""
    piece = board[from_sq]
    if piece is None or from_sq == to_sq:
        return False

    target = board[to_sq]
    if target is not None and target.color == piece.color:
        return False

    d_row = to_sq.row - from_sq.row
    d_col = to_sq.col - from_sq.col
    ptype = piece.piece_type

    if ptype == PieceType.PAWN:
        return _pawn_move_ok(board, piece, from_sq, to_sq, target)
    if ptype == PieceType.KNIGHT:
        return (abs(d_row), abs(d_col)) in ((1, 2), (2, 1))
    if ptype == PieceType.BISHOP:
        return is_diagonal(from_sq, to_sq) and path_clear(board, from_sq, to_sq)
    if ptype == PieceType.ROOK:
        return is_orthogonal(from_sq, to_sq) and path_clear(board, from_sq, to_sq)
    if ptype == PieceType.QUEEN:
        return is_aligned(from_sq, to_sq) and path_clear(board, from_sq, to_sq)
    # King: one step in any direction. Castling lives in the legal move filter.
    return abs(d_row) <= 1 and abs(d_col) <= 1


def _pawn_move_ok(
    board: Board,
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
    target: Piece | None,
) -> bool:
    step = piece.color.pawn_direction
    d_row = to_sq.row - from_sq.row
    d_col = to_sq.col - from_sq.col

    if d_col == 0:
        if target is not None:
            return False
        if d_row == step:
            return True
        if d_row == 2 * step and from_sq.row == pawn_start_row(piece.color):
            return board.is_empty(Square(from_sq.row + step, from_sq.col))
        return False

    # Diagonal only onto an enemy piece; no en passant.
    return abs(d_col) == 1 and d_row == step and target is not None


def pseudo_legal_targets(board: Board, from_sq: Square) -> list[Square]:
    """Pseudo-legal destinations of the piece on *from_sq*, row-major."""
    piece = board[from_sq]
    if piece is None:
        return []

    ptype = piece.piece_type
    if ptype == PieceType.KNIGHT:
        candidates: list[Square] = list(_KNIGHT_TARGETS[from_sq])
    elif ptype == PieceType.KING:
        candidates = list(_KING_TARGETS[from_sq])
    elif ptype == PieceType.PAWN:
        step = piece.color.pawn_direction
        candidates = [
            sq
            for sq in (
                from_sq.offset(step, -1),
                from_sq.offset(step, 0),
                from_sq.offset(step, 1),
                from_sq.offset(2 * step, 0),
            )
            if sq is not None
        ]
    else:
        candidates = []
        for d_row, d_col in _SLIDER_DIRS[ptype]:
            for sq in ray(from_sq, d_row, d_col):
                candidates.append(sq)
                if not board.is_empty(sq):
                    break

    return sorted(sq for sq in candidates if is_pseudo_legal(board, from_sq, sq))


# -- Attack patterns --------------------------------------------------------


def attacks(board: Board, from_sq: Square, target: Square) -> bool:
    """Whether the piece on *from_sq* attacks (or defends) *target*.

    Pawns hit both forward diagonals whether or not anything stands there.
    The colour of whatever occupies *target* is not considered.
    """
    piece = board[from_sq]
    if piece is None or from_sq == target:
        return False

    d_row = target.row - from_sq.row
    d_col = target.col - from_sq.col
    ptype = piece.piece_type

    if ptype == PieceType.PAWN:
        return d_row == piece.color.pawn_direction and abs(d_col) == 1
    if ptype == PieceType.KNIGHT:
        return (abs(d_row), abs(d_col)) in ((1, 2), (2, 1))
    if ptype == PieceType.KING:
        return abs(d_row) <= 1 and abs(d_col) <= 1
    if ptype == PieceType.BISHOP:
        return is_diagonal(from_sq, target) and path_clear(board, from_sq, target)
    if ptype == PieceType.ROOK:
        return is_orthogonal(from_sq, target) and path_clear(board, from_sq, target)
    return is_aligned(from_sq, target) and path_clear(board, from_sq, target)
