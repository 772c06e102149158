"""Tactical situation analyzer built on the rules kernel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessref.analysis.models import (
    DefendedPiece,
    Pin,
    PositionSummary,
    TacticalSituation,
    ThreatenedPiece,
)
from chessref.core.attacks import attackers_of, checking_pieces
from chessref.core.enums import CastlingSide, Color, PieceType
from chessref.core.geometry import QUEEN_DIRS, ray
from chessref.core.legality import castling_available
from chessref.core.movement import attacks
from chessref.core.notation import board_to_placement
from chessref.core.rules import validate
from chessref.core.types import ALL_SQUARES, Square

if TYPE_CHECKING:
    from chessref.core.board import Board

_KING_SAFETY_MAX = 10
_KING_SAFETY_PER_CHECKER = 3


def material_balance(board: Board) -> int:
    """Sum of white piece values minus black, king counted as zero."""
    balance = 0
    for _sq, piece in board.pieces():
        value = piece.value_points
        balance += value if piece.color == Color.WHITE else -value
    return balance


def threatened_pieces(board: Board, color: Color) -> list[ThreatenedPiece]:
    threatened: list[ThreatenedPiece] = []
    for sq, piece in board.pieces(color):
        attackers = attackers_of(board, sq, color.opposite)
        if attackers:
            threatened.append(ThreatenedPiece(sq, piece, tuple(attackers)))
    return threatened


def defended_pieces(board: Board, color: Color) -> list[DefendedPiece]:
    defended: list[DefendedPiece] = []
    for sq, piece in board.pieces(color):
        defenders = attackers_of(board, sq, color)
        if defenders:
            defended.append(DefendedPiece(sq, piece, tuple(defenders)))
    return defended


def _slides_along(piece_type: PieceType, d_row: int, d_col: int) -> bool:
    if piece_type == PieceType.QUEEN:
        return True
    if d_row and d_col:
        return piece_type == PieceType.BISHOP
    return piece_type == PieceType.ROOK


def find_pins(board: Board, color: Color) -> list[Pin]:
    """Friendly pieces pinned to *color*'s king.

    Walks each of the eight lines out of the king: the first piece met must
    be friendly and the next one an enemy slider moving along that line.
    """
    king_sq = board.king_square(color)
    if king_sq is None:
        return []

    pins: list[Pin] = []
    for d_row, d_col in QUEEN_DIRS:
        walked: list[Square] = []
        candidate: Square | None = None
        for sq in ray(king_sq, d_row, d_col):
            piece = board[sq]
            if piece is None:
                walked.append(sq)
                continue
            if candidate is None:
                if piece.color != color:
                    break
                candidate = sq
                walked.append(sq)
                continue
            if piece.color != color and _slides_along(piece.piece_type, d_row, d_col):
                pins.append(Pin(candidate, sq, tuple(walked)))
            break
    return pins


def analyze_tactics(board: Board, color: Color) -> TacticalSituation:
    """Tactical report for *color* on *board*."""
    state = validate(board, color)
    return TacticalSituation(
        color=color,
        in_check=state.in_check,
        is_checkmate=state.is_checkmate,
        is_stalemate=state.is_stalemate,
        checking_pieces=state.checking_pieces,
        threatened_pieces=tuple(threatened_pieces(board, color)),
        defended_pieces=tuple(defended_pieces(board, color)),
        pins=tuple(find_pins(board, color)),
        material_balance=material_balance(board),
        urgent_moves=state.legal_moves,
    )


def controlled_squares(board: Board, color: Color) -> list[Square]:
    """Every square at least one *color* piece attacks, row-major."""
    pieces = board.pieces(color)
    return [
        target
        for target in ALL_SQUARES
        if any(attacks(board, sq, target) for sq, _piece in pieces)
    ]


def summarize_position(board: Board, side_to_move: Color) -> PositionSummary:
    """Broad description of *board*: material, mobility, control, castling."""
    state = validate(board, side_to_move)
    mobility: dict[Color, int] = {}
    controlled: dict[Color, tuple[Square, ...]] = {}
    king_safety: dict[Color, int] = {}
    castling: dict[Color, dict[CastlingSide, bool]] = {}

    for color in Color:
        if color == side_to_move:
            mobility[color] = len(state.legal_moves)
        else:
            mobility[color] = len(validate(board, color).legal_moves)
        controlled[color] = tuple(controlled_squares(board, color))
        checkers = len(checking_pieces(board, color))
        king_safety[color] = max(
            0, _KING_SAFETY_MAX - checkers * _KING_SAFETY_PER_CHECKER
        )
        castling[color] = {
            side: castling_available(board, color, side) for side in CastlingSide
        }

    return PositionSummary(
        placement=board_to_placement(board),
        side_to_move=side_to_move,
        in_check=state.in_check,
        checking_pieces=state.checking_pieces,
        material_balance=material_balance(board),
        mobility=mobility,
        controlled_squares=controlled,
        king_safety=king_safety,
        castling=castling,
    )
