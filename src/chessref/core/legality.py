"""Legal move filter: pseudo-legal moves minus those that leave the king hit.

Each candidate is checked by building the resulting board and asking the
attack detector about the mover's king.  Boards are values, so the
simulation never leaks into the caller's position.

Cost: a full :func:`all_legal_moves` is a 64x64 sweep with an attack scan
per surviving candidate, roughly O(64^3).  That is fine at human pace but
is the first thing to replace (attack tables, incremental check tracking)
if this kernel ever sits under a search.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.attacks import king_in_check, square_is_attacked
from chessref.core.board import Board
from chessref.core.enums import (
    PROMOTION_TYPES,
    CastlingSide,
    Color,
    MoveFlag,
    PieceType,
)
from chessref.core.errors import ChessRuleError, IllegalMoveError, MalformedInputError
from chessref.core.move import Move
from chessref.core.movement import (
    is_pseudo_legal,
    pawn_start_row,
    promotion_row,
    pseudo_legal_targets,
)
from chessref.core.piece import Piece
from chessref.core.types import (
    Square,
    is_valid_square,
    notation_to_square,
    square_to_notation,
)

_KING_COL = 4

# side -> (rook column, king destination column, squares the king crosses)
_CASTLING_GEOMETRY: dict[CastlingSide, tuple[int, int, tuple[int, ...]]] = {
    CastlingSide.KINGSIDE: (7, 6, (5, 6)),
    CastlingSide.QUEENSIDE: (0, 2, (3, 2)),
}


# -- Board transformation ---------------------------------------------------


def apply_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> Board:
    """Return a new board with the piece on *from_sq* relocated to *to_sq*.

    Handles the rook hop of a castling king and pawn promotion (queen
    unless *promotion* says otherwise).  No legality checking.
    """
    piece = board[from_sq]
    if piece is None:
        return board

    placed = piece.moved()
    if (
        piece.piece_type == PieceType.PAWN
        and to_sq.row == promotion_row(piece.color)
    ):
        placed = piece.promoted(promotion or PieceType.QUEEN)

    changes: dict[Square, Piece | None] = {from_sq: None, to_sq: placed}

    side = _castling_side(piece, from_sq, to_sq)
    if side is not None:
        rook_col, _king_col, crossed = _CASTLING_GEOMETRY[side]
        rook_from = Square(from_sq.row, rook_col)
        rook = board[rook_from]
        if rook is not None:
            changes[rook_from] = None
            changes[Square(from_sq.row, crossed[0])] = rook.moved()

    return board.replace(changes)


def _castling_side(piece: Piece, from_sq: Square, to_sq: Square) -> CastlingSide | None:
    """Which castle a king move denotes, if it is a two-file home-rank hop."""
    if piece.piece_type != PieceType.KING:
        return None
    home = piece.color.home_row
    if from_sq != Square(home, _KING_COL) or to_sq.row != home:
        return None
    for side, (_rook_col, king_col, _crossed) in _CASTLING_GEOMETRY.items():
        if to_sq.col == king_col:
            return side
    return None


# -- Castling ---------------------------------------------------------------


def castling_available(board: Board, color: Color, side: CastlingSide) -> bool:
    """Whether *color* may castle on *side* right now.

    King and rook must be unmoved on their home squares with nothing between
    them, and the king may not start on, pass through or land on an
    attacked square.
    """
    home = color.home_row
    king_sq = Square(home, _KING_COL)
    king = board[king_sq]
    if (
        king is None
        or king.color != color
        or king.piece_type != PieceType.KING
        or king.has_moved
    ):
        return False

    rook_col, _king_col, crossed = _CASTLING_GEOMETRY[side]
    rook = board[Square(home, rook_col)]
    if (
        rook is None
        or rook.color != color
        or rook.piece_type != PieceType.ROOK
        or rook.has_moved
    ):
        return False

    lo, hi = sorted((rook_col, _KING_COL))
    if any(not board.is_empty(Square(home, col)) for col in range(lo + 1, hi)):
        return False

    opponent = color.opposite
    return not any(
        square_is_attacked(board, Square(home, col), opponent)
        for col in (_KING_COL, *crossed)
    )


# -- Legality ---------------------------------------------------------------


def _on_board(sq: Square) -> bool:
    return is_valid_square(sq.row, sq.col)


def is_legal(board: Board, from_sq: Square, to_sq: Square, color: Color) -> bool:
    """Pseudo-legal (or an available castle) and not leaving own king in check."""
    if not (_on_board(from_sq) and _on_board(to_sq)):
        return False
    piece = board[from_sq]
    if piece is None or piece.color != color:
        return False

    side = _castling_side(piece, from_sq, to_sq)
    if side is not None:
        return castling_available(board, color, side)

    if not is_pseudo_legal(board, from_sq, to_sq):
        return False
    return not king_in_check(apply_move(board, from_sq, to_sq), color)


def illegal_reason(
    board: Board, from_sq: Square, to_sq: Square, color: Color
) -> str | None:
    """Why a move is illegal, or ``None`` when it is legal."""
    for sq in (from_sq, to_sq):
        if not _on_board(sq):
            return f"square {tuple(sq)!r} is off the board"
    piece = board[from_sq]
    if piece is None:
        return f"no piece on {square_to_notation(from_sq)}"
    if piece.color != color:
        return f"the piece on {square_to_notation(from_sq)} belongs to {piece.color}"

    side = _castling_side(piece, from_sq, to_sq)
    if side is not None:
        if castling_available(board, color, side):
            return None
        return "castling is not available"

    target = board[to_sq]
    if target is not None and target.color == color:
        return "the destination holds one of your own pieces"
    if not is_pseudo_legal(board, from_sq, to_sq):
        return f"a {piece.piece_type} cannot move that way"
    if king_in_check(apply_move(board, from_sq, to_sq), color):
        return "it would leave your king in check"
    return None


def build_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> Move:
    """Describe moving the piece on *from_sq* to *to_sq* (origin must be occupied)."""
    piece = board[from_sq]
    if piece is None:
        raise MalformedInputError(f"No piece on {square_to_notation(from_sq)}")

    flag = MoveFlag.NORMAL
    if piece.piece_type == PieceType.PAWN:
        if to_sq.row == promotion_row(piece.color):
            flag = MoveFlag.PROMOTION
            promotion = promotion or PieceType.QUEEN
        elif (
            from_sq.row == pawn_start_row(piece.color)
            and abs(to_sq.row - from_sq.row) == 2
        ):
            flag = MoveFlag.DOUBLE_PAWN
    side = _castling_side(piece, from_sq, to_sq)
    if side == CastlingSide.KINGSIDE:
        flag = MoveFlag.CASTLE_KINGSIDE
    elif side == CastlingSide.QUEENSIDE:
        flag = MoveFlag.CASTLE_QUEENSIDE

    return Move(
        from_sq=from_sq,
        to_sq=to_sq,
        piece=piece,
        captured=board[to_sq],
        promotion=promotion if flag == MoveFlag.PROMOTION else None,
        flag=flag,
    )


def _candidate_targets(board: Board, from_sq: Square, piece: Piece) -> list[Square]:
    targets = pseudo_legal_targets(board, from_sq)
    if piece.piece_type == PieceType.KING:
        home = piece.color.home_row
        for _rook_col, king_col, _crossed in _CASTLING_GEOMETRY.values():
            targets.append(Square(home, king_col))
        targets = sorted(set(targets))
    return targets


def all_legal_moves(board: Board, color: Color) -> list[Move]:
    """Every legal move for *color*.

    Ordered by origin square, then destination square, both row-major from
    a8, so "first legal move" fallbacks are reproducible.
    """
    moves: list[Move] = []
    for from_sq, piece in board.pieces(color):
        for to_sq in _candidate_targets(board, from_sq, piece):
            if is_legal(board, from_sq, to_sq, color):
                moves.append(build_move(board, from_sq, to_sq))
    return moves


def legal_move_notations(board: Board, color: Color) -> list[str]:
    """``"<from>-<to>"`` strings of :func:`all_legal_moves`."""
    return [move.notation for move in all_legal_moves(board, color)]


# -- Inbound move attempts --------------------------------------------------


@dataclass(frozen=True, slots=True)
class MoveAttempt:
    """Outcome of :func:`attempt_move`: a new board or the reason it failed."""

    board: Board | None = None
    move: Move | None = None
    error: ChessRuleError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Board:
        """The new board, raising the stored error if the attempt failed."""
        if self.error is not None:
            raise self.error
        assert self.board is not None
        return self.board


def _resolve(sq: Square | str) -> Square | None:
    if isinstance(sq, Square):
        return sq if _on_board(sq) else None
    return notation_to_square(sq)


def attempt_move(
    board: Board,
    from_sq: Square | str,
    to_sq: Square | str,
    color: Color,
    promotion: PieceType | None = None,
) -> MoveAttempt:
    """Validate and apply one move; *board* itself is never modified."""
    origin = _resolve(from_sq)
    destination = _resolve(to_sq)
    if origin is None or destination is None:
        bad = from_sq if origin is None else to_sq
        return MoveAttempt(error=MalformedInputError(f"Invalid square name: {bad!r}"))

    notation = f"{square_to_notation(origin)}-{square_to_notation(destination)}"
    if promotion is not None and promotion not in PROMOTION_TYPES:
        return MoveAttempt(
            error=IllegalMoveError(notation, f"cannot promote to a {promotion}")
        )

    reason = illegal_reason(board, origin, destination, color)
    if reason is not None:
        return MoveAttempt(error=IllegalMoveError(notation, reason))

    move = build_move(board, origin, destination, promotion)
    new_board = apply_move(board, origin, destination, move.promotion)
    return MoveAttempt(board=new_board, move=move)
