"""Text forms of boards and moves.

Only the piece-placement field of FEN is supported: side to move, castling
and clocks are not part of a board value here.  ``has_moved`` is inferred
from the starting squares (a king or rook away from its home square, and a
pawn off its start rank, is marked as moved) unless the caller says
otherwise.
"""

from __future__ import annotations

from collections.abc import Iterable

from chessref.core.board import Board
from chessref.core.enums import PieceType
from chessref.core.errors import MalformedInputError
from chessref.core.move import Move
from chessref.core.movement import pawn_start_row
from chessref.core.piece import Piece
from chessref.core.types import Square, notation_to_square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_HOME_COLS: dict[PieceType, tuple[int, ...]] = {
    PieceType.KING: (4,),
    PieceType.ROOK: (0, 7),
}


def _looks_moved(piece: Piece, sq: Square) -> bool:
    if piece.piece_type == PieceType.PAWN:
        return sq.row != pawn_start_row(piece.color)
    home_cols = _HOME_COLS.get(piece.piece_type)
    if home_cols is None:
        return False
    return sq.row != piece.color.home_row or sq.col not in home_cols


def board_from_placement(placement: str, *, infer_moved: bool = True) -> Board:
    """Parse ``"rnbqkbnr/pppppppp/8/..."`` (rank 8 first) into a board.

    Raises:
        MalformedInputError: the text is not an 8x8 placement.
    """
    field = placement.strip().split(" ", 1)[0]
    ranks = field.split("/")
    if len(ranks) != 8:
        raise MalformedInputError(f"Expected 8 ranks, got {len(ranks)}: {placement!r}")

    pieces: dict[Square, Piece] = {}
    for row, rank_text in enumerate(ranks):
        col = 0
        for char in rank_text:
            if char.isdigit():
                col += int(char)
                continue
            if col > 7:
                raise MalformedInputError(
                    f"Rank {8 - row} describes more than 8 squares: {rank_text!r}"
                )
            try:
                piece = Piece.from_char(char)
            except ValueError as exc:
                raise MalformedInputError(str(exc)) from None
            sq = Square(row, col)
            if infer_moved and _looks_moved(piece, sq):
                piece = piece.moved()
            pieces[sq] = piece
            col += 1
        if col != 8:
            raise MalformedInputError(
                f"Rank {8 - row} does not describe 8 squares: {rank_text!r}"
            )
    return Board.from_pieces(pieces)


def board_to_placement(board: Board) -> str:
    """Inverse of :func:`board_from_placement` (``has_moved`` is dropped)."""
    ranks: list[str] = []
    for row in board.rows:
        text = ""
        empty = 0
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def board_to_text(board: Board) -> str:
    """Grid with uppercase white, lowercase black and ``.`` for empty squares."""
    return "\n".join(
        " ".join(str(piece) if piece else "." for piece in row) for row in board.rows
    )


def parse_move_notation(text: str) -> tuple[Square, Square] | None:
    """Split ``"e2-e4"`` into squares; ``None`` for anything malformed."""
    if not isinstance(text, str):
        return None
    parts = text.strip().split("-")
    if len(parts) != 2:
        return None
    from_sq = notation_to_square(parts[0].strip())
    to_sq = notation_to_square(parts[1].strip())
    if from_sq is None or to_sq is None:
        return None
    return from_sq, to_sq


def parse_promotion(text: str | None) -> PieceType | None:
    """``"q"``/``"queen"`` style promotion choice; ``None`` if unknown."""
    if not text:
        return None
    key = text.strip().lower()
    for ptype in (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT):
        name = ptype.name.lower()
        letter = "n" if ptype == PieceType.KNIGHT else name[0]
        if key in (name, letter):
            return ptype
    return None


def history_to_text(moves: Iterable[Move]) -> str:
    """Numbered move list, e.g. ``"1.e2-e4 e7-e5 2.g1-f3"``."""
    parts: list[str] = []
    for index, move in enumerate(moves):
        if index % 2 == 0:
            parts.append(f"{index // 2 + 1}.{move.label}")
        else:
            parts.append(move.label)
    return " ".join(parts)
