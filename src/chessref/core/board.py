"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessref.core.enums import Color, PieceType
from chessref.core.piece import Piece
from chessref.core.types import ALL_SQUARES, Square, is_valid_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: Square) -> int:
    row, col = sq
    if not is_valid_square(row, col):
        raise IndexError(f"square off the board: {tuple(sq)!r}")
    return row * 8 + col


class Board:
    """Value-type board: every change goes through :meth:`replace`.

    The board carries no history and no side to move, so a simulated move
    can be built and thrown away without touching the original.
    """

    __slots__ = ("_squares", "_hash")

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        if len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = tuple(squares)
        self._hash: int | None = None

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[_index(sq)]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        raise TypeError("Board is immutable; use Board.replace()")

    def is_empty(self, sq: Square) -> bool:
        return self._squares[_index(sq)] is None

    def __iter__(self) -> Iterator[tuple[Square, Piece | None]]:
        """Every square with its occupant, row-major from a8."""
        return zip(ALL_SQUARES, self._squares)

    @property
    def rows(self) -> tuple[tuple[Piece | None, ...], ...]:
        """8x8 view, row 0 = rank 8."""
        return tuple(self._squares[r * 8 : r * 8 + 8] for r in range(8))

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[tuple[Square, Piece]]:
        """Occupied squares (row-major), optionally restricted to *color*."""
        return [
            (sq, piece)
            for sq, piece in zip(ALL_SQUARES, self._squares)
            if piece is not None and (color is None or piece.color == color)
        ]

    def squares_of(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq, piece in zip(ALL_SQUARES, self._squares)
            if piece is not None
            and piece.color == color
            and piece.piece_type == piece_type
        ]

    def king_square(self, color: Color) -> Square | None:
        """The first king of *color* in row-major order, ``None`` if absent."""
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if (
                piece is not None
                and piece.color == color
                and piece.piece_type == PieceType.KING
            ):
                return sq
        return None

    # -- Derivation ---------------------------------------------------------

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied; ``None`` empties a square."""
        squares = list(self._squares)
        for sq, piece in changes.items():
            squares[_index(sq)] = piece
        return Board(tuple(squares))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_pieces(cls, placement: Mapping[Square, Piece]) -> Board:
        return cls().replace(placement)

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        placement: dict[Square, Piece] = {}
        for col, pt in enumerate(_BACK_RANK):
            placement[Square(0, col)] = Piece(Color.BLACK, pt)
            placement[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            placement[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            placement[Square(7, col)] = Piece(Color.WHITE, pt)
        return cls.from_pieces(placement)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._squares)
        return self._hash

    def __repr__(self) -> str:
        rows: list[str] = []
        for r, row in enumerate(self.rows):
            cells = [str(p) if p else "." for p in row]
            rows.append(f"{8 - r} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
