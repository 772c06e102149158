"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def pawn_direction(self) -> int:
        """Row delta of a forward pawn step (row 0 is rank 8)."""
        return -1 if self == Color.WHITE else 1

    @property
    def home_row(self) -> int:
        """Row holding this side's king and rooks at the start."""
        return 7 if self == Color.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def value_points(self) -> int:
        """Standard material value (king counts as zero)."""
        return _PIECE_VALUES[self]

    def __str__(self) -> str:
        return self.name.lower()


_PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class CastlingSide(IntEnum):
    KINGSIDE = 0
    QUEENSIDE = 1


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    CASTLE_KINGSIDE = 2
    CASTLE_QUEENSIDE = 3
    PROMOTION = 4


class Winner(StrEnum):
    """Decided outcome of a finished game."""

    WHITE = "white"
    BLACK = "black"
    DRAW = "draw"

    @classmethod
    def of(cls, color: Color) -> Winner:
        return cls.WHITE if color == Color.WHITE else cls.BLACK
