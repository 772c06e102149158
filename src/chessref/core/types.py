"""Square type and coordinate helpers.

Board layout (row-major, as a player with White at the bottom reads it):
    a8=(0, 0), b8=(0, 1), ..., h8=(0, 7)
    ...
    a1=(7, 0), b1=(7, 1), ..., h1=(7, 7)
"""

from __future__ import annotations

from typing import NamedTuple

from chessref.core.errors import MalformedInputError

_FILES = "abcdefgh"
_RANKS = "12345678"


class Square(NamedTuple):
    """A board coordinate; row 0 is rank 8, col 0 is the a-file."""

    row: int
    col: int

    @property
    def file(self) -> int:
        """File index 0-7 (a-h)."""
        return self.col

    @property
    def rank(self) -> int:
        """Rank number 1-8."""
        return 8 - self.row

    @property
    def name(self) -> str:
        return square_to_notation(self)

    def offset(self, d_row: int, d_col: int) -> Square | None:
        """Neighbouring square, or ``None`` when it falls off the board."""
        row = self.row + d_row
        col = self.col + d_col
        if 0 <= row < 8 and 0 <= col < 8:
            return Square(row, col)
        return None

    def __str__(self) -> str:
        return self.name


def is_valid_square(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def square_to_notation(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(4, 4)`` -> ``'e4'``."""
    return _FILES[sq.col] + str(8 - sq.row)


def notation_to_square(name: str) -> Square | None:
    """Parse ``'e4'`` into a square, or ``None`` if outside ``[a-h][1-8]``."""
    if not isinstance(name, str) or len(name) != 2:
        return None
    file_char, rank_char = name[0], name[1]
    if file_char not in _FILES or rank_char not in _RANKS:
        return None
    return Square(8 - int(rank_char), _FILES.index(file_char))


def parse_square(name: str) -> Square:
    """Like :func:`notation_to_square` but raises on malformed input."""
    sq = notation_to_square(name)
    if sq is None:
        raise MalformedInputError(f"Invalid square name: {name!r}")
    return sq


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(8) for col in range(8)
)

# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[56:64]
