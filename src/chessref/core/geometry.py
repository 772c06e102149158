"""Straight-line geometry between squares."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessref.core.types import Square

if TYPE_CHECKING:
    from chessref.core.board import Board

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def is_orthogonal(a: Square, b: Square) -> bool:
    return a != b and (a.row == b.row or a.col == b.col)


def is_diagonal(a: Square, b: Square) -> bool:
    return a != b and abs(a.row - b.row) == abs(a.col - b.col)


def is_aligned(a: Square, b: Square) -> bool:
    """Same rank, file or diagonal (and not the same square)."""
    return is_orthogonal(a, b) or is_diagonal(a, b)


def direction(a: Square, b: Square) -> tuple[int, int]:
    """Unit step from *a* towards aligned square *b*."""
    return _sign(b.row - a.row), _sign(b.col - a.col)


def squares_between(a: Square, b: Square) -> list[Square]:
    """Squares strictly between two aligned squares, walking from *a*."""
    if not is_aligned(a, b):
        raise ValueError(f"{a} and {b} are not on a common line")
    d_row, d_col = direction(a, b)
    between: list[Square] = []
    row, col = a.row + d_row, a.col + d_col
    while (row, col) != (b.row, b.col):
        between.append(Square(row, col))
        row += d_row
        col += d_col
    return between


def path_clear(board: Board, a: Square, b: Square) -> bool:
    """Whether every square strictly between *a* and *b* is empty.

    *a* and *b* must be aligned; knight jumps never come through here.
    """
    return all(board.is_empty(sq) for sq in squares_between(a, b))


def ray(origin: Square, d_row: int, d_col: int) -> list[Square]:
    """Squares from *origin* (exclusive) to the board edge."""
    squares: list[Square] = []
    sq = origin.offset(d_row, d_col)
    while sq is not None:
        squares.append(sq)
        sq = sq.offset(d_row, d_col)
    return squares
