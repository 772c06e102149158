"""Data models produced by position analysis."""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.enums import CastlingSide, Color
from chessref.core.move import Move
from chessref.core.piece import Piece
from chessref.core.types import Square


@dataclass(slots=True, frozen=True)
class ThreatenedPiece:
    """A friendly piece and the enemy squares that can take it."""

    square: Square
    piece: Piece
    attackers: tuple[Square, ...]


@dataclass(slots=True, frozen=True)
class DefendedPiece:
    """A friendly piece and the friendly squares that cover it."""

    square: Square
    piece: Piece
    defenders: tuple[Square, ...]


@dataclass(slots=True, frozen=True)
class Pin:
    """*pinned* may not leave the line between its king and *pinner*."""

    pinned: Square
    pinner: Square
    through_squares: tuple[Square, ...]


@dataclass(slots=True, frozen=True)
class TacticalSituation:
    """Read-only tactical report for one side; recomputed on every query.

    ``urgent_moves`` always equals the legal move list: under check every
    legal move already escapes it.  Fork detection is not provided.
    """

    color: Color
    in_check: bool
    is_checkmate: bool
    is_stalemate: bool
    checking_pieces: tuple[Square, ...]
    threatened_pieces: tuple[ThreatenedPiece, ...]
    defended_pieces: tuple[DefendedPiece, ...]
    pins: tuple[Pin, ...]
    material_balance: int
    urgent_moves: tuple[Move, ...]

    @property
    def hanging_pieces(self) -> tuple[ThreatenedPiece, ...]:
        """Threatened pieces that nothing defends."""
        defended = {d.square for d in self.defended_pieces}
        return tuple(t for t in self.threatened_pieces if t.square not in defended)


@dataclass(slots=True, frozen=True)
class PositionSummary:
    """Broad description of a position, e.g. for a move recommender prompt."""

    placement: str
    side_to_move: Color
    in_check: bool
    checking_pieces: tuple[Square, ...]
    material_balance: int
    mobility: dict[Color, int]
    controlled_squares: dict[Color, tuple[Square, ...]]
    king_safety: dict[Color, int]
    castling: dict[Color, dict[CastlingSide, bool]]
