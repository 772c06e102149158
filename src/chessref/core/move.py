"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.enums import MoveFlag, PieceType
from chessref.core.piece import Piece
from chessref.core.types import Square, square_to_notation

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """A candidate (or, once applied by the caller, a ledger entry)."""

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    promotion: PieceType | None = None
    flag: MoveFlag = MoveFlag.NORMAL

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def notation(self) -> str:
        """``"<from>-<to>"``, e.g. ``"e2-e4"``."""
        return f"{square_to_notation(self.from_sq)}-{square_to_notation(self.to_sq)}"

    @property
    def label(self) -> str:
        """Notation with a promotion suffix, e.g. ``"e7-e8=Q"``."""
        if self.promotion is None:
            return self.notation
        return f"{self.notation}={_PROMO_CHARS[self.promotion]}"

    def __str__(self) -> str:
        return self.label

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)
