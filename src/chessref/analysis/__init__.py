"""Position analysis APIs."""

from chessref.analysis.models import (
    DefendedPiece,
    Pin,
    PositionSummary,
    TacticalSituation,
    ThreatenedPiece,
)
from chessref.analysis.tactics import (
    analyze_tactics,
    controlled_squares,
    find_pins,
    material_balance,
    summarize_position,
)

__all__ = [
    "DefendedPiece",
    "Pin",
    "PositionSummary",
    "TacticalSituation",
    "ThreatenedPiece",
    "analyze_tactics",
    "controlled_squares",
    "find_pins",
    "material_balance",
    "summarize_position",
]
