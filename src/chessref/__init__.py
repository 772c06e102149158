"""chessref: chess legality and game-state engine."""

__version__ = "0.1.0"
