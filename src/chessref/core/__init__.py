"""Core rules kernel: pure chess legality with zero external dependencies.

Quick start::

    from chessref.core import Board, Color, validate

    board = Board.initial()
    state = validate(board, Color.WHITE)
    for move in state.legal_moves:
        print(move.notation)
"""

from chessref.core.attacks import (
    attackers_of,
    checking_pieces,
    king_in_check,
    square_is_attacked,
)
from chessref.core.board import Board
from chessref.core.enums import CastlingSide, Color, MoveFlag, PieceType, Winner
from chessref.core.errors import (
    ChessRuleError,
    IllegalMoveError,
    InvariantViolationError,
    MalformedInputError,
)
from chessref.core.geometry import is_aligned, path_clear, squares_between
from chessref.core.legality import (
    MoveAttempt,
    all_legal_moves,
    apply_move,
    attempt_move,
    castling_available,
    is_legal,
    legal_move_notations,
)
from chessref.core.move import Move
from chessref.core.movement import attacks, is_pseudo_legal
from chessref.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
    parse_move_notation,
)
from chessref.core.piece import Piece
from chessref.core.rules import GameStateValidation, Rules, validate
from chessref.core.types import (
    Square,
    notation_to_square,
    parse_square,
    square_to_notation,
)

__all__ = [
    # Enums
    "CastlingSide",
    "Color",
    "MoveFlag",
    "PieceType",
    "Winner",
    # Errors
    "ChessRuleError",
    "IllegalMoveError",
    "InvariantViolationError",
    "MalformedInputError",
    # Types / geometry
    "Square",
    "is_aligned",
    "notation_to_square",
    "parse_square",
    "path_clear",
    "square_to_notation",
    "squares_between",
    # Domain objects
    "Board",
    "GameStateValidation",
    "Move",
    "MoveAttempt",
    "Piece",
    "Rules",
    # Movement / attacks / legality
    "all_legal_moves",
    "apply_move",
    "attackers_of",
    "attacks",
    "attempt_move",
    "castling_available",
    "checking_pieces",
    "is_legal",
    "is_pseudo_legal",
    "king_in_check",
    "legal_move_notations",
    "square_is_attacked",
    "validate",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
    "parse_move_notation",
]
