"""Game management layer: controller, players, recommenders, state machine.

Quick start::

    from chessref.game import GameController, HumanPlayer, RecommenderPlayer
    from chessref.game import RandomRecommender

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=RecommenderPlayer(Color.BLACK, RandomRecommender(seed=1)),
    )
    ctrl.submit_move("e2", "e4")
    ctrl.play_recommended()

The Qt worker lives in :mod:`chessref.game.qt_bridge` and is imported
explicitly so that headless users do not load PyQt6.
"""

from chessref.game.controller import GameController, GameEvents
from chessref.game.interfaces import GameEndReason, GamePhase, IPlayer
from chessref.game.player import HumanPlayer, RecommenderPlayer
from chessref.game.recommender import (
    Fallback,
    FirstMoveRecommender,
    MoveRecommender,
    MoveSelection,
    RandomRecommender,
    Recommendation,
    RecommendationPolicy,
    RecommendationRequest,
    SelectionCancelled,
    build_request,
    select_move,
)
from chessref.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IPlayer",
    "MoveRecommender",
    # Recommendation
    "Fallback",
    "FirstMoveRecommender",
    "MoveSelection",
    "RandomRecommender",
    "Recommendation",
    "RecommendationPolicy",
    "RecommendationRequest",
    "SelectionCancelled",
    "build_request",
    "select_move",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "RecommenderPlayer",
]
