"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from chessref.core.enums import Color
from chessref.game.interfaces import IPlayer
from chessref.game.recommender import MoveRecommender, RecommendationPolicy

if TYPE_CHECKING:
    from chessref.core.board import Board
    from chessref.core.move import Move


class HumanPlayer(IPlayer):
    """A human participant; moves come from the UI.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, board: Board, history: Sequence[Move]) -> None:
        pass  # Human moves arrive via controller.submit_move()

    def cancel(self) -> None:
        pass


class RecommenderPlayer(IPlayer):
    """A participant whose moves come from a :class:`MoveRecommender`.

    The player only stores the recommender and its policy; running it is
    left to the controller (``play_recommended``) or to a callback that
    dispatches the work elsewhere, typically a ``RecommenderWorker``.

    Args:
        color: Side the player plays.
        recommender: Source of candidate moves.
        name: Display name.
        policy: Retry and fallback behaviour.
        on_request_move: ``(Board, history) -> None``, called when the
            controller asks this player to start thinking.
        on_cancel: ``() -> None``, called to abort a running request.
    """

    __slots__ = (
        "_color",
        "_name",
        "_recommender",
        "_policy",
        "_on_request_move",
        "_on_cancel",
    )

    def __init__(
        self,
        color: Color,
        recommender: MoveRecommender,
        name: str = "Recommender",
        policy: RecommendationPolicy | None = None,
        on_request_move: Callable[[Board, Sequence[Move]], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._recommender = recommender
        self._policy = policy or RecommendationPolicy()
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def recommender(self) -> MoveRecommender:
        return self._recommender

    @property
    def policy(self) -> RecommendationPolicy:
        return self._policy

    def request_move(self, board: Board, history: Sequence[Move]) -> None:
        if self._on_request_move is not None:
            self._on_request_move(board, history)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
