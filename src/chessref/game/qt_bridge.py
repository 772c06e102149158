"""Qt bridge to run a move recommender in a worker thread."""

from __future__ import annotations

import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessref.core.board import Board
from chessref.core.enums import Color
from chessref.game.recommender import (
    MoveRecommender,
    RecommendationPolicy,
    SelectionCancelled,
    select_move,
)


class RecommenderWorker(QObject):
    """Thread-affine worker that asks a recommender for a move on demand.

    The worker only produces a :class:`~chessref.game.recommender.MoveSelection`;
    the receiving side hands it to ``GameController.submit_selection``,
    which re-validates it against whatever the board is by then.
    """

    selection_ready = pyqtSignal(int, object)
    selection_cancelled = pyqtSignal(int)
    selection_none = pyqtSignal(int)
    selection_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_recommender", "_policy")

    def __init__(
        self,
        recommender: MoveRecommender,
        policy: RecommendationPolicy | None = None,
    ) -> None:
        super().__init__()
        self._recommender = recommender
        self._policy = policy or RecommendationPolicy()
        self._cancel_event = threading.Event()

    @pyqtSlot(object, object, object, int)
    def request_move(
        self,
        board_obj: object,
        color_obj: object,
        history_obj: object,
        request_id: int,
    ) -> None:
        """Select a move for *color_obj* on *board_obj* and emit the result."""
        if not isinstance(board_obj, Board) or not isinstance(color_obj, Color):
            self.selection_error.emit(request_id, "Worker received invalid position")
            return

        self._cancel_event.clear()
        try:
            selection = select_move(
                board_obj,
                color_obj,
                self._recommender,
                history=list(history_obj or ()),
                policy=self._policy,
                is_cancelled=self._cancel_event.is_set,
            )
        except SelectionCancelled:
            self.selection_cancelled.emit(request_id)
            return
        except Exception as exc:
            self.selection_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.selection_cancelled.emit(request_id)
            return

        if selection is None:
            self.selection_none.emit(request_id)
            return

        self.selection_ready.emit(request_id, selection)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current selection."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_max_retries(self, max_retries: int) -> None:
        """Update the retry budget (takes effect on the next request)."""
        self._policy = RecommendationPolicy(
            max_retries=max_retries,
            fallback=self._policy.fallback,
            seed=self._policy.seed,
        )
