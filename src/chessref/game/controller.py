"""GameController: the central orchestrator of a chess game.

Coordinates: Players, GameState, the rules kernel and move recommenders.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessref.core.board import Board
from chessref.core.enums import Color, PieceType, Winner
from chessref.core.errors import IllegalMoveError
from chessref.core.legality import MoveAttempt, attempt_move
from chessref.core.move import Move
from chessref.core.types import Square
from chessref.game.interfaces import GameEndReason, GamePhase, IPlayer
from chessref.game.player import RecommenderPlayer
from chessref.game.recommender import MoveSelection, select_move
from chessref.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, MoveRecord, GameState], None]
GameOverCallback = Callable[[Winner, GameEndReason], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Orchestrates one game: validates moves, switches turns, notifies
    listeners.

    Every move, human or recommended, goes through the rules kernel again
    right before it is applied.  Methods are meant to be called from a single
    thread; a recommendation computed on a worker thread arrives through
    :meth:`submit_selection` on the main thread.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        self._players = {Color.WHITE: white, Color.BLACK: black}

        self._state = GameState()
        self._state.setup(board, side_to_move)

        if self._state.is_game_over:
            self._emit_game_over()
            return

        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()

    def submit_move(
        self,
        from_sq: Square | str,
        to_sq: Square | str,
        promotion: PieceType | None = None,
    ) -> MoveAttempt:
        """Validate and play a move for the side to move.

        On rejection the returned attempt carries the error and the game
        state is untouched.
        """
        if self._state.is_game_over or self._state.phase not in (
            GamePhase.AWAITING_MOVE,
            GamePhase.THINKING,
        ):
            return MoveAttempt(
                error=IllegalMoveError(
                    f"{from_sq}-{to_sq}", "the game is not in progress"
                )
            )

        outcome = attempt_move(
            self._state.board, from_sq, to_sq, self._state.side_to_move, promotion
        )
        if not outcome.ok:
            _LOGGER.debug("Rejected move: %s", outcome.error)
            return outcome

        assert outcome.move is not None
        self._commit(outcome.move)
        return outcome

    def submit_selection(self, selection: MoveSelection) -> bool:
        """Play a recommender's selection after re-checking it against the
        current board.  Returns True if it was applied."""
        move = selection.move
        outcome = self.submit_move(move.from_sq, move.to_sq, move.promotion)
        if outcome.ok and selection.commentary:
            self._state.move_history[-1].commentary = selection.commentary
        return outcome.ok

    def play_recommended(self) -> MoveSelection | None:
        """Run the current recommender player synchronously and play its move."""
        player = self.current_player
        if not isinstance(player, RecommenderPlayer) or self._state.is_game_over:
            return None

        selection = select_move(
            self._state.board,
            self._state.side_to_move,
            player.recommender,
            history=self._state.moves,
            policy=player.policy,
        )
        if selection is None:
            return None
        if not self.submit_selection(selection):
            return None
        return selection

    def resign(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()
        self._state.resign(color)
        self._emit_game_over()

    def undo_move(self) -> bool:
        if self._state.is_game_over or not self._state.move_history:
            return False

        # Drop any recommendation in flight for the position being undone
        cp = self.current_player
        if cp and not cp.is_human:
            cp.cancel()

        self._state.undo_last_move()
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit(self, move: Move) -> None:
        record = self._state.apply_move(move)
        self._emit_move(move, record)

        if self._state.is_game_over:
            self._emit_game_over()
            return

        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._state.phase = GamePhase.AWAITING_MOVE
            self._emit_phase(GamePhase.AWAITING_MOVE)
        else:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            cp.request_move(self._state.board, self._state.moves)

    def _emit_move(self, move: Move, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(move, record, self._state)

    def _emit_game_over(self) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        result = self._state.result
        reason = self._state.end_reason
        assert result is not None and reason is not None
        for cb in self.events.on_game_over:
            cb(result, reason)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
