"""Move recommenders and the referee that never trusts them.

A recommender (an LLM client, a heuristic, a remote service) receives a
:class:`RecommendationRequest` snapshot and answers with a
:class:`Recommendation`.  :func:`select_move` re-validates every answer
against the rules kernel, retries with a correction message when the
answer is malformed, illegal or raised, and finally falls back to a legal
move so a game never stalls on a bad recommender.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from chessref.core.enums import Color, PieceType
from chessref.core.legality import attempt_move
from chessref.core.notation import (
    board_to_placement,
    board_to_text,
    parse_move_notation,
)
from chessref.core.rules import GameStateValidation, validate

if TYPE_CHECKING:
    from chessref.core.board import Board
    from chessref.core.move import Move

_LOGGER = logging.getLogger(__name__)

CancelCheck = Callable[[], bool]


class SelectionCancelled(Exception):
    """Raised when a running move selection was cancelled."""


# ── Wire models ──────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class RecommendationRequest:
    """Snapshot handed to a recommender; holds no live engine state."""

    placement: str
    board_text: str
    side_to_move: Color
    history: tuple[str, ...]
    legal_moves: tuple[str, ...]
    in_check: bool = False
    correction: str | None = None

    def to_prompt(self) -> str:
        """Plain-text rendering suitable for a language-model prompt."""
        lines = [
            "Current board (white uppercase, black lowercase):",
            self.board_text,
            "",
            f"Side to move: {self.side_to_move}",
            f"Game history: {' '.join(self.history) or '(none)'}",
            f"Legal moves: {', '.join(self.legal_moves)}",
        ]
        if self.in_check:
            lines.append("Your king is in check; only the listed moves escape it.")
        if self.correction:
            lines.extend(["", self.correction])
        lines.extend(
            ["", 'Respond with exactly one move in "from-to" form, e.g. "e2-e4".']
        )
        return "\n".join(lines)


@dataclass(slots=True, frozen=True)
class Recommendation:
    """A recommender's answer: one ``"from-to"`` string plus extras."""

    notation: str
    promotion: PieceType | None = None
    commentary: str = ""


class MoveRecommender(Protocol):
    """Protocol for anything that picks a move from a snapshot."""

    def recommend(self, request: RecommendationRequest) -> Recommendation: ...


# ── Built-in recommenders ────────────────────────────────────────────────────


class FirstMoveRecommender:
    """Always answers with the first legal move."""

    def recommend(self, request: RecommendationRequest) -> Recommendation:
        return Recommendation(request.legal_moves[0])


class RandomRecommender:
    """Picks uniformly among the legal moves (seedable for tests)."""

    __slots__ = ("_rng",)

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def recommend(self, request: RecommendationRequest) -> Recommendation:
        return Recommendation(self._rng.choice(request.legal_moves))


# ── Configuration ────────────────────────────────────────────────────────────


class Fallback(StrEnum):
    FIRST = "first"
    RANDOM = "random"


@dataclass(slots=True, frozen=True)
class RecommendationPolicy:
    """How hard to push a recommender before falling back."""

    max_retries: int = 2
    fallback: Fallback = Fallback.FIRST
    seed: int | None = None


@dataclass(slots=True, frozen=True)
class MoveSelection:
    """A move that passed re-validation, with the board it produces."""

    move: Move
    board: Board
    commentary: str
    attempts: int
    used_fallback: bool

    @property
    def notation(self) -> str:
        return self.move.notation


# ── Referee ──────────────────────────────────────────────────────────────────


def build_request(
    board: Board,
    color: Color,
    history: Sequence[Move] = (),
    state: GameStateValidation | None = None,
) -> RecommendationRequest:
    state = state or validate(board, color)
    return RecommendationRequest(
        placement=board_to_placement(board),
        board_text=board_to_text(board),
        side_to_move=color,
        history=tuple(move.label for move in history),
        legal_moves=tuple(state.legal_notations),
        in_check=state.in_check,
    )


def _correction(notation: object, reason: str, legal: Sequence[str]) -> str:
    return (
        f"Your previous answer {notation!r} was rejected: {reason}. "
        f"Choose exactly one of: {', '.join(legal)}."
    )


def select_move(
    board: Board,
    color: Color,
    recommender: MoveRecommender,
    *,
    history: Sequence[Move] = (),
    policy: RecommendationPolicy | None = None,
    is_cancelled: CancelCheck | None = None,
) -> MoveSelection | None:
    """Ask *recommender* for a move and return it only once it is legal.

    Returns ``None`` when the side to move has no legal moves.  *board* is
    never modified.

    Raises:
        SelectionCancelled: *is_cancelled* turned true between attempts.
    """
    policy = policy or RecommendationPolicy()
    cancelled = is_cancelled or (lambda: False)

    state = validate(board, color)
    if state.game_over:
        return None

    request = build_request(board, color, history, state)
    attempts = 0
    for _ in range(policy.max_retries + 1):
        if cancelled():
            raise SelectionCancelled
        attempts += 1
        try:
            answer = recommender.recommend(request)
        except Exception as exc:
            _LOGGER.warning("Recommender failed on attempt %d: %s", attempts, exc)
            request = replace(
                request,
                correction=(
                    f"The previous request failed ({exc}). "
                    f"Choose exactly one of: {', '.join(request.legal_moves)}."
                ),
            )
            continue

        if cancelled():
            raise SelectionCancelled

        rejected: object = answer
        squares = None
        if not isinstance(answer, Recommendation):
            reason = f"expected a Recommendation, got {type(answer).__name__}"
        else:
            rejected = answer.notation
            squares = parse_move_notation(answer.notation)
            reason = 'it is not in "from-to" form'
        if squares is not None:
            outcome = attempt_move(board, *squares, color, answer.promotion)
            if outcome.ok:
                assert outcome.move is not None and outcome.board is not None
                return MoveSelection(
                    move=outcome.move,
                    board=outcome.board,
                    commentary=answer.commentary,
                    attempts=attempts,
                    used_fallback=False,
                )
            reason = str(outcome.error)

        _LOGGER.warning(
            "Rejected recommendation %r on attempt %d: %s",
            rejected,
            attempts,
            reason,
        )
        request = replace(
            request,
            correction=_correction(rejected, reason, request.legal_moves),
        )

    fallback = _fallback_move(state, policy)
    _LOGGER.warning(
        "Recommender gave no legal move after %d attempts; falling back to %s",
        attempts,
        fallback.notation,
    )
    outcome = attempt_move(board, fallback.from_sq, fallback.to_sq, color)
    return MoveSelection(
        move=fallback,
        board=outcome.unwrap(),
        commentary=(
            f"recommender gave no legal move after {attempts} attempts; "
            f"played {fallback.notation} instead"
        ),
        attempts=attempts,
        used_fallback=True,
    )


def _fallback_move(state: GameStateValidation, policy: RecommendationPolicy) -> Move:
    if policy.fallback == Fallback.RANDOM:
        return random.Random(policy.seed).choice(state.legal_moves)
    return state.legal_moves[0]
