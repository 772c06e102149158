"""Tests for move recommenders and the re-validating referee."""

from __future__ import annotations

import logging

import pytest

from chessref.core.board import Board
from chessref.core.enums import Color, PieceType
from chessref.core.legality import attempt_move, legal_move_notations
from chessref.core.notation import board_from_placement
from chessref.core.types import A8
from chessref.game.recommender import (
    Fallback,
    FirstMoveRecommender,
    RandomRecommender,
    Recommendation,
    RecommendationPolicy,
    RecommendationRequest,
    SelectionCancelled,
    build_request,
    select_move,
)

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR"


class _Scripted:
    """Replays canned answers; exceptions in the script are raised."""

    def __init__(self, *answers: object) -> None:
        self._answers = list(answers)
        self.requests: list[RecommendationRequest] = []

    def recommend(self, request: RecommendationRequest) -> Recommendation:
        self.requests.append(request)
        answer = self._answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, Recommendation):
            return answer
        return Recommendation(str(answer))


class TestBuiltinRecommenders:
    def test_first_move(self) -> None:
        request = build_request(Board.initial(), Color.WHITE)
        assert FirstMoveRecommender().recommend(request).notation == "a2-a4"

    def test_random_is_seedable(self) -> None:
        request = build_request(Board.initial(), Color.WHITE)
        a = [RandomRecommender(seed=7).recommend(request).notation for _ in range(3)]
        b = [RandomRecommender(seed=7).recommend(request).notation for _ in range(3)]
        assert a == b
        assert all(n in request.legal_moves for n in a)


class TestBuildRequest:
    def test_snapshot_fields(self) -> None:
        board = Board.initial()
        first = attempt_move(board, "e2", "e4", Color.WHITE)
        assert first.move is not None
        request = build_request(first.unwrap(), Color.BLACK, [first.move])
        assert request.side_to_move == Color.BLACK
        assert request.history == ("e2-e4",)
        assert len(request.legal_moves) == 20
        assert request.placement.startswith("rnbqkbnr/pppppppp/8/8/4P3")
        assert not request.in_check
        assert request.correction is None

    def test_prompt_lists_moves(self) -> None:
        prompt = build_request(Board.initial(), Color.WHITE).to_prompt()
        assert "Side to move: white" in prompt
        assert "Game history: (none)" in prompt
        assert "g1-f3" in prompt
        assert "e2-e4" in prompt

    def test_prompt_mentions_check(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/8/r3K3")
        request = build_request(board, Color.WHITE)
        assert request.in_check
        assert "in check" in request.to_prompt()


class TestSelectMove:
    def test_legal_answer_accepted(self) -> None:
        rec = _Scripted(Recommendation("e2-e4", commentary="centre"))
        selection = select_move(Board.initial(), Color.WHITE, rec)
        assert selection is not None
        assert selection.notation == "e2-e4"
        assert selection.attempts == 1
        assert not selection.used_fallback
        assert selection.commentary == "centre"
        assert selection.board == attempt_move(
            Board.initial(), "e2", "e4", Color.WHITE
        ).unwrap()

    def test_illegal_answer_retried_with_correction(self) -> None:
        rec = _Scripted("e2-e5", "e2-e4")
        selection = select_move(Board.initial(), Color.WHITE, rec)
        assert selection is not None
        assert selection.notation == "e2-e4"
        assert selection.attempts == 2
        assert rec.requests[0].correction is None
        correction = rec.requests[1].correction
        assert correction is not None
        assert "'e2-e5'" in correction
        assert "a pawn cannot move that way" in correction
        assert "g1-f3" in correction

    def test_malformed_answer_retried(self) -> None:
        rec = _Scripted("e2e4", "e2-e4")
        selection = select_move(Board.initial(), Color.WHITE, rec)
        assert selection is not None
        assert selection.attempts == 2
        assert "from-to" in (rec.requests[1].correction or "")

    def test_falls_back_after_retries(self) -> None:
        rec = _Scripted("e2-e5", "e1-e2", "nonsense")
        selection = select_move(Board.initial(), Color.WHITE, rec)
        assert selection is not None
        assert selection.used_fallback
        assert selection.attempts == 3
        assert selection.notation == "a2-a4"
        assert selection.commentary == (
            "recommender gave no legal move after 3 attempts; played a2-a4 instead"
        )
        assert len(rec.requests) == 3

    @pytest.mark.parametrize("raw", [None, "e2-e4"])
    def test_non_recommendation_answer_retried(self, raw: object) -> None:
        class _Raw:
            def __init__(self) -> None:
                self.requests: list[RecommendationRequest] = []

            def recommend(self, request: RecommendationRequest) -> object:
                self.requests.append(request)
                return raw if len(self.requests) == 1 else Recommendation("d2-d4")

        rec = _Raw()
        selection = select_move(Board.initial(), Color.WHITE, rec)
        assert selection is not None
        assert selection.notation == "d2-d4"
        assert selection.attempts == 2
        correction = rec.requests[1].correction or ""
        assert f"{raw!r}" in correction
        assert "expected a Recommendation" in correction

    def test_non_recommendation_answers_fall_back(self) -> None:
        class _Silent:
            def recommend(self, request: RecommendationRequest) -> None:
                return None

        selection = select_move(Board.initial(), Color.WHITE, _Silent())
        assert selection is not None
        assert selection.used_fallback
        assert selection.notation == "a2-a4"

    def test_retry_budget(self) -> None:
        rec = _Scripted("e2-e5")
        policy = RecommendationPolicy(max_retries=0)
        selection = select_move(Board.initial(), Color.WHITE, rec, policy=policy)
        assert selection is not None
        assert selection.used_fallback
        assert selection.attempts == 1

    def test_random_fallback_is_legal_and_seeded(self) -> None:
        policy = RecommendationPolicy(max_retries=0, fallback=Fallback.RANDOM, seed=5)
        picks = [
            select_move(
                Board.initial(), Color.WHITE, _Scripted("x"), policy=policy
            )
            for _ in range(2)
        ]
        assert picks[0] is not None and picks[1] is not None
        assert picks[0].notation == picks[1].notation
        assert picks[0].notation in legal_move_notations(Board.initial(), Color.WHITE)

    def test_recommender_exception_is_retried(self) -> None:
        rec = _Scripted(RuntimeError("service timeout"), "g1-f3")
        selection = select_move(Board.initial(), Color.WHITE, rec)
        assert selection is not None
        assert selection.notation == "g1-f3"
        assert selection.attempts == 2
        assert "service timeout" in (rec.requests[1].correction or "")

    def test_recommender_always_failing(self) -> None:
        rec = _Scripted(*(RuntimeError("down") for _ in range(3)))
        selection = select_move(Board.initial(), Color.WHITE, rec)
        assert selection is not None
        assert selection.used_fallback

    def test_promotion_choice_respected(self) -> None:
        board = board_from_placement("7k/P7/8/8/8/8/8/K7")
        rec = _Scripted(Recommendation("a7-a8", promotion=PieceType.ROOK))
        selection = select_move(board, Color.WHITE, rec)
        assert selection is not None
        rook = selection.board[A8]
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert selection.move.label == "a7-a8=R"

    def test_game_over_returns_none(self) -> None:
        rec = _Scripted()
        board = board_from_placement(FOOLS_MATE)
        assert select_move(board, Color.WHITE, rec) is None
        assert rec.requests == []

    def test_board_untouched(self) -> None:
        board = Board.initial()
        select_move(board, Color.WHITE, _Scripted("e2-e5", "d2-d4"))
        assert board == Board.initial()


class TestCancellation:
    def test_cancelled_before_asking(self) -> None:
        rec = _Scripted("e2-e4")
        with pytest.raises(SelectionCancelled):
            select_move(Board.initial(), Color.WHITE, rec, is_cancelled=lambda: True)
        assert rec.requests == []

    def test_cancelled_while_waiting(self) -> None:
        flag = {"cancelled": False}

        class _SlowRecommender:
            def recommend(self, request: RecommendationRequest) -> Recommendation:
                flag["cancelled"] = True
                return Recommendation(request.legal_moves[0])

        with pytest.raises(SelectionCancelled):
            select_move(
                Board.initial(),
                Color.WHITE,
                _SlowRecommender(),
                is_cancelled=lambda: flag["cancelled"],
            )


class TestLogging:
    def test_rejections_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="chessref.game.recommender"):
            select_move(Board.initial(), Color.WHITE, _Scripted("e2-e5", "e2-e4"))
        assert "Rejected recommendation 'e2-e5' on attempt 1" in caplog.text

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        policy = RecommendationPolicy(max_retries=0)
        with caplog.at_level(logging.WARNING, logger="chessref.game.recommender"):
            select_move(Board.initial(), Color.WHITE, _Scripted("x"), policy=policy)
        assert "falling back to a2-a4" in caplog.text
