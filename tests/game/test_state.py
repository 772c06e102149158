"""Tests for GameState."""

import pytest

from chessref.core.board import Board
from chessref.core.enums import Color, PieceType, Winner
from chessref.core.errors import IllegalMoveError, InvariantViolationError
from chessref.core.legality import attempt_move
from chessref.core.move import Move
from chessref.core.notation import board_from_placement
from chessref.core.piece import Piece
from chessref.core.types import E2, E4, E5
from chessref.game.interfaces import GameEndReason, GamePhase
from chessref.game.state import GameState


def _move(gs: GameState, from_name: str, to_name: str) -> Move:
    outcome = attempt_move(gs.board, from_name, to_name, gs.side_to_move)
    assert outcome.move is not None, outcome.error
    return outcome.move


def _play(gs: GameState, *moves: str) -> None:
    for text in moves:
        from_name, to_name = text.split("-")
        gs.apply_move(_move(gs, from_name, to_name))


class TestGameStateSetup:
    def test_board_is_available_before_setup(self) -> None:
        gs = GameState()
        assert gs.phase == GamePhase.NOT_STARTED
        assert gs.side_to_move == Color.WHITE
        assert gs.board == Board.initial()

    def test_setup_default(self) -> None:
        gs = GameState()
        gs.setup()
        assert gs.phase == GamePhase.AWAITING_MOVE
        assert gs.result is None
        assert gs.side_to_move == Color.WHITE
        assert gs.ply_count == 0

    def test_setup_custom_board(self) -> None:
        board = board_from_placement("4k3/8/8/8/8/8/4P3/4K3")
        gs = GameState()
        gs.setup(board, Color.BLACK)
        assert gs.side_to_move == Color.BLACK
        assert gs.start_board is board

    def test_setup_resets(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "e2-e4")
        assert gs.ply_count == 1
        gs.setup()
        assert gs.ply_count == 0
        assert gs.side_to_move == Color.WHITE

    def test_missing_king_rejected(self) -> None:
        gs = GameState()
        with pytest.raises(InvariantViolationError):
            gs.setup(board_from_placement("8/8/8/8/8/8/4P3/4K3"))

    def test_setup_on_finished_position(self) -> None:
        gs = GameState()
        gs.setup(board_from_placement("7k/8/5KQ1/8/8/8/8/8"), Color.BLACK)
        assert gs.is_game_over
        assert gs.result == Winner.DRAW
        assert gs.end_reason == GameEndReason.STALEMATE


class TestGameStateMoves:
    def test_apply_move_records(self) -> None:
        gs = GameState()
        gs.setup()
        record = gs.apply_move(_move(gs, "e2", "e4"), commentary="king's pawn")
        assert record.notation == "e2-e4"
        assert record.commentary == "king's pawn"
        assert record.placement_after.startswith("rnbqkbnr/pppppppp/8/8/4P3")
        assert not record.was_check
        assert not record.was_capture
        assert gs.side_to_move == Color.BLACK
        assert gs.board.is_empty(E2)

    def test_capture_flag(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "e2-e4", "d7-d5")
        record = gs.apply_move(_move(gs, "e4", "d5"))
        assert record.was_capture

    def test_check_flag(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "e2-e4", "f7-f6", "d2-d4", "g7-g5")
        record = gs.apply_move(_move(gs, "d1", "h5"))
        assert record.was_check

    def test_empty_origin_rejected(self) -> None:
        gs = GameState()
        gs.setup()
        ghost = Move(E4, E5, Piece(Color.WHITE, PieceType.PAWN))
        with pytest.raises(IllegalMoveError):
            gs.apply_move(ghost)
        assert gs.ply_count == 0

    def test_moves_and_transcript(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "e2-e4", "e7-e5", "g1-f3")
        assert [m.notation for m in gs.moves] == ["e2-e4", "e7-e5", "g1-f3"]
        assert gs.transcript() == "1.e2-e4 e7-e5 2.g1-f3"

    def test_legal_moves_follow_side_to_move(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "e2-e4")
        assert all(m.piece.color == Color.BLACK for m in gs.legal_moves())


class TestGameStateUndo:
    def test_undo_restores_board(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "e2-e4")
        undone = gs.undo_last_move()
        assert undone is not None
        assert undone.notation == "e2-e4"
        assert gs.board == Board.initial()
        assert gs.side_to_move == Color.WHITE
        assert gs.ply_count == 0

    def test_undo_empty(self) -> None:
        gs = GameState()
        gs.setup()
        assert gs.undo_last_move() is None

    def test_undo_reopens_finished_game(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "f2-f3", "e7-e5", "g2-g4", "d8-h4")
        assert gs.is_game_over
        gs.undo_last_move()
        assert not gs.is_game_over
        assert gs.result is None
        assert gs.side_to_move == Color.BLACK


class TestGameOver:
    def test_fools_mate(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "f2-f3", "e7-e5", "g2-g4", "d8-h4")
        assert gs.phase == GamePhase.GAME_OVER
        assert gs.result == Winner.BLACK
        assert gs.end_reason == GameEndReason.CHECKMATE
        assert gs.move_history[-1].was_check

    def test_resign(self) -> None:
        gs = GameState()
        gs.setup()
        gs.resign(Color.WHITE)
        assert gs.result == Winner.BLACK
        assert gs.end_reason == GameEndReason.RESIGNATION
        assert gs.is_game_over

    def test_validation_and_tactics(self) -> None:
        gs = GameState()
        gs.setup()
        assert len(gs.validation().legal_moves) == 20
        assert gs.tactics().material_balance == 0
