"""Tests for square coordinates and line geometry."""

import pytest

from chessref.core.board import Board
from chessref.core.errors import MalformedInputError
from chessref.core.geometry import (
    direction,
    is_aligned,
    is_diagonal,
    is_orthogonal,
    path_clear,
    ray,
    squares_between,
)
from chessref.core.types import (
    A1,
    A8,
    ALL_SQUARES,
    B2,
    C3,
    D4,
    E2,
    E4,
    H1,
    H8,
    Square,
    is_valid_square,
    notation_to_square,
    parse_square,
    square_to_notation,
)


class TestNotation:
    def test_corners(self) -> None:
        assert square_to_notation(Square(0, 0)) == "a8"
        assert square_to_notation(Square(0, 7)) == "h8"
        assert square_to_notation(Square(7, 0)) == "a1"
        assert square_to_notation(Square(7, 7)) == "h1"

    def test_e4(self) -> None:
        assert notation_to_square("e4") == Square(4, 4)
        assert E4 == Square(4, 4)

    def test_round_trip_every_square(self) -> None:
        for sq in ALL_SQUARES:
            assert notation_to_square(square_to_notation(sq)) == sq

    def test_names_round_trip(self) -> None:
        for file_char in "abcdefgh":
            for rank_char in "12345678":
                name = file_char + rank_char
                sq = notation_to_square(name)
                assert sq is not None
                assert square_to_notation(sq) == name

    @pytest.mark.parametrize(
        "name", ["", "e", "e44", "i1", "a0", "a9", "E4", "4e", " e4", None, 42]
    )
    def test_invalid_names(self, name: object) -> None:
        assert notation_to_square(name) is None  # type: ignore[arg-type]

    def test_parse_square_raises(self) -> None:
        with pytest.raises(MalformedInputError):
            parse_square("z9")

    def test_parse_square_valid(self) -> None:
        assert parse_square("a8") == A8


class TestSquare:
    def test_rank_and_file(self) -> None:
        assert E2.rank == 2
        assert E2.file == 4
        assert H8.rank == 8

    def test_str_is_name(self) -> None:
        assert str(H1) == "h1"
        assert E4.name == "e4"

    def test_offset_on_board(self) -> None:
        assert E2.offset(-2, 0) == E4

    def test_offset_off_board(self) -> None:
        assert A1.offset(1, 0) is None
        assert H8.offset(0, 1) is None

    def test_all_squares_row_major(self) -> None:
        assert len(ALL_SQUARES) == 64
        assert ALL_SQUARES[0] == A8
        assert ALL_SQUARES[-1] == H1
        assert list(ALL_SQUARES) == sorted(ALL_SQUARES)

    def test_is_valid_square(self) -> None:
        assert is_valid_square(0, 0)
        assert is_valid_square(7, 7)
        assert not is_valid_square(8, 0)
        assert not is_valid_square(0, -1)


class TestGeometry:
    def test_alignment(self) -> None:
        assert is_diagonal(A1, D4)
        assert not is_orthogonal(A1, D4)
        assert is_orthogonal(A1, A8)
        assert is_aligned(E2, E4)
        assert not is_aligned(A1, Square(5, 1))  # b3

    def test_same_square_is_not_aligned(self) -> None:
        assert not is_aligned(E4, E4)

    def test_direction(self) -> None:
        assert direction(A1, D4) == (-1, 1)
        assert direction(E4, E2) == (1, 0)

    def test_squares_between_diagonal(self) -> None:
        assert squares_between(A1, D4) == [B2, C3]

    def test_squares_between_adjacent(self) -> None:
        assert squares_between(E2, Square(5, 4)) == []

    def test_squares_between_unaligned(self) -> None:
        with pytest.raises(ValueError):
            squares_between(A1, Square(5, 1))

    def test_path_clear_empty_board(self) -> None:
        assert path_clear(Board.empty(), A1, H8)

    def test_path_blocked_by_pawn(self) -> None:
        board = Board.initial()
        assert not path_clear(board, A1, A8)

    def test_path_ignores_endpoints(self) -> None:
        board = Board.initial()
        # a1 to a2: nothing strictly between
        assert path_clear(board, A1, Square(6, 0))

    def test_ray_to_edge(self) -> None:
        assert ray(D4, 1, -1) == [C3, B2, A1]
        assert ray(H1, 1, 0) == []
