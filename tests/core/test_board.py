"""Tests for Board."""

import pytest

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, Handedness, PieceType
from pawnstorm.core.piece import Piece
from pawnstorm.core.types import parse_square, square_name


class TestBoardBasics:
    def test_empty_board(self) -> None:
        b = Board()
        assert b[(0, 0)] is None
        assert b.find_king(Color.WHITE) is None

    def test_set_and_get(self) -> None:
        b = Board()
        p = Piece(Color.WHITE, PieceType.QUEEN)
        b[(3, 4)] = p
        assert b[(3, 4)] == p
        assert not b.is_empty((3, 4))

    def test_remove_piece(self) -> None:
        b = Board()
        b[(3, 4)] = Piece(Color.WHITE, PieceType.QUEEN)
        b[(3, 4)] = None
        assert b.is_empty((3, 4))

    def test_king_tracking(self) -> None:
        b = Board()
        king = Piece(Color.BLACK, PieceType.KING)
        b[(4, 0)] = king
        assert b.king_square(Color.BLACK) == (4, 0)
        b[(4, 0)] = None
        b[(5, 0)] = king
        assert b.king_square(Color.BLACK) == (5, 0)

    def test_missing_king_raises(self) -> None:
        with pytest.raises(ValueError):
            Board().king_square(Color.WHITE)

    def test_copy_is_independent(self) -> None:
        b = Board.initial()
        c = b.copy()
        c[(0, 6)] = None
        assert b[(0, 6)] is not None
        assert b != c


class TestInitialLayout:
    def test_piece_counts(self) -> None:
        b = Board.initial()
        for color in Color:
            assert len(b.all_pieces(color)) == 16
            assert len(b.pieces(color, PieceType.PAWN)) == 8

    def test_king_and_queen_files(self) -> None:
        b = Board.initial(Color.BLACK)
        assert b[(3, 0)] == Piece(Color.BLACK, PieceType.KING)
        assert b[(4, 0)] == Piece(Color.BLACK, PieceType.QUEEN)
        assert b[(3, 7)] == Piece(Color.WHITE, PieceType.KING)
        assert b[(4, 7)] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_knight_handedness(self) -> None:
        b = Board.initial()
        assert b[(1, 7)] == Piece(Color.WHITE, PieceType.KNIGHT, Handedness.LEFT)
        assert b[(6, 7)] == Piece(Color.WHITE, PieceType.KNIGHT, Handedness.RIGHT)

    def test_white_on_top(self) -> None:
        b = Board.initial(Color.WHITE)
        assert b[(0, 1)] == Piece(Color.WHITE, PieceType.PAWN)
        assert b[(0, 6)] == Piece(Color.BLACK, PieceType.PAWN)


class TestCodes:
    def test_codes_roundtrip(self) -> None:
        b = Board.initial()
        assert Board.from_codes(b.codes()) == b

    def test_empty_square_is_zero(self) -> None:
        assert Board.initial().codes()[0][3] == 0

    def test_from_codes_requires_8x8(self) -> None:
        with pytest.raises(ValueError):
            Board.from_codes([[0] * 8] * 7)


class TestSquareNames:
    def test_corner_names(self) -> None:
        assert square_name((0, 7)) == "a1"
        assert square_name((7, 0)) == "h8"

    def test_parse_square(self) -> None:
        assert parse_square("e4") == (4, 4)

    def test_parse_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_square("z9")
