"""Tests for the minimax search engine."""

import pytest

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, PieceType
from pawnstorm.core.errors import CheckmateError, InvalidArgumentError, StalemateError
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import Position
from pawnstorm.core.rules import Rules
from pawnstorm.engine.evaluation import EvaluationWeights
from pawnstorm.engine.minimax_search import MinimaxSearchEngine, select_move
from pawnstorm.engine.search import SearchLimits

W_KING = Piece(Color.WHITE, PieceType.KING)
B_KING = Piece(Color.BLACK, PieceType.KING)
W_ROOK = Piece(Color.WHITE, PieceType.ROOK)
B_ROOK = Piece(Color.BLACK, PieceType.ROOK)
W_PAWN = Piece(Color.WHITE, PieceType.PAWN)
B_PAWN = Piece(Color.BLACK, PieceType.PAWN)
B_QUEEN = Piece(Color.BLACK, PieceType.QUEEN)
W_QUEEN = Piece(Color.WHITE, PieceType.QUEEN)

FLAT = EvaluationWeights(
    pawn=0.0,
    knight=0.0,
    bishop=0.0,
    rook=0.0,
    queen=0.0,
    king=0.0,
    doubled_pawn=0.0,
    isolated_pawn=0.0,
    blocked_pawn=0.0,
    mobility=0.0,
)


def _mate_in_one() -> Position:
    return Position(Board.from_pieces(
        {
            (3, 0): B_KING,
            (2, 1): B_PAWN,
            (3, 1): B_PAWN,
            (4, 1): B_PAWN,
            (0, 5): W_ROOK,
            (7, 7): W_KING,
        }
    ))


class TestSearchBasics:
    def test_depth_one_returns_legal_move(self) -> None:
        pos = Position()
        result = MinimaxSearchEngine().search(pos, SearchLimits(max_depth=1))
        assert result.best_move in Rules.legal_moves(pos)
        assert result.depth == 1
        assert result.nodes == 20

    def test_default_depth_returns_legal_move(self) -> None:
        pos = Position()
        move = MinimaxSearchEngine(seed=3).select_move(pos)
        assert move in Rules.legal_moves(pos)

    def test_search_does_not_mutate_position(self) -> None:
        pos = Position()
        before = pos.board.codes()
        MinimaxSearchEngine().search(pos, SearchLimits(max_depth=2))
        assert pos.board.codes() == before
        assert pos.side_to_move == Color.WHITE
        assert pos.history == []

    def test_invalid_depth(self) -> None:
        with pytest.raises(InvalidArgumentError):
            MinimaxSearchEngine().search(Position(), SearchLimits(max_depth=0))

    def test_black_to_move(self) -> None:
        pos = Position()
        move = MinimaxSearchEngine().select_move(pos, Color.BLACK, SearchLimits(max_depth=1))
        assert move.piece.color == Color.BLACK
        assert pos.side_to_move == Color.WHITE


class TestSearchQuality:
    def test_captures_hanging_queen(self) -> None:
        pos = Position(Board.from_pieces(
            {(0, 4): W_ROOK, (5, 4): B_QUEEN, (7, 7): W_KING, (3, 0): B_KING}
        ))
        move = select_move(pos, depth=1)
        assert move.to_sq == (5, 4)
        assert move.piece == W_ROOK

    def test_finds_mate_in_one(self) -> None:
        pos = _mate_in_one()
        result = MinimaxSearchEngine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move is not None
        assert result.best_move.to_sq == (0, 0)
        assert result.score > 1000

    def test_escapes_check(self) -> None:
        pos = Position(Board.from_pieces(
            {(3, 7): W_KING, (3, 0): B_ROOK, (0, 4): W_ROOK, (7, 0): B_KING}
        ))
        move = select_move(pos, depth=1)
        child = pos.copy()
        child.apply_move(move)
        assert not child.is_in_check(Color.WHITE)


class TestGameOver:
    def test_checkmate_raises(self) -> None:
        pos = _mate_in_one()
        pos.apply_move(next(m for m in Rules.legal_moves(pos) if m.to_sq == (0, 0)))
        with pytest.raises(CheckmateError) as excinfo:
            MinimaxSearchEngine().select_move(pos)
        assert excinfo.value.color == Color.BLACK

    def test_stalemate_raises(self) -> None:
        pos = Position(
            Board.from_pieces({(0, 0): B_KING, (1, 2): W_QUEEN, (7, 7): W_KING}),
            side_to_move=Color.BLACK,
        )
        with pytest.raises(StalemateError):
            select_move(pos)

    def test_search_reports_no_move(self) -> None:
        pos = Position(
            Board.from_pieces({(0, 0): B_KING, (1, 2): W_QUEEN, (7, 7): W_KING}),
            side_to_move=Color.BLACK,
        )
        result = MinimaxSearchEngine().search(pos, SearchLimits())
        assert result.best_move is None
        assert result.score == 0


class TestLimitsAndTies:
    def test_node_budget_still_returns_move(self) -> None:
        pos = Position()
        result = MinimaxSearchEngine().search(pos, SearchLimits(max_depth=3, max_nodes=10))
        assert result.best_move in Rules.legal_moves(pos)
        assert result.nodes <= 10

    def test_cancelled_search_returns_move(self) -> None:
        pos = Position()
        result = MinimaxSearchEngine().search(
            pos, SearchLimits(max_depth=3), is_cancelled=lambda: True
        )
        assert result.best_move in Rules.legal_moves(pos)

    def test_stable_tie_break(self) -> None:
        pos = Position()
        first = MinimaxSearchEngine().select_move(pos, limits=SearchLimits(max_depth=1))
        second = MinimaxSearchEngine().select_move(pos, limits=SearchLimits(max_depth=1))
        assert first == second

    def test_ties_go_to_first_generated_move(self) -> None:
        pos = Position()
        result = MinimaxSearchEngine(weights=FLAT).search(pos, SearchLimits(max_depth=1))
        assert result.score == 0
        assert result.best_move == Rules.legal_moves(pos)[0]

    def test_ties_at_depth_two(self) -> None:
        pos = Position(Board.from_pieces({(3, 7): W_KING, (3, 0): B_KING, (0, 6): W_PAWN}))
        engine = MinimaxSearchEngine(weights=FLAT)
        move = engine.select_move(pos, limits=SearchLimits(max_depth=2))
        assert move == Rules.legal_moves(pos)[0]

    def test_seeded_random_tie_break_is_reproducible(self) -> None:
        pos = Position()
        limits = SearchLimits(max_depth=1)
        a = MinimaxSearchEngine(seed=42, randomize_ties=True).select_move(pos, limits=limits)
        b = MinimaxSearchEngine(seed=42, randomize_ties=True).select_move(pos, limits=limits)
        assert a == b


@pytest.mark.slow
class TestDeeperSearch:
    def test_depth_three_from_start(self) -> None:
        pos = Position()
        result = MinimaxSearchEngine().search(pos, SearchLimits(max_depth=3))
        assert result.best_move in Rules.legal_moves(pos)
