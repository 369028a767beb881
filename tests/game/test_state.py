"""Tests for GameState."""

import pytest

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, GameResult, PieceType
from pawnstorm.core.errors import IllegalMoveError, InvalidArgumentError
from pawnstorm.core.move import Move
from pawnstorm.core.piece import Piece
from pawnstorm.engine.minimax_search import MinimaxSearchEngine
from pawnstorm.engine.search import SearchLimits
from pawnstorm.game.interfaces import GamePhase
from pawnstorm.game.state import GameState

W_PAWN = Piece(Color.WHITE, PieceType.PAWN)
B_PAWN = Piece(Color.BLACK, PieceType.PAWN)
W_KING = Piece(Color.WHITE, PieceType.KING)
B_KING = Piece(Color.BLACK, PieceType.KING)
W_ROOK = Piece(Color.WHITE, PieceType.ROOK)
W_QUEEN = Piece(Color.WHITE, PieceType.QUEEN)

E_PUSH = Move(W_PAWN, (4, 6), (4, 4))


def _mate_in_one_board() -> Board:
    return Board.from_pieces(
        {
            (3, 0): B_KING,
            (2, 1): B_PAWN,
            (3, 1): B_PAWN,
            (4, 1): B_PAWN,
            (0, 5): W_ROOK,
            (7, 7): W_KING,
        }
    )


class TestGameStateSetup:
    def test_position_is_available_before_setup(self) -> None:
        gs = GameState()
        assert gs.phase == GamePhase.NOT_STARTED
        assert gs.side_to_move == Color.WHITE

    def test_setup_default(self) -> None:
        gs = GameState()
        gs.setup()
        assert gs.phase == GamePhase.AWAITING_MOVE
        assert gs.result == GameResult.IN_PROGRESS
        assert gs.side_to_move == Color.WHITE
        assert gs.ply_count == 0

    def test_setup_custom_board(self) -> None:
        board = _mate_in_one_board()
        gs = GameState()
        gs.setup(board, side_to_move=Color.BLACK)
        assert gs.side_to_move == Color.BLACK
        assert gs.position.board == board
        assert gs.position.board is not board

    def test_setup_resets(self) -> None:
        gs = GameState()
        gs.setup()
        gs.apply_move(E_PUSH)
        assert gs.ply_count == 1
        gs.setup()
        assert gs.ply_count == 0
        assert gs.side_to_move == Color.WHITE

    def test_move_before_setup_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            GameState().apply_move(E_PUSH)


class TestGameStateMoves:
    def test_apply_move_records(self) -> None:
        gs = GameState()
        gs.setup()
        record = gs.apply_move(E_PUSH)
        assert record.move == E_PUSH
        assert record.ply == 1
        assert not record.was_capture
        assert gs.side_to_move == Color.BLACK
        assert gs.last_move == E_PUSH

    def test_unreachable_destination_rejected(self) -> None:
        gs = GameState()
        gs.setup()
        with pytest.raises(IllegalMoveError):
            gs.apply_move(Move(W_PAWN, (4, 6), (4, 3)))
        assert gs.ply_count == 0

    def test_wrong_turn_rejected(self) -> None:
        gs = GameState()
        gs.setup()
        with pytest.raises(IllegalMoveError):
            gs.apply_move(Move(B_PAWN, (4, 1), (4, 3)))

    def test_promotion_matches_by_type(self) -> None:
        gs = GameState()
        gs.setup(Board.from_pieces({(0, 1): W_PAWN, (3, 7): W_KING, (7, 3): B_KING}))
        gs.apply_move(Move(W_PAWN, (0, 1), (0, 0), promotion=W_QUEEN))
        assert gs.position.piece_at((0, 0)) == W_QUEEN

    def test_undo_restores(self) -> None:
        gs = GameState()
        gs.setup()
        codes_before = gs.position.board.codes()
        gs.apply_move(E_PUSH)
        undone = gs.undo_last_move()
        assert undone == E_PUSH
        assert gs.position.board.codes() == codes_before
        assert gs.ply_count == 0

    def test_undo_empty_returns_none(self) -> None:
        gs = GameState()
        gs.setup()
        assert gs.undo_last_move() is None


class TestEngineMoves:
    def test_engine_plays_legal_move(self) -> None:
        gs = GameState()
        gs.setup()
        record = gs.play_engine_move(MinimaxSearchEngine(seed=1), SearchLimits(max_depth=1))
        assert record is not None
        assert record.move.piece.color == Color.WHITE
        assert gs.side_to_move == Color.BLACK
        assert gs.phase == GamePhase.AWAITING_MOVE

    def test_engine_delivers_mate(self) -> None:
        gs = GameState()
        gs.setup(_mate_in_one_board())
        record = gs.play_engine_move(limits=SearchLimits(max_depth=2))
        assert record is not None
        assert record.gave_check
        assert gs.result == GameResult.WHITE_WINS
        assert gs.is_game_over
        assert gs.play_engine_move() is None


class TestGameStateTermination:
    def test_resign_white(self) -> None:
        gs = GameState()
        gs.setup()
        gs.resign(Color.WHITE)
        assert gs.result == GameResult.BLACK_WINS
        assert gs.is_game_over

    def test_resign_black(self) -> None:
        gs = GameState()
        gs.setup()
        gs.resign(Color.BLACK)
        assert gs.result == GameResult.WHITE_WINS
        assert gs.is_game_over

    def test_set_draw(self) -> None:
        gs = GameState()
        gs.setup()
        gs.set_draw()
        assert gs.result == GameResult.DRAW
        assert gs.is_game_over

    def test_stalemate_detected_on_setup(self) -> None:
        gs = GameState()
        gs.setup(
            Board.from_pieces({(0, 0): B_KING, (1, 2): W_QUEEN, (7, 7): W_KING}),
            side_to_move=Color.BLACK,
        )
        assert gs.result == GameResult.DRAW
        assert gs.is_game_over

    def test_moves_rejected_after_game_over(self) -> None:
        gs = GameState()
        gs.setup()
        gs.resign(Color.BLACK)
        with pytest.raises(InvalidArgumentError):
            gs.apply_move(E_PUSH)

    def test_undo_reverses_checkmate(self) -> None:
        gs = GameState()
        gs.setup(_mate_in_one_board())
        gs.play_engine_move(limits=SearchLimits(max_depth=2))
        assert gs.is_game_over
        gs.undo_last_move()
        assert gs.result == GameResult.IN_PROGRESS
        assert not gs.is_game_over
