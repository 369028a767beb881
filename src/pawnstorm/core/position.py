"""Position — complete game state (board + metadata) with commit/rollback."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass

from pawnstorm.core.attacks import is_king_in_check, is_square_threatened
from pawnstorm.core.board import Board
from pawnstorm.core.enums import CastlingSide, Color, MovedPieces, PieceType
from pawnstorm.core.errors import (
    CastlingNotPossibleError,
    IllegalMoveError,
    InvalidArgumentError,
    KingInCheckError,
)
from pawnstorm.core.move import Move
from pawnstorm.core.move_generator import CASTLING_PATHS, KING_HOME_FILE, MoveGenerator
from pawnstorm.core.piece import Piece
from pawnstorm.core.types import Square, back_rank

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _PositionState:
    """Snapshot saved before each move so we can undo it."""

    move: Move
    # (square, piece before the move) in the order they were written.
    squares: tuple[tuple[Square, Piece | None], ...]
    moved: MovedPieces
    side_to_move: Color


class Position:
    """Full game state: board + orientation + side to move + moved flags.

    :meth:`apply_move` either commits a move completely or leaves the board
    untouched and raises an :class:`IllegalMoveError`. Mutation windows and
    the public read helpers share one re-entrant lock, so a reader on another
    thread never sees a half-applied move.
    """

    __slots__ = (
        "board",
        "color_on_top",
        "side_to_move",
        "moved",
        "_history",
        "_lock",
        "_rng",
    )

    def __init__(
        self,
        board: Board | None = None,
        color_on_top: Color = Color.BLACK,
        side_to_move: Color = Color.WHITE,
        moved: MovedPieces = MovedPieces.NONE,
        rng: random.Random | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial(color_on_top)
        self.color_on_top = color_on_top
        self.side_to_move = side_to_move
        self.moved = moved
        self._history: list[_PositionState] = []
        self._lock = threading.RLock()
        self._rng = rng if rng is not None else random.Random()

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        with self._lock:
            return self.board[sq]

    def move_generator(self) -> MoveGenerator:
        return MoveGenerator(self.board, self.color_on_top, self.moved, self._rng)

    def is_in_check(self, color: Color | None = None) -> bool:
        """Is *color*'s king (default: side to move) attacked?"""
        color = self.side_to_move if color is None else color
        with self._lock:
            return is_king_in_check(self.board, color.opposite, self.color_on_top)

    def is_square_threatened(self, sq: Square, by_color: Color) -> bool:
        with self._lock:
            return is_square_threatened(self.board, sq, by_color, self.color_on_top)

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Moves of the piece on *sq* that :meth:`apply_move` would accept."""
        with self._lock:
            piece = self.board[sq]
            if piece is None:
                return []
            candidates = self.move_generator().generate_piece_moves(sq, piece.color)
            return [m for m in candidates if self.is_legal(m)]

    def legal_destinations(self, sq: Square) -> list[Square]:
        """Distinct destination squares for the piece on *sq*."""
        destinations: list[Square] = []
        for move in self.legal_moves_from(sq):
            if move.to_sq not in destinations:
                destinations.append(move.to_sq)
        return destinations

    def is_legal(self, move: Move) -> bool:
        """Trial-apply *move* on a scratch copy."""
        scratch = self.copy()
        scratch.side_to_move = move.piece.color
        try:
            scratch.apply_move(move)
        except IllegalMoveError:
            return False
        return True

    def is_castling_possible(self, color: Color, side: CastlingSide) -> bool:
        """Rights-based castling check: nothing moved, path between is empty.

        Check safety is not considered here; :meth:`apply_move` validates it.
        """
        if self.moved & (MovedPieces.king(color) | MovedPieces.rook(color, side)):
            return False
        path = CASTLING_PATHS[side]
        rank = back_rank(color, self.color_on_top)
        with self._lock:
            board = self.board
            if board[(KING_HOME_FILE, rank)] != Piece(color, PieceType.KING):
                return False
            if board[(path.rook_from, rank)] != Piece(color, PieceType.ROOK):
                return False
            return all(board.is_empty((f, rank)) for f in path.between)

    # ── Core move operations ─────────────────────────────────────────────

    def apply_move(self, move: Move) -> None:
        """Commit *move* or raise, leaving the position unchanged."""
        with self._lock:
            self._validate(move)
            if move.is_castling:
                self._apply_castling(move)
            else:
                self._apply_normal(move)

    def unmake_move(self, move: Move | None = None) -> Move:
        """Undo the last :meth:`apply_move` and return the move undone."""
        with self._lock:
            if not self._history:
                raise InvalidArgumentError("No move to undo")
            if move is not None and self._history[-1].move != move:
                raise InvalidArgumentError(f"Last move was not {move}")
            state = self._history.pop()
            for sq, piece in reversed(state.squares):
                self.board[sq] = piece
            self.moved = state.moved
            self.side_to_move = state.side_to_move
            return state.move

    @property
    def history(self) -> list[Move]:
        return [state.move for state in self._history]

    def _validate(self, move: Move) -> None:
        piece = self.board[move.from_sq]
        if piece != move.piece:
            raise InvalidArgumentError(
                f"Move {move} expects {move.piece.name} on its origin, found "
                f"{piece.name if piece else 'nothing'}"
            )
        if move.piece.color != self.side_to_move:
            raise InvalidArgumentError(f"It is not {move.piece.color}'s turn")
        target = self.board[move.to_sq]
        if target is not None and target.color == move.piece.color:
            raise InvalidArgumentError(f"Move {move} captures its own piece")

    def _apply_normal(self, move: Move) -> None:
        board = self.board
        color = move.piece.color
        captured = board[move.to_sq]
        saved = ((move.to_sq, captured), (move.from_sq, move.piece))

        board[move.to_sq] = move.promotion if move.promotion is not None else move.piece
        board[move.from_sq] = None

        if is_king_in_check(board, color.opposite, self.color_on_top):
            board[move.from_sq] = move.piece
            board[move.to_sq] = captured
            _LOGGER.debug("Rolled back %s: own king left in check", move)
            raise KingInCheckError(
                f"Move {move} would leave {color}'s king in check; move can't be made"
            )

        self._commit(move, saved, self.moved | self._moved_bits(move, captured))

    def _apply_castling(self, move: Move) -> None:
        side = CastlingSide.KINGSIDE if move.castle_kingside else CastlingSide.QUEENSIDE
        side_name = side.name.lower()
        color = move.piece.color
        opponent = color.opposite
        path = CASTLING_PATHS[side]
        rank = back_rank(color, self.color_on_top)
        king_from = (KING_HOME_FILE, rank)
        king_to = (path.king_to, rank)
        rook_from = (path.rook_from, rank)
        rook_to = (path.rook_to, rank)

        if move.piece.piece_type != PieceType.KING or move.from_sq != king_from:
            raise InvalidArgumentError(f"Invalid castling move parameters: {move}")
        if move.to_sq != king_to:
            raise InvalidArgumentError(f"Castling {side_name} must land the king on {king_to}")
        if not self.is_castling_possible(color, side):
            raise CastlingNotPossibleError(f"Castling {side_name} is not possible for {color}")

        board = self.board
        if is_king_in_check(board, opponent, self.color_on_top):
            raise CastlingNotPossibleError(
                f"Castling {side_name} is not possible: {color}'s king is in check"
            )
        for file in path.king_path[:-1]:
            if is_square_threatened(board, (file, rank), opponent, self.color_on_top):
                raise CastlingNotPossibleError(
                    f"Castling {side_name} is not possible: {color}'s king would "
                    "pass through an attacked square"
                )

        rook = board[rook_from]
        saved = ((rook_to, None), (rook_from, rook), (king_to, None), (king_from, move.piece))
        board[rook_to] = rook
        board[rook_from] = None
        board[king_to] = move.piece
        board[king_from] = None

        if is_king_in_check(board, opponent, self.color_on_top):
            for sq, piece in reversed(saved):
                board[sq] = piece
            _LOGGER.debug("Rolled back %s: own king left in check", move)
            raise CastlingNotPossibleError(
                f"Castling {side_name} would place {color}'s king in check; "
                "move can't be made"
            )

        self._commit(
            move,
            saved,
            self.moved | MovedPieces.king(color) | MovedPieces.rook(color, side),
        )

    def _commit(
        self,
        move: Move,
        saved: tuple[tuple[Square, Piece | None], ...],
        moved: MovedPieces,
    ) -> None:
        self._history.append(
            _PositionState(
                move=move,
                squares=saved,
                moved=self.moved,
                side_to_move=self.side_to_move,
            )
        )
        self.moved = moved
        self.side_to_move = self.side_to_move.opposite

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _moved_bits(self, move: Move, captured: Piece | None) -> MovedPieces:
        bits = MovedPieces.NONE
        piece = move.piece
        if piece.piece_type == PieceType.KING:
            bits |= MovedPieces.king(piece.color)
        elif piece.piece_type == PieceType.ROOK:
            side = self._home_corner_side(move.from_sq, piece.color)
            if side is not None:
                bits |= MovedPieces.rook(piece.color, side)

        if captured is not None and captured.piece_type == PieceType.ROOK:
            side = self._home_corner_side(move.to_sq, captured.color)
            if side is not None:
                bits |= MovedPieces.rook(captured.color, side)
        return bits

    def _home_corner_side(self, sq: Square, color: Color) -> CastlingSide | None:
        if sq[1] != back_rank(color, self.color_on_top):
            return None
        for side, path in CASTLING_PATHS.items():
            if sq[0] == path.rook_from:
                return side
        return None

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy without history, sharing the move-choice RNG."""
        with self._lock:
            return Position(
                board=self.board.copy(),
                color_on_top=self.color_on_top,
                side_to_move=self.side_to_move,
                moved=self.moved,
                rng=self._rng,
            )
