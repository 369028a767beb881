"""Candidate move generation per piece type."""

from __future__ import annotations

import random
from dataclasses import dataclass

from pawnstorm.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    Rays,
    is_king_in_check,
)
from pawnstorm.core.board import Board
from pawnstorm.core.enums import CastlingSide, Color, Handedness, MovedPieces, PieceType
from pawnstorm.core.errors import InvalidArgumentError
from pawnstorm.core.move import Move
from pawnstorm.core.piece import Piece
from pawnstorm.core.types import (
    Square,
    back_rank,
    forward,
    is_valid_square,
    pawn_start_rank,
    promotion_rank,
)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
)

KING_HOME_FILE = 3


@dataclass(frozen=True, slots=True)
class CastlingPath:
    """Files involved in castling toward one rook; the rank is the back rank."""

    side: CastlingSide
    rook_from: int
    rook_to: int
    king_to: int
    # Squares that must be empty between king and rook.
    between: tuple[int, ...]
    # Squares the king crosses or lands on.
    king_path: tuple[int, ...]


# The king starts on file 3, so the file-0 rook is the king-side rook.
CASTLING_PATHS: dict[CastlingSide, CastlingPath] = {
    CastlingSide.KINGSIDE: CastlingPath(
        side=CastlingSide.KINGSIDE,
        rook_from=0,
        rook_to=2,
        king_to=1,
        between=(1, 2),
        king_path=(2, 1),
    ),
    CastlingSide.QUEENSIDE: CastlingPath(
        side=CastlingSide.QUEENSIDE,
        rook_from=7,
        rook_to=4,
        king_to=5,
        between=(4, 5, 6),
        king_path=(4, 5),
    ),
}


class MoveGenerator:
    """Generates candidate moves on a :class:`Board`.

    Candidates obey piece geometry and never move a king into check, but a
    non-king move may still expose its own king; the move applier rejects
    those at commit time. The board is only read. King-safety probes run on
    a private copy.
    """

    __slots__ = ("_board", "_color_on_top", "_moved", "_rng")

    def __init__(
        self,
        board: Board,
        color_on_top: Color,
        moved: MovedPieces = MovedPieces.NONE,
        rng: random.Random | None = None,
    ) -> None:
        self._board = board
        self._color_on_top = color_on_top
        self._moved = moved
        self._rng = rng if rng is not None else random.Random()

    # -- Public API ---------------------------------------------------------

    def generate_moves(self, color: Color) -> list[Move]:
        """Candidate moves for *color*.

        While *color* is in check only king moves are produced. That narrows
        the search but does not prove mate: an empty result while in check is
        the checkmate signal of this generator.
        """
        moves: list[Move] = []
        board = self._board
        in_check = is_king_in_check(board, color.opposite, self._color_on_top)

        for sq in board.all_pieces(color):
            piece = board[sq]
            assert piece is not None
            if in_check and piece.piece_type != PieceType.KING:
                continue
            self._dispatch(sq, piece, color, moves)
        return moves

    def generate_all_moves(self, color: Color) -> list[Move]:
        """Candidate moves for every piece of *color*, in check or not."""
        moves: list[Move] = []
        board = self._board
        for sq in board.all_pieces(color):
            piece = board[sq]
            assert piece is not None
            self._dispatch(sq, piece, color, moves)
        return moves

    def generate_piece_moves(self, sq: Square, color: Color) -> list[Move]:
        """Candidate moves for the single *color* piece on *sq*."""
        piece = self._board[sq]
        if piece is None or piece.color != color:
            raise InvalidArgumentError(
                f"generate_piece_moves() called on {sq} which does not hold "
                f"a {color.name} piece"
            )
        moves: list[Move] = []
        self._dispatch(sq, piece, color, moves)
        return moves

    # -- Dispatch -----------------------------------------------------------

    def _dispatch(self, sq: Square, piece: Piece, color: Color, moves: list[Move]) -> None:
        piece_type = piece.piece_type
        if piece_type == PieceType.PAWN:
            self._gen_pawn(sq, color, moves)
        elif piece_type == PieceType.KNIGHT:
            self._gen_knight(sq, color, moves)
        elif piece_type == PieceType.BISHOP:
            self._gen_sliding(sq, color, PieceType.BISHOP, BISHOP_RAYS[sq], moves)
        elif piece_type == PieceType.ROOK:
            self._gen_sliding(sq, color, PieceType.ROOK, ROOK_RAYS[sq], moves)
        elif piece_type == PieceType.QUEEN:
            self._gen_sliding(sq, color, PieceType.QUEEN, QUEEN_RAYS[sq], moves)
        else:
            self._gen_king(sq, color, moves)

    def _expect(self, sq: Square, color: Color, piece_type: PieceType) -> Piece:
        piece = self._board[sq]
        if piece is None or piece.color != color or piece.piece_type != piece_type:
            raise InvalidArgumentError(
                f"{piece_type.name.lower()} move generation called on {sq}, "
                f"which is not a {color.name} {piece_type.name}"
            )
        return piece

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        pawn = self._expect(sq, color, PieceType.PAWN)
        file_idx, rank_idx = sq
        step = forward(color, self._color_on_top)
        ahead = rank_idx + step
        if not 0 <= ahead < 8:
            return
        promotes = ahead == promotion_rank(color, self._color_on_top)

        one_step = (file_idx, ahead)
        if board.is_empty(one_step):
            self._add_pawn_move(pawn, sq, one_step, None, promotes, moves)
            if rank_idx == pawn_start_rank(color, self._color_on_top):
                two_step = (file_idx, ahead + step)
                if board.is_empty(two_step):
                    moves.append(Move(pawn, sq, two_step))

        for df in (-1, 1):
            if not is_valid_square(file_idx + df, ahead):
                continue
            cap_sq = (file_idx + df, ahead)
            target = board[cap_sq]
            if target is not None and target.color != color:
                self._add_pawn_move(pawn, sq, cap_sq, target, promotes, moves)

    def _add_pawn_move(
        self,
        pawn: Piece,
        from_sq: Square,
        to_sq: Square,
        captured: Piece | None,
        promotes: bool,
        moves: list[Move],
    ) -> None:
        if not promotes:
            moves.append(Move(pawn, from_sq, to_sq, captured))
            return
        for pt in PROMOTION_TYPES:
            handedness = None
            if pt == PieceType.KNIGHT:
                # Cosmetic: picks which knight icon the promoted piece uses.
                handedness = self._rng.choice((Handedness.LEFT, Handedness.RIGHT))
            promoted = Piece(pawn.color, pt, handedness)
            moves.append(Move(pawn, from_sq, to_sq, captured, promoted))

    def _gen_knight(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        knight = self._expect(sq, color, PieceType.KNIGHT)
        for to_sq in KNIGHT_TARGETS[sq]:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(knight, sq, to_sq, target))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        piece_type: PieceType,
        rays: Rays,
        moves: list[Move],
    ) -> None:
        board = self._board
        slider = self._expect(sq, color, piece_type)
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(slider, sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(slider, sq, to_sq, target))
                break

    def _gen_king(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        king = self._expect(sq, color, PieceType.KING)
        opponent = color.opposite

        scratch = board.copy()
        scratch[sq] = None
        for to_sq in KING_TARGETS[sq]:
            target = board[to_sq]
            if target is not None and target.color == color:
                continue
            scratch[to_sq] = king
            attacked = is_king_in_check(scratch, opponent, self._color_on_top)
            scratch[to_sq] = target
            if not attacked:
                moves.append(Move(king, sq, to_sq, target))

        self._gen_castling(sq, king, color, moves)

    def _gen_castling(
        self, king_sq: Square, king: Piece, color: Color, moves: list[Move]
    ) -> None:
        rank = back_rank(color, self._color_on_top)
        if king_sq != (KING_HOME_FILE, rank):
            return
        if self._moved & MovedPieces.king(color):
            return

        board = self._board
        rook = Piece(color, PieceType.ROOK)
        for path in CASTLING_PATHS.values():
            if self._moved & MovedPieces.rook(color, path.side):
                continue
            if board[(path.rook_from, rank)] != rook:
                continue
            if any(not board.is_empty((f, rank)) for f in path.between):
                continue
            moves.append(
                Move(
                    king,
                    king_sq,
                    (path.king_to, rank),
                    castle_kingside=path.side == CastlingSide.KINGSIDE,
                    castle_queenside=path.side == CastlingSide.QUEENSIDE,
                )
            )


def generate_moves(
    board: Board,
    color_to_move: Color,
    color_on_top: Color,
    moved: MovedPieces = MovedPieces.NONE,
    rng: random.Random | None = None,
) -> list[Move]:
    """Candidate moves for *color_to_move*; see :meth:`MoveGenerator.generate_moves`."""
    return MoveGenerator(board, color_on_top, moved, rng).generate_moves(color_to_move)
