"""Static evaluation: material, pawn structure and mobility.

All scores are from the point of view of the color being evaluated and use
pawn units (a pawn is worth ``1.0``).
"""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, MovedPieces, PieceType
from pawnstorm.core.move_generator import MoveGenerator
from pawnstorm.core.types import Square, forward


@dataclass(slots=True, frozen=True)
class EvaluationWeights:
    """Weights of the static evaluation (Shannon's values by default)."""

    pawn: float = 1.0
    knight: float = 3.0
    bishop: float = 3.0
    rook: float = 5.0
    queen: float = 9.0
    king: float = 200.0
    doubled_pawn: float = 0.5
    isolated_pawn: float = 0.5
    blocked_pawn: float = 0.5
    mobility: float = 0.1

    def piece_value(self, piece_type: PieceType) -> float:
        return {
            PieceType.PAWN: self.pawn,
            PieceType.KNIGHT: self.knight,
            PieceType.BISHOP: self.bishop,
            PieceType.ROOK: self.rook,
            PieceType.QUEEN: self.queen,
            PieceType.KING: self.king,
        }[piece_type]


DEFAULT_WEIGHTS = EvaluationWeights()


@dataclass(slots=True, frozen=True)
class PawnStructure:
    """Counts of weak pawns for one color."""

    doubled: int = 0
    isolated: int = 0
    blocked: int = 0


def tally_pawn_structure(board: Board, color: Color, color_on_top: Color) -> PawnStructure:
    """Count doubled, isolated and blocked pawns of *color*.

    A pawn is doubled when the square in front of it holds a pawn of the same
    color, so a stack of ``n`` pawns counts ``n - 1``. A pawn is isolated when
    no other pawn of its color stands within one file of it, its own file
    included. A pawn is blocked when the square in front holds any enemy
    piece or a friendly non-pawn.
    """
    pawns = board.pieces(color, PieceType.PAWN)
    pawn_files = Counter(sq[0] for sq in pawns)
    step = forward(color, color_on_top)

    doubled = isolated = blocked = 0
    for file_idx, rank_idx in pawns:
        # The pawn itself is one of the pawns on its file.
        if sum(pawn_files[f] for f in (file_idx - 1, file_idx, file_idx + 1)) == 1:
            isolated += 1

        ahead = rank_idx + step
        if not 0 <= ahead < 8:
            continue
        front = board[(file_idx, ahead)]
        if front is None:
            continue
        if front.color == color and front.piece_type == PieceType.PAWN:
            doubled += 1
        else:
            blocked += 1
    return PawnStructure(doubled, isolated, blocked)


def material(board: Board, color: Color, weights: EvaluationWeights = DEFAULT_WEIGHTS) -> float:
    """Material of *color* minus material of its opponent."""
    score = 0.0
    for sq in _occupied(board):
        piece = board[sq]
        assert piece is not None
        value = weights.piece_value(piece.piece_type)
        score += value if piece.color == color else -value
    return score


def mobility(
    board: Board,
    color: Color,
    color_on_top: Color,
    moved: MovedPieces = MovedPieces.NONE,
) -> int:
    """Number of candidate moves *color* has on *board*.

    Castling is only counted while *moved* leaves the king and rook in place.
    """
    # Promotion handedness does not change move counts.
    generator = MoveGenerator(board, color_on_top, moved, random.Random(0))
    return len(generator.generate_all_moves(color))


def evaluate(
    board: Board,
    color: Color,
    color_on_top: Color,
    weights: EvaluationWeights = DEFAULT_WEIGHTS,
    moved: MovedPieces = MovedPieces.NONE,
) -> float:
    """Static score of *board* for *color*; the opponent's score is its negation."""
    opponent = color.opposite
    own = tally_pawn_structure(board, color, color_on_top)
    theirs = tally_pawn_structure(board, opponent, color_on_top)

    score = material(board, color, weights)
    score -= weights.doubled_pawn * (own.doubled - theirs.doubled)
    score -= weights.isolated_pawn * (own.isolated - theirs.isolated)
    score -= weights.blocked_pawn * (own.blocked - theirs.blocked)
    if weights.mobility:
        score += weights.mobility * (
            mobility(board, color, color_on_top, moved)
            - mobility(board, opponent, color_on_top, moved)
        )
    return score


def _occupied(board: Board) -> list[Square]:
    return board.all_pieces(Color.WHITE) + board.all_pieces(Color.BLACK)
