"""Attack survey and check detection.

Every function here is a pure read of the board it is given: nothing is
placed, removed or restored, so a survey can run against a shared board
without a critical section.
"""

from __future__ import annotations

from collections.abc import Callable

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, PieceType
from pawnstorm.core.types import Square, all_squares, forward, is_valid_square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

Rays = tuple[tuple[Square, ...], ...]


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for file_idx, rank_idx in all_squares():
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if is_valid_square(af, ar):
                moves.append((af, ar))
        targets[(file_idx, rank_idx)] = tuple(moves)
    return targets


def _build_rays(directions: tuple[tuple[int, int], ...]) -> dict[Square, Rays]:
    rays_per_square: dict[Square, Rays] = {}
    for file_idx, rank_idx in all_squares():
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while is_valid_square(af, ar):
                ray.append((af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square[(file_idx, rank_idx)] = tuple(square_rays)
    return rays_per_square


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Per-piece threat predicates -------------------------------------------


def pawn_threatens(
    board: Board, sq: Square, target: Square, color: Color, color_on_top: Color
) -> bool:
    """Whether the *color* pawn on *sq* attacks *target* diagonally forward."""
    return (
        target[1] == sq[1] + forward(color, color_on_top)
        and abs(target[0] - sq[0]) == 1
    )


def knight_threatens(
    board: Board, sq: Square, target: Square, color: Color, color_on_top: Color
) -> bool:
    return target in KNIGHT_TARGETS[sq]


def king_threatens(
    board: Board, sq: Square, target: Square, color: Color, color_on_top: Color
) -> bool:
    return target in KING_TARGETS[sq]


def _ray_reaches(board: Board, rays: Rays, target: Square) -> bool:
    # The first occupied square ends a ray whether or not it is the target.
    for ray in rays:
        for to_sq in ray:
            if to_sq == target:
                return True
            if board[to_sq] is not None:
                break
    return False


def rook_threatens(
    board: Board, sq: Square, target: Square, color: Color, color_on_top: Color
) -> bool:
    return _ray_reaches(board, ROOK_RAYS[sq], target)


def bishop_threatens(
    board: Board, sq: Square, target: Square, color: Color, color_on_top: Color
) -> bool:
    return _ray_reaches(board, BISHOP_RAYS[sq], target)


def queen_threatens(
    board: Board, sq: Square, target: Square, color: Color, color_on_top: Color
) -> bool:
    return _ray_reaches(board, QUEEN_RAYS[sq], target)


ThreatPredicate = Callable[[Board, Square, Square, Color, Color], bool]

THREAT_PREDICATES: dict[PieceType, ThreatPredicate] = {
    PieceType.PAWN: pawn_threatens,
    PieceType.ROOK: rook_threatens,
    PieceType.KNIGHT: knight_threatens,
    PieceType.BISHOP: bishop_threatens,
    PieceType.QUEEN: queen_threatens,
    PieceType.KING: king_threatens,
}


# -- Surveys ----------------------------------------------------------------


def threatening_pieces(
    board: Board, target: Square, threatening_color: Color, color_on_top: Color
) -> list[Square]:
    """Squares of every *threatening_color* piece that attacks *target*."""
    attackers: list[Square] = []
    for sq in board.all_pieces(threatening_color):
        piece = board[sq]
        assert piece is not None
        predicate = THREAT_PREDICATES[piece.piece_type]
        if predicate(board, sq, target, threatening_color, color_on_top):
            attackers.append(sq)
    return attackers


def is_square_threatened(
    board: Board, target: Square, threatening_color: Color, color_on_top: Color
) -> bool:
    """Would a piece of the other color standing on *target* be attacked?"""
    for sq in board.all_pieces(threatening_color):
        piece = board[sq]
        assert piece is not None
        predicate = THREAT_PREDICATES[piece.piece_type]
        if predicate(board, sq, target, threatening_color, color_on_top):
            return True
    return False


def is_king_in_check(
    board: Board, threatening_color: Color, color_on_top: Color
) -> bool:
    """Is the king opposing *threatening_color* attacked?

    A board without that king is never in check.
    """
    king_sq = board.find_king(threatening_color.opposite)
    if king_sq is None:
        return False
    return is_square_threatened(board, king_sq, threatening_color, color_on_top)
