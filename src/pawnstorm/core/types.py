"""Square type alias and coordinate helpers.

A square is a ``(file, rank)`` pair, both in ``0..7``. ``rank == 0`` is the
top edge of the board as displayed; which color sits there is decided by the
position's ``color_on_top``. Names follow the on-screen labelling::

    (0, 0) -> 'a8'   (7, 0) -> 'h8'
    (0, 7) -> 'a1'   (7, 7) -> 'h1'
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeAlias

from pawnstorm.core.enums import Color

Square: TypeAlias = tuple[int, int]

_FILE_CHARS = "abcdefgh"
_RANK_CHARS = "87654321"


def file_of(sq: Square) -> int:
    """File index 0–7."""
    return sq[0]


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (0 = top row)."""
    return sq[1]


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    return (file, rank)


def is_valid_square(file: int, rank: int) -> bool:
    """Check whether the coordinates fall on the board."""
    return 0 <= file < 8 and 0 <= rank < 8


def all_squares() -> Iterator[Square]:
    """Every square, file-major (the order boards are stored in)."""
    for file in range(8):
        for rank in range(8):
            yield (file, rank)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (0, 7) → 'a1'."""
    return _FILE_CHARS[sq[0]] + _RANK_CHARS[sq[1]]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'a1' → (0, 7)."""
    if len(name) != 2 or name[0] not in _FILE_CHARS or name[1] not in _RANK_CHARS:
        raise ValueError(f"Invalid square name: {name!r}")
    return (_FILE_CHARS.index(name[0]), _RANK_CHARS.index(name[1]))


# ── Orientation ─────────────────────────────────────────────────────────────


def forward(color: Color, color_on_top: Color) -> int:
    """Rank step that moves *color*'s pawns away from its own back rank."""
    return 1 if color == color_on_top else -1


def back_rank(color: Color, color_on_top: Color) -> int:
    return 0 if color == color_on_top else 7


def pawn_start_rank(color: Color, color_on_top: Color) -> int:
    return 1 if color == color_on_top else 6


def promotion_rank(color: Color, color_on_top: Color) -> int:
    return 7 if color == color_on_top else 0
