"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from pawnstorm.core.piece import Piece
from pawnstorm.core.types import Square, square_name

_PROMO_CHARS: dict[str, str] = {
    "rook": "r",
    "knight": "n",
    "bishop": "b",
    "queen": "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single move.

    For castling moves ``from_sq``/``to_sq`` describe the king; the rook's
    path follows from the castling side.
    """

    piece: Piece
    from_sq: Square
    to_sq: Square
    captured: Piece | None = None
    promotion: Piece | None = None
    castle_kingside: bool = False
    castle_queenside: bool = False

    @property
    def is_castling(self) -> bool:
        return self.castle_kingside or self.castle_queenside

    @property
    def captured_code(self) -> int:
        return 0 if self.captured is None else self.captured.code

    @property
    def promotion_code(self) -> int:
        return 0 if self.promotion is None else self.promotion.code

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        if self.castle_kingside:
            return "O-O"
        if self.castle_queenside:
            return "O-O-O"
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion.piece_type.name.lower()]
        return base
