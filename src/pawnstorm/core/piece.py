"""Piece value object and its packed integer code."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from pawnstorm.core.enums import Color, Handedness, PieceType

_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_COLOR_BY_BIT: dict[int, Color] = {int(c): c for c in Color}
_TYPE_BY_BIT: dict[int, PieceType] = {int(t): t for t in PieceType}
_HANDEDNESS_BY_BIT: dict[int, Handedness] = {int(h): h for h in Handedness}

_COLOR_MASK = int(Color.WHITE) | int(Color.BLACK)
_TYPE_MASK = sum(int(t) for t in PieceType)
_HANDEDNESS_MASK = int(Handedness.LEFT) | int(Handedness.RIGHT)


@total_ordering
@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    Knights carry a :class:`Handedness`; every other kind must not. Equality
    and ordering match the packed :attr:`code`.
    """

    color: Color
    piece_type: PieceType
    handedness: Handedness | None = None

    def __post_init__(self) -> None:
        if self.piece_type == PieceType.KNIGHT:
            if self.handedness is None:
                raise ValueError("Knight requires a handedness")
        elif self.handedness is not None:
            raise ValueError(f"{self.piece_type.name} cannot carry a handedness")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self.code < other.code

    # ── Packed code ──────────────────────────────────────────────────────

    @property
    def code(self) -> int:
        """Bit-packed integer form: color | type | handedness."""
        value = int(self.color) | int(self.piece_type)
        if self.handedness is not None:
            value |= int(self.handedness)
        return value

    @classmethod
    def from_code(cls, code: int) -> Piece:
        """Decode a nonzero piece code, rejecting invalid bit combinations."""
        if code <= 0 or code & ~(_COLOR_MASK | _TYPE_MASK | _HANDEDNESS_MASK):
            raise ValueError(f"Invalid piece code: {code!r}")
        color = _COLOR_BY_BIT.get(code & _COLOR_MASK)
        piece_type = _TYPE_BY_BIT.get(code & _TYPE_MASK)
        if color is None or piece_type is None:
            raise ValueError(f"Invalid piece code: {code!r}")
        handedness_bits = code & _HANDEDNESS_MASK
        handedness = None
        if handedness_bits:
            handedness = _HANDEDNESS_BY_BIT.get(handedness_bits)
            if handedness is None:
                raise ValueError(f"Invalid piece code: {code!r}")
        return cls(color, piece_type, handedness)

    @staticmethod
    def is_valid_code(code: int) -> bool:
        """Whether *code* is ``0`` or decodes to a piece."""
        return code == 0 or code in VALID_PIECE_CODES

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter form (uppercase = white, lowercase = black)."""
        char = _CHARS[self.piece_type]
        return char.upper() if self.color == Color.WHITE else char

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    @property
    def name(self) -> str:
        """Asset-style name, e.g. ``white-knight-left``."""
        parts = [self.color.name.lower(), self.piece_type.name.lower()]
        if self.handedness is not None:
            parts.append(self.handedness.name.lower())
        return "-".join(parts)


VALID_PIECE_CODES: frozenset[int] = frozenset(
    Piece(color, piece_type, handedness).code
    for color in Color
    for piece_type in PieceType
    for handedness in (
        (Handedness.LEFT, Handedness.RIGHT)
        if piece_type == PieceType.KNIGHT
        else (None,)
    )
)
