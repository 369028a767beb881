"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color. Values are the color bits of the packed piece code."""

    WHITE = 0b0100000000
    BLACK = 0b1000000000

    @property
    def opposite(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


class PieceType(IntEnum):
    """Piece kinds. Values are the type bits of the packed piece code."""

    PAWN = 0b0000000100
    ROOK = 0b0000001000
    KNIGHT = 0b0000010000
    BISHOP = 0b0000100000
    QUEEN = 0b0001000000
    KING = 0b0010000000


class Handedness(IntEnum):
    """Which of a side's two knights; only used to pick an icon."""

    LEFT = 0b0000000001
    RIGHT = 0b0000000010


class CastlingSide(IntEnum):
    KINGSIDE = auto()
    QUEENSIDE = auto()


class MovedPieces(IntFlag):
    """Which castling participants have left their home square.

    Bits are only ever added while a game is played; undo is the only
    operation that clears them.
    """

    NONE = 0
    WHITE_KING = auto()
    WHITE_KINGSIDE_ROOK = auto()
    WHITE_QUEENSIDE_ROOK = auto()
    BLACK_KING = auto()
    BLACK_KINGSIDE_ROOK = auto()
    BLACK_QUEENSIDE_ROOK = auto()

    @classmethod
    def king(cls, color: Color) -> MovedPieces:
        return cls.WHITE_KING if color == Color.WHITE else cls.BLACK_KING

    @classmethod
    def rook(cls, color: Color, side: CastlingSide) -> MovedPieces:
        if color == Color.WHITE:
            if side == CastlingSide.KINGSIDE:
                return cls.WHITE_KINGSIDE_ROOK
            return cls.WHITE_QUEENSIDE_ROOK
        if side == CastlingSide.KINGSIDE:
            return cls.BLACK_KINGSIDE_ROOK
        return cls.BLACK_QUEENSIDE_ROOK


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
