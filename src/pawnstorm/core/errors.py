"""Exception hierarchy for the chess core.

``InvalidArgumentError`` signals a bug in the caller and is never recovered
inside the package. ``IllegalMoveError`` and its subclasses are recoverable:
the caller discards the move. ``GameOverError`` ends the game.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawnstorm.core.enums import Color


class ChessError(Exception):
    """Base class for every error raised by pawnstorm."""


class InvalidArgumentError(ChessError, ValueError):
    """A core function was called with arguments that violate its contract."""


class IllegalMoveError(ChessError):
    """A move cannot be committed to the board."""


class KingInCheckError(IllegalMoveError):
    """The move would leave the mover's own king in check."""


class CastlingNotPossibleError(IllegalMoveError):
    """Castling was refused, either by rights or by check safety."""


class BoardFormatError(ChessError, ValueError):
    """Board text data is structurally or semantically malformed."""


class GameOverError(ChessError):
    """The side to move has no legal moves."""

    def __init__(self, color: Color, message: str) -> None:
        super().__init__(message)
        self.color = color


class CheckmateError(GameOverError):
    """The side to move is in check and has no legal moves."""

    def __init__(self, color: Color) -> None:
        super().__init__(color, f"{color.name.capitalize()}'s king is in checkmate")


class StalemateError(GameOverError):
    """The side to move is not in check but has no legal moves."""

    def __init__(self, color: Color) -> None:
        super().__init__(color, f"{color.name.capitalize()} has no legal moves (stalemate)")
