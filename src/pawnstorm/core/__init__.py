"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from pawnstorm.core import Position, Rules

    pos = Position()
    for move in Rules.legal_moves(pos):
        print(move)
"""

from pawnstorm.core.attacks import (
    is_king_in_check,
    is_square_threatened,
    threatening_pieces,
)
from pawnstorm.core.board import Board
from pawnstorm.core.enums import (
    CastlingSide,
    Color,
    GameResult,
    Handedness,
    MovedPieces,
    PieceType,
)
from pawnstorm.core.errors import (
    BoardFormatError,
    CastlingNotPossibleError,
    CheckmateError,
    ChessError,
    GameOverError,
    IllegalMoveError,
    InvalidArgumentError,
    KingInCheckError,
    StalemateError,
)
from pawnstorm.core.move import Move
from pawnstorm.core.move_generator import MoveGenerator, generate_moves
from pawnstorm.core.notation import board_from_text, board_to_text, load_board, save_board
from pawnstorm.core.piece import Piece
from pawnstorm.core.position import Position
from pawnstorm.core.rules import Rules
from pawnstorm.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingSide",
    "Color",
    "GameResult",
    "Handedness",
    "MovedPieces",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "generate_moves",
    # Attack survey
    "is_king_in_check",
    "is_square_threatened",
    "threatening_pieces",
    # Errors
    "BoardFormatError",
    "CastlingNotPossibleError",
    "CheckmateError",
    "ChessError",
    "GameOverError",
    "IllegalMoveError",
    "InvalidArgumentError",
    "KingInCheckError",
    "StalemateError",
    # Notation
    "board_from_text",
    "board_to_text",
    "load_board",
    "save_board",
]
