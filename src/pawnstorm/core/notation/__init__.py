"""Notation package: board text import/export."""

from pawnstorm.core.notation.board_file import (
    board_from_text,
    board_to_text,
    load_board,
    save_board,
)

__all__ = [
    "board_from_text",
    "board_to_text",
    "load_board",
    "save_board",
]
