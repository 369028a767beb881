"""Board import/export text format.

One line per file (``a`` first), each holding eight comma-separated piece
codes for ranks 0..7::

    8, 4, 0, 0, 0, 0, 260, 264
    ...

There are exactly eight non-blank lines. Every code is a plain ASCII
integer, either ``0`` or a valid packed piece code, and the board holds
exactly one king of each color.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, PieceType
from pawnstorm.core.errors import BoardFormatError
from pawnstorm.core.piece import Piece

_LOGGER = logging.getLogger(__name__)

_SEPARATOR = re.compile(r",\s*")
_INTEGER = re.compile(r"-?\d+", re.ASCII)


def board_from_text(text: str) -> Board:
    """Parse board text into a :class:`Board`."""
    lines = text.splitlines()
    if len(lines) != 8:
        raise BoardFormatError(f"Board text must have 8 lines, got {len(lines)}")

    columns: list[list[int]] = []
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            raise BoardFormatError(f"Line {line_no} is empty")
        items = _SEPARATOR.split(line)
        if len(items) != 8:
            raise BoardFormatError(
                f"Line {line_no}: expected 8 comma-separated codes, got {len(items)}"
            )
        column: list[int] = []
        for item_no, item in enumerate(items, start=1):
            if _INTEGER.fullmatch(item) is None:
                raise BoardFormatError(
                    f"Line {line_no}, item {item_no}: {item!r} is not an integer"
                )
            code = int(item)
            if not Piece.is_valid_code(code):
                raise BoardFormatError(
                    f"Line {line_no}, item {item_no}: {code} is not a valid piece code"
                )
            column.append(code)
        columns.append(column)

    board = Board.from_codes(columns)
    for color in Color:
        kings = len(board.pieces(color, PieceType.KING))
        if kings != 1:
            raise BoardFormatError(f"Board must hold exactly one {color} king, found {kings}")
    return board


def board_to_text(board: Board) -> str:
    """Serialize *board*; the output round-trips through :func:`board_from_text`."""
    return "".join(", ".join(str(code) for code in column) + "\n" for column in board.codes())


def load_board(path: str | Path) -> Board:
    path = Path(path)
    try:
        return board_from_text(path.read_text(encoding="utf-8"))
    except BoardFormatError as exc:
        _LOGGER.warning("Rejected board file %s: %s", path, exc)
        raise


def save_board(board: Board, path: str | Path) -> None:
    Path(path).write_text(board_to_text(board), encoding="utf-8")
