"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Sequence

from pawnstorm.core.enums import Color, Handedness, PieceType
from pawnstorm.core.piece import Piece
from pawnstorm.core.types import Square, all_squares

_BACK_RANK: tuple[tuple[PieceType, Handedness | None], ...] = (
    (PieceType.ROOK, None),
    (PieceType.KNIGHT, Handedness.LEFT),
    (PieceType.BISHOP, None),
    (PieceType.KING, None),
    (PieceType.QUEEN, None),
    (PieceType.BISHOP, None),
    (PieceType.KNIGHT, Handedness.RIGHT),
    (PieceType.ROOK, None),
)


def _empty_grid() -> list[list[Piece | None]]:
    return [[None] * 8 for _ in range(8)]


class Board:
    """Mutable 8x8 board indexed by ``(file, rank)``."""

    __slots__ = ("_grid", "_king_squares")

    def __init__(self) -> None:
        # [file][rank] -> piece
        self._grid: list[list[Piece | None]] = _empty_grid()
        # color -> king square cache (None if king missing).
        self._king_squares: dict[Color, Square | None] = {
            Color.WHITE: None,
            Color.BLACK: None,
        }

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        file, rank = sq
        old_piece = self._grid[file][rank]
        if old_piece is not None and old_piece.piece_type == PieceType.KING:
            if self._king_squares[old_piece.color] == sq:
                self._king_squares[old_piece.color] = None

        self._grid[file][rank] = piece

        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[piece.color] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq[0]][sq[1]] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*, file-major order."""
        found: list[Square] = []
        for sq in all_squares():
            piece = self[sq]
            if piece is not None and piece.color == color and piece.piece_type == piece_type:
                found.append(sq)
        return found

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, file-major order."""
        found: list[Square] = []
        for sq in all_squares():
            piece = self[sq]
            if piece is not None and piece.color == color:
                found.append(sq)
        return found

    def find_king(self, color: Color) -> Square | None:
        """King square for *color*, or ``None`` when it is not on the board."""
        sq = self._king_squares[color]
        if sq is not None:
            return sq
        # The cache loses track when one of two kings of a color is overwritten.
        kings = self.pieces(color, PieceType.KING)
        if kings:
            self._king_squares[color] = kings[0]
            return kings[0]
        return None

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*."""
        sq = self.find_king(color)
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def codes(self) -> tuple[tuple[int, ...], ...]:
        """Packed piece codes, ``codes()[file][rank]``, 0 for empty."""
        return tuple(
            tuple(0 if piece is None else piece.code for piece in column)
            for column in self._grid
        )

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [column.copy() for column in self._grid]
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._grid = _empty_grid()
        self._king_squares = {Color.WHITE: None, Color.BLACK: None}

    # -- Factory ------------------------------------------------------------

    @classmethod
    def from_codes(cls, columns: Sequence[Sequence[int]]) -> Board:
        """Build a board from packed codes laid out ``columns[file][rank]``."""
        if len(columns) != 8 or any(len(column) != 8 for column in columns):
            raise ValueError("Board codes must be an 8x8 grid")
        b = cls()
        for file, column in enumerate(columns):
            for rank, code in enumerate(column):
                if code:
                    b[(file, rank)] = Piece.from_code(code)
        return b

    @classmethod
    def from_pieces(cls, placement: dict[Square, Piece]) -> Board:
        b = cls()
        for sq, piece in placement.items():
            b[sq] = piece
        return b

    @classmethod
    def initial(cls, color_on_top: Color = Color.BLACK) -> Board:
        """Standard starting position with *color_on_top* on ranks 0 and 1."""
        b = cls()
        bottom = color_on_top.opposite
        for file, (piece_type, handedness) in enumerate(_BACK_RANK):
            b[(file, 0)] = Piece(color_on_top, piece_type, handedness)
            b[(file, 1)] = Piece(color_on_top, PieceType.PAWN)
            b[(file, 6)] = Piece(bottom, PieceType.PAWN)
            b[(file, 7)] = Piece(bottom, piece_type, handedness)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8):
            row = []
            for file in range(8):
                p = self[(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{8 - rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
