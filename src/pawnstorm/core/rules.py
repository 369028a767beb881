"""High-level chess rules: strictly legal moves, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pawnstorm.core.enums import Color, GameResult
from pawnstorm.core.errors import IllegalMoveError

if TYPE_CHECKING:
    from pawnstorm.core.move import Move
    from pawnstorm.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def legal_children(position: Position) -> list[tuple[Move, Position]]:
        """Every move the side to move may commit, with the resulting position.

        Candidates come from the full generator (not the in-check king-only
        shortcut) and each is trial-applied on a copy, so the list is exactly
        the set of moves :meth:`Position.apply_move` accepts.
        """
        children: list[tuple[Move, Position]] = []
        color = position.side_to_move
        for move in position.move_generator().generate_all_moves(color):
            child = position.copy()
            try:
                child.apply_move(move)
            except IllegalMoveError:
                continue
            children.append((move, child))
        return children

    @staticmethod
    def legal_moves(position: Position) -> list[Move]:
        return [move for move, _ in Rules.legal_children(position)]

    @staticmethod
    def has_legal_move(position: Position) -> bool:
        color = position.side_to_move
        return any(
            position.is_legal(move)
            for move in position.move_generator().generate_all_moves(color)
        )

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return position.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not Rules.has_legal_move(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not Rules.has_legal_move(position)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        if Rules.has_legal_move(position):
            return GameResult.IN_PROGRESS
        if Rules.is_in_check(position):
            return (
                GameResult.BLACK_WINS
                if position.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate
