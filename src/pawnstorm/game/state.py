"""GameState — one game from setup to result, with move history and undo."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from pawnstorm.core.board import Board
from pawnstorm.core.enums import Color, GameResult, MovedPieces
from pawnstorm.core.errors import IllegalMoveError, InvalidArgumentError
from pawnstorm.core.move import Move
from pawnstorm.core.position import Position
from pawnstorm.core.rules import Rules
from pawnstorm.engine.minimax_search import MinimaxSearchEngine
from pawnstorm.engine.search import IEngine, SearchLimits
from pawnstorm.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MoveRecord:
    """A committed move plus what it did to the game."""

    move: Move
    ply: int
    was_capture: bool
    gave_check: bool


@dataclass
class GameState:
    """Mutable game lifecycle around a :class:`Position`."""

    position: Position = field(default_factory=Position)
    phase: GamePhase = GamePhase.NOT_STARTED
    result: GameResult = GameResult.IN_PROGRESS
    move_history: list[MoveRecord] = field(default_factory=list)

    # ── Setup ────────────────────────────────────────────────────────────

    def setup(
        self,
        board: Board | None = None,
        color_on_top: Color = Color.BLACK,
        side_to_move: Color = Color.WHITE,
        moved: MovedPieces = MovedPieces.NONE,
        seed: int | None = None,
    ) -> None:
        """Start a game from *board* (default: the starting layout)."""
        self.position = Position(
            board=board.copy() if board is not None else None,
            color_on_top=color_on_top,
            side_to_move=side_to_move,
            moved=moved,
            rng=random.Random(seed),
        )
        self.move_history = []
        self.result = GameResult.IN_PROGRESS
        self.phase = GamePhase.AWAITING_MOVE
        self._update_result()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def ply_count(self) -> int:
        return len(self.move_history)

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1].move if self.move_history else None

    # ── Moves ────────────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Validate and commit *move*; the game result is updated afterwards.

        Raises :class:`IllegalMoveError` when the piece cannot reach the
        destination or the move would leave its own king in check.
        """
        if self.phase == GamePhase.NOT_STARTED:
            raise InvalidArgumentError("Game has not been set up")
        if self.is_game_over:
            raise InvalidArgumentError("Game is over")
        if move.piece.color != self.side_to_move:
            raise IllegalMoveError(f"It is not {move.piece.color}'s turn")
        if not self._is_candidate(move):
            raise IllegalMoveError(f"{move.piece.name} cannot play {move}")

        self.position.apply_move(move)
        record = MoveRecord(
            move=move,
            ply=len(self.move_history) + 1,
            was_capture=move.captured is not None,
            gave_check=self.position.is_in_check(),
        )
        self.move_history.append(record)
        self.phase = GamePhase.AWAITING_MOVE
        self._update_result()
        return record

    def play_engine_move(
        self,
        engine: IEngine | None = None,
        limits: SearchLimits | None = None,
    ) -> MoveRecord | None:
        """Let *engine* pick and play a move for the side to move.

        Returns ``None`` when the game is already over.
        """
        if self.is_game_over:
            return None
        engine = engine if engine is not None else MinimaxSearchEngine()
        self.phase = GamePhase.THINKING
        try:
            result = engine.search(self.position, limits or SearchLimits())
        finally:
            self.phase = GamePhase.AWAITING_MOVE
        if result.best_move is None:
            self._update_result()
            return None
        return self.apply_move(result.best_move)

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone move or ``None``."""
        if not self.move_history:
            return None
        record = self.move_history.pop()
        self.position.unmake_move(record.move)
        self.result = GameResult.IN_PROGRESS
        self.phase = GamePhase.AWAITING_MOVE
        return record.move

    # ── Termination ──────────────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self.result = GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
        self.phase = GamePhase.GAME_OVER

    def set_draw(self) -> None:
        self.result = GameResult.DRAW
        self.phase = GamePhase.GAME_OVER

    # ── Internals ────────────────────────────────────────────────────────

    def _is_candidate(self, move: Move) -> bool:
        # Promotion handedness is cosmetic, so compare promotion types only.
        generator = self.position.move_generator()
        for candidate in generator.generate_piece_moves(move.from_sq, move.piece.color):
            if candidate.to_sq != move.to_sq or candidate.is_castling != move.is_castling:
                continue
            wanted = move.promotion.piece_type if move.promotion else None
            offered = candidate.promotion.piece_type if candidate.promotion else None
            if wanted == offered:
                return True
        return False

    def _update_result(self) -> None:
        self.result = Rules.game_result(self.position)
        if self.result != GameResult.IN_PROGRESS:
            self.phase = GamePhase.GAME_OVER
            _LOGGER.debug("Game over: %s", self.result.name)
