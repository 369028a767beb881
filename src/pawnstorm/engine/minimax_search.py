"""Fixed-depth minimax search."""

from __future__ import annotations

import logging
import random

from pawnstorm.core.enums import Color
from pawnstorm.core.errors import CheckmateError, InvalidArgumentError, StalemateError
from pawnstorm.core.move import Move
from pawnstorm.core.position import Position
from pawnstorm.core.rules import Rules
from pawnstorm.engine.evaluation import DEFAULT_WEIGHTS, EvaluationWeights, evaluate
from pawnstorm.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_MATE_SCORE = 100_000.0


def _never_cancelled() -> bool:
    return False


class MinimaxSearchEngine(IEngine):
    """Plain minimax to a fixed ply depth, no pruning.

    Every node is expanded on copies of the searched position, so the
    caller's :class:`Position` is never touched. The node budget and the
    cancel callback stop the search early; the best root move found so far
    is returned.
    """

    __slots__ = (
        "_weights",
        "_rng",
        "_randomize_ties",
        "_nodes",
        "_max_nodes",
        "_cancel_check",
    )

    def __init__(
        self,
        weights: EvaluationWeights | None = None,
        seed: int | None = None,
        randomize_ties: bool = False,
    ) -> None:
        self._weights = weights if weights is not None else DEFAULT_WEIGHTS
        self._rng = random.Random(seed)
        self._randomize_ties = randomize_ties
        self._nodes = 0
        self._max_nodes: int | None = None
        self._cancel_check: CancelCheck = _never_cancelled

    @property
    def weights(self) -> EvaluationWeights:
        return self._weights

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise InvalidArgumentError("Search depth must be >= 1")

        self._nodes = 0
        self._max_nodes = limits.max_nodes
        self._cancel_check = is_cancelled or _never_cancelled

        root = position.copy()
        color = root.side_to_move
        _LOGGER.debug("Search start: %s to move, depth %d", color, limits.max_depth)

        children = Rules.legal_children(root)
        if not children:
            score = -_MATE_SCORE if root.is_in_check() else 0.0
            return SearchResult(None, score, 0, self._nodes)

        best_score = float("-inf")
        best_moves: list[Move] = []
        for move, child in children:
            if best_moves and self._should_stop():
                break
            score = self._minimax(child, limits.max_depth - 1, color, ply=1)
            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        if self._randomize_ties:
            best_move = self._rng.choice(best_moves)
        else:
            best_move = best_moves[0]

        _LOGGER.debug(
            "Search done: %s score=%.2f nodes=%d depth=%d",
            best_move,
            best_score,
            self._nodes,
            limits.max_depth,
        )
        return SearchResult(best_move, best_score, limits.max_depth, self._nodes)

    def select_move(
        self,
        position: Position,
        color: Color | None = None,
        limits: SearchLimits | None = None,
    ) -> Move:
        """Best move for *color* (default: side to move).

        Raises :class:`CheckmateError` or :class:`StalemateError` when
        *color* has no legal move.
        """
        if color is not None and color != position.side_to_move:
            position = position.copy()
            position.side_to_move = color
        result = self.search(position, limits or SearchLimits())
        if result.best_move is None:
            if position.is_in_check():
                raise CheckmateError(position.side_to_move)
            raise StalemateError(position.side_to_move)
        return result.best_move

    # -- Internals ----------------------------------------------------------

    def _minimax(self, position: Position, depth: int, color: Color, ply: int) -> float:
        if self._should_stop():
            return self._evaluate(position, color)

        self._nodes += 1
        if depth <= 0:
            return self._evaluate(position, color)

        children = Rules.legal_children(position)
        if not children:
            if not position.is_in_check():
                return 0.0
            # Nearer mates score further from zero.
            mate = _MATE_SCORE - ply
            return -mate if position.side_to_move == color else mate

        scores = [self._minimax(child, depth - 1, color, ply + 1) for _, child in children]
        if position.side_to_move == color:
            return max(scores)
        return min(scores)

    def _evaluate(self, position: Position, color: Color) -> float:
        return evaluate(
            position.board, color, position.color_on_top, self._weights, position.moved
        )

    def _should_stop(self) -> bool:
        if self._max_nodes is not None and self._nodes >= self._max_nodes:
            return True
        return self._cancel_check()


def select_move(
    position: Position,
    depth: int = 2,
    color: Color | None = None,
    seed: int | None = None,
) -> Move:
    """Convenience wrapper around :meth:`MinimaxSearchEngine.select_move`."""
    engine = MinimaxSearchEngine(seed=seed)
    return engine.select_move(position, color, SearchLimits(max_depth=depth))
