"""Chess engine package: evaluation, minimax search and Qt worker bridge."""

from pawnstorm.engine.evaluation import (
    DEFAULT_WEIGHTS,
    EvaluationWeights,
    PawnStructure,
    evaluate,
    tally_pawn_structure,
)
from pawnstorm.engine.minimax_search import MinimaxSearchEngine, select_move
from pawnstorm.engine.search import IEngine, SearchLimits, SearchResult

DefaultEngine: type[IEngine] = MinimaxSearchEngine

__all__ = [
    "DEFAULT_WEIGHTS",
    "DefaultEngine",
    "EvaluationWeights",
    "IEngine",
    "MinimaxSearchEngine",
    "PawnStructure",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "select_move",
    "tally_pawn_structure",
]
