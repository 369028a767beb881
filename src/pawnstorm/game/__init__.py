"""Game management layer — game state machine around a position.

Quick start::

    from pawnstorm.game import GameState

    game = GameState()
    game.setup()
    game.play_engine_move()
"""

from pawnstorm.game.interfaces import GamePhase
from pawnstorm.game.state import GameState, MoveRecord

__all__ = [
    "GamePhase",
    "GameState",
    "MoveRecord",
]
