"""Game management layer: state machine, controller and result values.

Quick start::

    from rookie.core import parse_square
    from rookie.game import GameController

    ctrl = GameController()
    result = ctrl.submit_move(parse_square("e2"), parse_square("e4"))
    assert result.legal
"""

from rookie.game.controller import GameController, GameEvents
from rookie.game.interfaces import (
    GamePhase,
    IGameController,
    MoveResult,
    OperationResult,
)
from rookie.game.state import GameState, MoveRecord, StateSnapshot

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "MoveResult",
    "OperationResult",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MoveRecord",
    "StateSnapshot",
]
