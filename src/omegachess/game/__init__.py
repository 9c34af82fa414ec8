"""Game management layer — controller, history tree, state, configuration.

Quick start::

    from omegachess.game import GameConfig, GameController

    ctrl = GameController(GameConfig())
    ctrl.attempt_move(E2, E4)
    ctrl.undo()
    ctrl.enter_analysis()
"""

from omegachess.game.analysis import AnalysisLine
from omegachess.game.config import GameConfig, new_instance_id, player_color_from
from omegachess.game.controller import GameController, GameEvents
from omegachess.game.history import HistoryNode, MoveHistory, Navigation
from omegachess.game.interfaces import (
    MoveResult,
    PendingPromotion,
    PendingSummon,
    ViewMode,
)
from omegachess.game.record import MoveRecord
from omegachess.game.state import GameState

__all__ = [
    # Interfaces
    "MoveResult",
    "PendingPromotion",
    "PendingSummon",
    "ViewMode",
    # Concrete
    "AnalysisLine",
    "GameConfig",
    "GameController",
    "GameEvents",
    "GameState",
    "HistoryNode",
    "MoveHistory",
    "MoveRecord",
    "Navigation",
    "new_instance_id",
    "player_color_from",
]
