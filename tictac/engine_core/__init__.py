"""
Engine Core - Deterministic game state management.

The engine is the runtime that:
1. Holds GameState
2. Detects wins and draws
3. Applies actions via the reducer (the turn controller)
"""

from .state import BOARD_SIZE, Board, Cell, GamePhase, GameState, GameStatus, Mark, empty_board
from .action import Action, ActionType, ActionResult, IgnoreReason
from .rules import WINNING_TRIPLES, check_winner, empty_cells, evaluate, is_board_full
from .reducer import Reducer, apply_action

__all__ = [
    "BOARD_SIZE",
    "Board",
    "Cell",
    "GamePhase",
    "GameState",
    "GameStatus",
    "Mark",
    "empty_board",
    "Action",
    "ActionType",
    "ActionResult",
    "IgnoreReason",
    "WINNING_TRIPLES",
    "check_winner",
    "empty_cells",
    "evaluate",
    "is_board_full",
    "Reducer",
    "apply_action",
]
