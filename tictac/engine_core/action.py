"""
Action System - Actions and results.

Actions represent:
1. Human input (a cell was activated)
2. The deferred opponent move
3. Restart

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    CELL_ACTIVATED = "cell_activated"
    OPPONENT_MOVE = "opponent_move"
    RESTART = "restart"


class IgnoreReason(Enum):
    """Why an action was dropped without changing state."""
    OUT_OF_RANGE = "out_of_range"
    CELL_OCCUPIED = "cell_occupied"
    NOT_YOUR_TURN = "not_your_turn"
    GAME_OVER = "game_over"
    STALE_EPOCH = "stale_epoch"
    SESSION_CLOSED = "session_closed"


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    ``epoch`` is only meaningful for opponent moves: it is the epoch the
    move was scheduled under.
    """
    action_type: ActionType
    index: int | None = None
    epoch: int | None = None

    @classmethod
    def cell_activated(cls, index: int) -> Action:
        """Factory for a human click."""
        return cls(action_type=ActionType.CELL_ACTIVATED, index=index)

    @classmethod
    def opponent_move(cls, index: int, epoch: int) -> Action:
        """Factory for the deferred opponent move."""
        return cls(action_type=ActionType.OPPONENT_MOVE, index=index, epoch=epoch)

    @classmethod
    def restart(cls) -> Action:
        return cls(action_type=ActionType.RESTART)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Ignored actions are not errors: ``applied`` is False and ``new_state``
    is the unchanged input state.
    """
    applied: bool
    new_state: Any  # GameState
    reason: IgnoreReason | None = None

    # True when the controller now expects the opponent to move
    opponent_to_move: bool = False

    # Human-readable changes
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def ignored(cls, state: Any, reason: IgnoreReason) -> ActionResult:
        """Create a no-op result."""
        return cls(applied=False, new_state=state, reason=reason)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        opponent_to_move: bool = False,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            applied=True,
            new_state=state,
            opponent_to_move=opponent_to_move,
            state_changes=changes or [],
        )
