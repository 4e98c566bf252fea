"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation and doubles as the
turn controller:

    HUMAN_TURN    --cell activated-->  WON | DRAW | OPPONENT_TURN
    OPPONENT_TURN --opponent move--->  WON | DRAW | HUMAN_TURN
    any           --restart--------->  HUMAN_TURN (empty board, epoch + 1)

Design principles:
- Pure function: (state, action) -> ActionResult
- Validates before applying
- Invalid input is a no-op, never an error
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import BOARD_SIZE, GamePhase, GameState, Mark
from .action import Action, ActionType, ActionResult, IgnoreReason
from .rules import evaluate

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state, or the same state if the
        action was ignored.
        """
        reason = self._validate_action(state, action)
        if reason:
            logger.debug(
                "Ignored %s (index=%s): %s",
                action.action_type.value, action.index, reason.value,
            )
            return ActionResult.ignored(state, reason)

        handler = self._get_handler(action.action_type)
        return handler(state, action)

    def _validate_action(self, state: GameState, action: Action) -> IgnoreReason | None:
        """
        Validate that an action is legal in the current state.

        Returns the reason to ignore it, None if valid.
        """
        if action.action_type == ActionType.RESTART:
            return None

        # Stale deferred moves are dropped before anything else
        if action.action_type == ActionType.OPPONENT_MOVE and action.epoch != state.epoch:
            return IgnoreReason.STALE_EPOCH

        if state.is_over:
            return IgnoreReason.GAME_OVER

        expected = {
            ActionType.CELL_ACTIVATED: GamePhase.HUMAN_TURN,
            ActionType.OPPONENT_MOVE: GamePhase.OPPONENT_TURN,
        }[action.action_type]
        if state.phase != expected:
            return IgnoreReason.NOT_YOUR_TURN

        if action.index is None or not 0 <= action.index < BOARD_SIZE:
            return IgnoreReason.OUT_OF_RANGE

        if state.cell(action.index) is not None:
            return IgnoreReason.CELL_OCCUPIED

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.CELL_ACTIVATED: self._handle_cell_activated,
            ActionType.OPPONENT_MOVE: self._handle_opponent_move,
            ActionType.RESTART: self._handle_restart,
        }
        return handlers[action_type]

    def _handle_cell_activated(self, state: GameState, action: Action) -> ActionResult:
        """Place the human mark and hand over to the opponent."""
        return self._place(state, action.index, Mark.HUMAN)

    def _handle_opponent_move(self, state: GameState, action: Action) -> ActionResult:
        """Place the opponent mark and hand back to the human."""
        return self._place(state, action.index, Mark.OPPONENT)

    def _handle_restart(self, state: GameState, action: Action) -> ActionResult:
        new_state = GameState.initial(epoch=state.epoch + 1)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Game restarted (epoch {new_state.epoch})"],
        )

    def _place(self, state: GameState, index: int, mark: Mark) -> ActionResult:
        new_state = state.with_mark(index, mark)
        winner, is_over = evaluate(new_state.board)
        changes = [f"{mark.value} took cell {index}"]

        if is_over:
            # Terminal: the turn flag stays with the mover, nothing is scheduled
            new_state = new_state._copy_with(winner=winner, is_over=True)
            changes.append(f"Winner: {winner.value}" if winner else "Draw")
            return ActionResult.success_with_state(new_state, changes=changes)

        new_state = new_state._copy_with(active_turn=mark.other)
        return ActionResult.success_with_state(
            new_state,
            changes=changes,
            opponent_to_move=new_state.active_turn is Mark.OPPONENT,
        )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
