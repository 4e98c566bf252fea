"""
Game Session - The stateful component behind one board on screen.

The session owns a GameState and drives it through the reducer:

1. Human activates a cell
2. Reducer applies the mark and checks for a win or draw
3. If the game continues, the opponent move is scheduled after a delay
4. The scheduled move is validated against the current epoch, applied,
   and the turn returns to the human

Restart and close cancel any pending opponent move.
"""

from __future__ import annotations
import logging
import time
import uuid
from typing import Callable

from ..bots import BotPolicy, RandomPolicy
from ..engine_core.action import Action, ActionResult, IgnoreReason
from ..engine_core.reducer import Reducer
from ..engine_core.state import BOARD_SIZE, Cell, GamePhase, GameState, GameStatus, Mark
from .scheduler import DEFAULT_DELAY_SECONDS, MoveScheduler

logger = logging.getLogger(__name__)

Listener = Callable[["GameSession"], None]

STATUS_TEXT = {
    GamePhase.HUMAN_TURN: "Your turn",
    GamePhase.OPPONENT_TURN: "Opponent thinking",
    GamePhase.DRAW: "Draw",
}
WINNER_TEXT = {
    Mark.HUMAN: "Winner: Human",
    Mark.OPPONENT: "Winner: Opponent",
}

# Badge variants used by the browser view
WINNER_TONE = {
    Mark.HUMAN: "default",
    Mark.OPPONENT: "destructive",
}
DRAW_TONE = "secondary"
PLAYING_TONE = "outline"


class GameSession:
    """
    One game against the computer.

    Usage:
        session = GameSession(opponent_delay=0.5)
        session.on_cell_activated(4)   # inside a running event loop
        session.get_status()           # OPPONENT_TURN
        ...                            # 0.5s later the opponent has moved
        session.on_restart()
        session.close()
    """

    def __init__(
        self,
        session_id: str | None = None,
        bot: BotPolicy | None = None,
        opponent_delay: float = DEFAULT_DELAY_SECONDS,
        scheduler: MoveScheduler | None = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.created_at = time.time()
        self.last_activity = self.created_at
        self.bot = bot or RandomPolicy()
        self.scheduler = scheduler or MoveScheduler(delay=opponent_delay)
        self.state = GameState.initial()
        self.closed = False

        self._reducer = Reducer()
        self._listeners: list[Listener] = []

    # =========================================================================
    # Presentation interface
    # =========================================================================

    def get_cell_display(self, index: int) -> Cell:
        """The mark shown in a cell, None if empty or outside 0-8."""
        if not 0 <= index < BOARD_SIZE:
            return None
        return self.state.cell(index)

    def is_cell_enabled(self, index: int) -> bool:
        """Whether a click on this cell would be accepted."""
        return (
            not self.closed
            and 0 <= index < BOARD_SIZE
            and self.state.phase == GamePhase.HUMAN_TURN
            and self.state.cell(index) is None
        )

    def get_status(self) -> GameStatus:
        return self.state.status

    def status_text(self) -> str:
        status = self.get_status()
        if status.phase == GamePhase.WON:
            return WINNER_TEXT[status.winner]
        return STATUS_TEXT[status.phase]

    def status_tone(self) -> str:
        status = self.get_status()
        if status.phase == GamePhase.WON:
            return WINNER_TONE[status.winner]
        if status.phase == GamePhase.DRAW:
            return DRAW_TONE
        return PLAYING_TONE

    def on_cell_activated(self, index: int) -> bool:
        """
        Attempt a human move.

        Returns True if the move was applied. Anything else (occupied cell,
        wrong turn, finished game, closed session) is silently ignored.
        """
        return self.attempt_move(index).applied

    def attempt_move(self, index: int) -> ActionResult:
        """Like on_cell_activated, but reports why a click was ignored."""
        if self.closed:
            return ActionResult.ignored(self.state, IgnoreReason.SESSION_CLOSED)
        self.last_activity = time.time()
        return self._dispatch(Action.cell_activated(index))

    def on_restart(self):
        """Reset the board; any pending opponent move is dropped."""
        if self.closed:
            return
        self.scheduler.cancel()
        self._dispatch(Action.restart())
        logger.info("Session %s restarted (epoch %d)", self.session_id, self.state.epoch)

    def close(self):
        """Tear the session down. The pending opponent move never fires."""
        if self.closed:
            return
        self.scheduler.cancel()
        self.closed = True
        # Last notification; listeners check `closed`
        for listener in list(self._listeners):
            listener(self)
        self._listeners.clear()

    # =========================================================================
    # Listeners
    # =========================================================================

    def add_listener(self, listener: Listener):
        """Call ``listener(session)`` after every applied change and on close."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    # =========================================================================
    # Internals
    # =========================================================================

    def _dispatch(self, action: Action) -> ActionResult:
        result = self._reducer.apply(self.state, action)
        if not result.applied:
            return result

        self.state = result.new_state
        self.last_activity = time.time()
        for change in result.state_changes:
            logger.debug("Session %s: %s", self.session_id, change)

        if result.opponent_to_move:
            self.scheduler.schedule(self.state.epoch, self._run_opponent_move)

        for listener in list(self._listeners):
            listener(self)
        return result

    def _run_opponent_move(self, epoch: int):
        """Scheduler callback: pick and apply the opponent's move."""
        if self.closed:
            return
        decision = self.bot.select_move(self.state)
        if decision is None:
            # Unreachable while full boards end the game first
            logger.debug("Session %s: opponent has no legal move", self.session_id)
            return
        self._dispatch(Action.opponent_move(decision.index, epoch))
