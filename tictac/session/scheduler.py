"""
Move Scheduler - Defers the opponent's move to simulate thinking.

Built on the asyncio event loop's ``call_later``: nothing blocks while the
opponent "thinks". At most one move is pending; scheduling again replaces
the previous one. The callback receives the epoch it was scheduled under
so the reducer can drop it if the game was reset meanwhile.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 0.5


class MoveScheduler:
    """
    Single-slot cancelable timer.

    Usage:
        scheduler = MoveScheduler(delay=0.5)
        scheduler.schedule(state.epoch, session._run_opponent_move)
        ...
        scheduler.cancel()  # on restart or close
    """

    def __init__(
        self,
        delay: float = DEFAULT_DELAY_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self.delay = delay
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._epoch: int | None = None

    @property
    def pending(self) -> bool:
        """Whether a move is waiting to fire."""
        return self._handle is not None

    @property
    def pending_epoch(self) -> int | None:
        return self._epoch if self._handle is not None else None

    def schedule(self, epoch: int, callback: Callable[[int], None]):
        """
        Schedule ``callback(epoch)`` after the configured delay.

        Must be called from inside a running event loop unless one was
        given to the constructor.
        """
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._epoch = epoch
        self._handle = loop.call_later(self.delay, self._fire, epoch, callback)
        logger.debug("Opponent move scheduled in %.3fs (epoch %d)", self.delay, epoch)

    def cancel(self) -> bool:
        """Cancel the pending move. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        logger.debug("Pending opponent move cancelled (epoch %s)", self._epoch)
        self._handle = None
        self._epoch = None
        return True

    def _fire(self, epoch: int, callback: Callable[[int], None]):
        self._handle = None
        self._epoch = None
        callback(epoch)
