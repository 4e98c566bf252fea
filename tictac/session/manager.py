"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Browser opens the game -> session created with an empty board
2. During the game the browser sends clicks and restarts
3. Browser leaves -> session ended, pending opponent move cancelled

PERSISTENCE RULES:
- No database, sessions live in memory only
- A reload starts a new session
"""

from __future__ import annotations
import logging
import time
from typing import Callable

from ..bots import BotPolicy, RandomPolicy
from .game_session import GameSession
from .scheduler import DEFAULT_DELAY_SECONDS

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up finished or abandoned sessions
    """

    def __init__(
        self,
        opponent_delay: float = DEFAULT_DELAY_SECONDS,
        bot_factory: Callable[[], BotPolicy] = RandomPolicy,
    ):
        self.opponent_delay = opponent_delay
        self.bot_factory = bot_factory
        self._sessions: dict[str, GameSession] = {}

    def create_session(self) -> GameSession:
        """Create a new game session with an empty board."""
        session = GameSession(
            bot=self.bot_factory(),
            opponent_delay=self.opponent_delay,
        )
        self._sessions[session.session_id] = session
        logger.info("Session %s created", session.session_id)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and clean up.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.close()
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if not session.closed
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions idle for longer than max_age.

        Idle time counts from the last click, restart or opponent move.
        Called periodically to free memory. Returns how many were ended.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_activity > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
