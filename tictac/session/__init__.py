"""
Session Module - Manages ephemeral game sessions.

A session represents one board on screen:
- Created when the browser opens the game
- Holds the current game state
- Schedules the opponent's delayed moves
- Destroyed when the browser leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .game_session import GameSession
from .manager import SessionManager
from .scheduler import MoveScheduler

__all__ = [
    "GameSession",
    "SessionManager",
    "MoveScheduler",
]
