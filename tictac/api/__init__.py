"""
API Module - Browser view interface.

Exposes game sessions via REST + WebSocket. The browser:
1. Creates a session
2. Sends cell clicks and restarts
3. Receives state updates, including the opponent's delayed moves

All state is session-scoped.
"""

from .schemas import (
    # Responses
    GameStateResponse,
    MoveResponse,
    SessionListResponse,
    EndSessionResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    CellInfo,
    StatusInfo,
    # Enums
    ErrorCode,
    MarkValue,
    PhaseValue,
    StatusTone,
)
from .service import APIService
from .app import create_app

__all__ = [
    "GameStateResponse",
    "MoveResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "ErrorResponse",
    "HealthResponse",
    "CellInfo",
    "StatusInfo",
    "ErrorCode",
    "MarkValue",
    "PhaseValue",
    "StatusTone",
    "APIService",
    "create_app",
]
