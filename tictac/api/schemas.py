"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between the browser view and the
game service.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- VALIDATION_ERROR: Request could not be parsed
- INTERNAL_ERROR: Anything else
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class MarkValue(str, Enum):
    """Marks as shown in cells."""
    RABBIT = "rabbit"
    CARROT = "carrot"


class PhaseValue(str, Enum):
    """Turn controller phases."""
    HUMAN_TURN = "human_turn"
    OPPONENT_TURN = "opponent_turn"
    WON = "won"
    DRAW = "draw"


class StatusTone(str, Enum):
    """Badge variant for the status indicator."""
    DEFAULT = "default"
    SECONDARY = "secondary"
    DESTRUCTIVE = "destructive"
    OUTLINE = "outline"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CellInfo(BaseModel):
    """One cell for display."""
    index: int = Field(ge=0, le=8)
    mark: Optional[MarkValue] = None
    enabled: bool = False


class StatusInfo(BaseModel):
    """Status indicator contents."""
    phase: PhaseValue
    winner: Optional[MarkValue] = None
    is_over: bool = False
    text: str = Field(description="Your turn, Opponent thinking, Winner: Human, Winner: Opponent, Draw")
    tone: StatusTone = StatusTone.OUTLINE


# =============================================================================
# Response Models
# =============================================================================

class GameStateResponse(BaseModel):
    """Complete game state for rendering."""
    session_id: str
    cells: list[CellInfo]
    status: StatusInfo
    epoch: int = 0
    opponent_pending: bool = False


class MoveResponse(BaseModel):
    """Result of a cell click."""
    applied: bool
    reason: Optional[str] = Field(None, description="Why the click was ignored")
    state: GameStateResponse


class SessionListResponse(BaseModel):
    """List of active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response when ending a session."""
    success: bool
    session_id: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
