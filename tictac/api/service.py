"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session calls
2. Manages sessions
3. Formats responses for the browser view

This layer is framework-agnostic. Methods that can trigger an opponent
move must run inside an asyncio event loop.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    CellInfo,
    ErrorCode,
    ErrorResponse,
    GameStateResponse,
    MarkValue,
    MoveResponse,
    PhaseValue,
    StatusInfo,
    StatusTone,
)
from ..engine_core.state import BOARD_SIZE
from ..session import GameSession, SessionManager


@dataclass
class APIService:
    """
    Main API service for the browser view.

    Usage:
        service = APIService()

        state = service.create_session()
        move = service.activate_cell(state.session_id, 4)
        service.restart(state.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self) -> GameStateResponse:
        session = self.session_manager.create_session()
        return self.session_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self.session_to_response(session)

    def activate_cell(self, session_id: str, index: int) -> MoveResponse | ErrorResponse:
        """
        Attempt a human move.

        An ignored click is a normal response with ``applied=False``.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = session.attempt_move(index)
        return MoveResponse(
            applied=result.applied,
            reason=result.reason.value if result.reason else None,
            state=self.session_to_response(session),
        )

    def restart(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.on_restart()
        return self.session_to_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def cleanup(self, max_age_seconds: int) -> int:
        return self.session_manager.cleanup_stale_sessions(max_age_seconds)

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def session_to_response(self, session: GameSession) -> GameStateResponse:
        """Convert a session to its display model."""
        status = session.get_status()
        cells = []
        for index in range(BOARD_SIZE):
            mark = session.get_cell_display(index)
            cells.append(CellInfo(
                index=index,
                mark=MarkValue(mark.value) if mark else None,
                enabled=session.is_cell_enabled(index),
            ))

        return GameStateResponse(
            session_id=session.session_id,
            cells=cells,
            status=StatusInfo(
                phase=PhaseValue(status.phase.value),
                winner=MarkValue(status.winner.value) if status.winner else None,
                is_over=status.is_over,
                text=session.status_text(),
                tone=StatusTone(session.status_tone()),
            ),
            epoch=session.state.epoch,
            opponent_pending=session.scheduler.pending,
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
