"""
FastAPI Application - REST + WebSocket API for the browser view.

Endpoints:
    POST   /api/v1/sessions                     Create game session
    GET    /api/v1/sessions                     List active sessions
    GET    /api/v1/sessions/{id}                Get game state
    DELETE /api/v1/sessions/{id}                End session
    POST   /api/v1/sessions/{id}/cells/{index}  Human clicks a cell
    POST   /api/v1/sessions/{id}/restart        Restart the game
    WS     /api/v1/sessions/{id}/ws             Real-time state updates

Opponent moves happen on the server after a delay; the browser learns
about them through the WebSocket (or by polling the state endpoint).

All responses are JSON with explicit Pydantic schemas.
"""

from contextlib import asynccontextmanager
from typing import Union
import asyncio
import json
import logging

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.websockets import WebSocketState
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings
from ..session import GameSession, SessionManager
from .schemas import (
    EndSessionResponse,
    ErrorCode,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    MoveResponse,
    SessionListResponse,
)
from .service import APIService

logger = logging.getLogger(__name__)

CLEANUP_INTERVAL_SECONDS = 60


def create_app(service: APIService | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or Settings.from_env()
    api_service = service or APIService(
        session_manager=SessionManager(opponent_delay=settings.opponent_delay),
    )

    async def reap_stale_sessions():
        while True:
            await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)
            removed = api_service.cleanup(settings.session_max_age)
            if removed:
                logger.info("Reaped %d stale session(s)", removed)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        reaper = asyncio.create_task(reap_stale_sessions())
        try:
            yield
        finally:
            reaper.cancel()
            for session_id in api_service.list_sessions():
                api_service.end_session(session_id, reason="shutdown")

    app = FastAPI(
        title="Tic-tac-toe API",
        description="Rabbit versus carrot: play tic-tac-toe against a random opponent.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Keeps broadcast tasks alive until they finish
    pending_sends: set[asyncio.Task] = set()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse, status_code: int = 400) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=error.model_dump(mode="json"),
        )

    def not_found(response: ErrorResponse) -> JSONResponse:
        return make_error_response(response, status_code=404)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session() -> GameStateResponse:
        """Start a new game with an empty board, human to move."""
        return api_service.create_session()

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a game session; a pending opponent move is cancelled."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/cells/{index}",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Click a cell",
    )
    async def activate_cell(session_id: str, index: int) -> Union[MoveResponse, JSONResponse]:
        """
        Attempt a human move.

        Clicking an occupied cell, clicking while the opponent is thinking,
        or clicking after the game ended is not an error: the response has
        `applied=false` and the unchanged state.
        """
        response = api_service.activate_cell(session_id, index)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Restart the game",
    )
    async def restart(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.restart(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Game state changed
        - error: Error occurred; also sent, before closing, when the session ends

        Messages from client:
        - ping: Keep-alive
        """
        await websocket.accept()

        session = api_service.session_manager.get_session(session_id)
        if not session:
            await websocket.send_json({
                "type": "error",
                "payload": ErrorResponse(
                    error=f"Session {session_id} not found",
                    error_code=ErrorCode.SESSION_NOT_FOUND,
                ).model_dump(mode="json"),
            })
            await websocket.close()
            return

        def state_message(changed: GameSession) -> dict:
            return {
                "type": "state_update",
                "payload": api_service.session_to_response(changed).model_dump(mode="json"),
            }

        async def send_ended():
            await websocket.send_json({
                "type": "error",
                "payload": ErrorResponse(
                    error=f"Session {session_id} ended",
                    error_code=ErrorCode.SESSION_NOT_FOUND,
                ).model_dump(mode="json"),
            })
            await websocket.close()

        def push(changed: GameSession):
            if changed.closed:
                sending = send_ended()
            else:
                sending = websocket.send_json(state_message(changed))
            task = asyncio.get_running_loop().create_task(sending)
            pending_sends.add(task)
            task.add_done_callback(pending_sends.discard)

        session.add_listener(push)
        try:
            await websocket.send_json(state_message(session))

            while websocket.application_state == WebSocketState.CONNECTED:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                if isinstance(message, dict) and message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})
        except WebSocketDisconnect:
            logger.debug("WebSocket for session %s disconnected", session_id)
        finally:
            session.remove_listener(push)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="tictac",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Tic-tac-toe API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
