"""
FastAPI Application - REST API for word game clients.

Endpoints:
    GET    /api/v1/health                   Health check
    POST   /api/v1/validate                 Validate a word or a move
    GET    /api/v1/anagrams/{word}          Playable anagrams of a word
    POST   /api/v1/sessions                 Create and start a game session
    GET    /api/v1/sessions                 List active sessions
    GET    /api/v1/sessions/{id}            Get session status
    DELETE /api/v1/sessions/{id}            End session
    POST   /api/v1/sessions/{id}/edits      Edit the pending word
    POST   /api/v1/sessions/{id}/submit     Commit the pending (or a typed) word
    POST   /api/v1/sessions/{id}/pass       Pass the turn
    POST   /api/v1/sessions/{id}/bot        Play the bot's turn
    GET    /api/v1/sessions/{id}/history    Session log

Bot Turn Flow:
    1. POST /submit or /pass ends the human turn
    2. With auto_bot=true (the default) the bot replies immediately
       and the response lists its move under bot_turns
    3. With auto_bot=false, call POST /bot to advance the bot yourself

All requests and responses are JSON with explicit Pydantic schemas.

Run with:
    uvicorn wordplay.api.app:create_app --factory
"""

from typing import Optional, Union

from ..config import Settings, configure_logging


def create_app(service=None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from settings if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        ValidateRequest,
        CreateSessionRequest,
        EditRequest,
        SubmitRequest,
        PassRequest,
        # Response models
        ValidateResponse,
        AnagramsResponse,
        SessionResponse,
        EditResponse,
        TurnResponse,
        HistoryResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        ErrorResponse,
        # Enums
        ErrorCode,
    )

    settings = settings or Settings.from_env()
    if service is None:
        configure_logging(settings.log_level)

    app = FastAPI(
        title="WordPlay Engine API",
        description="""
Turn-based word game engine: change one letter at a time, score key letters,
play against bots.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist or has ended |
| `UNKNOWN_PROFILE` | Bot profile id not recognised |
| `UNKNOWN_WORD` | Word is not in the dictionary |
| `LENGTH_VIOLATION` | Word too short, or length changed by more than one |
| `NO_OP_MOVE` | Word unchanged |
| `TOO_MANY_CHANGES` | More than one letter added or removed |
| `LETTER_LOCKED` | Edit would remove a locked letter |
| `ALREADY_PLAYED` | Word was used earlier in the game |
| `NOT_YOUR_TURN` | Request made out of turn |
| `GAME_NOT_ACTIVE` | Game has not started or is over |
        """,
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService.from_settings(settings)

    # =========================================================================
    # Error helpers
    # =========================================================================

    conflict_codes = {
        ErrorCode.ALREADY_PLAYED,
        ErrorCode.NOT_YOUR_TURN,
        ErrorCode.GAME_NOT_ACTIVE,
    }

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        if error.error_code == ErrorCode.SESSION_NOT_FOUND:
            status_code = 404
        elif error.error_code in conflict_codes:
            status_code = 409
        elif error.error_code == ErrorCode.LEXICON_EMPTY:
            status_code = 503
        else:
            status_code = 400
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    error_responses = {
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    }

    # =========================================================================
    # Dictionary Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/validate",
        response_model=ValidateResponse,
        tags=["Dictionary"],
        summary="Validate a word, optionally as a move from another word",
    )
    async def validate_word(request: ValidateRequest) -> ValidateResponse:
        """
        Run the move validator.

        A rejected word is still a 200 response; check `is_valid`.
        """
        return api_service.validate(request)

    @app.get(
        "/api/v1/anagrams/{word}",
        response_model=AnagramsResponse,
        tags=["Dictionary"],
        summary="List playable anagrams of a word",
    )
    async def anagrams(word: str) -> AnagramsResponse:
        return api_service.anagrams(word)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Unknown bot profile"}},
        tags=["Sessions"],
        summary="Create and start a new game session",
    )
    async def create_session(
        request: CreateSessionRequest,
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session against a bot.

        If the bot moves first, its opening move is already applied.
        """
        response = api_service.create_session(request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current status of a game session."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a game session and release resources."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.get(
        "/api/v1/sessions/{session_id}/history",
        response_model=HistoryResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get the session log",
    )
    async def get_history(session_id: str) -> Union[HistoryResponse, JSONResponse]:
        response = api_service.history(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Play Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/edits",
        response_model=EditResponse,
        responses=error_responses,
        tags=["Play"],
        summary="Insert, remove or move a letter in the pending word",
    )
    async def apply_edit(
        session_id: str,
        request: EditRequest,
    ) -> Union[EditResponse, JSONResponse]:
        response = api_service.apply_edit(session_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/submit",
        response_model=TurnResponse,
        responses=error_responses,
        tags=["Play"],
        summary="Commit the pending word, or a typed word",
    )
    async def submit(
        session_id: str,
        request: SubmitRequest,
    ) -> Union[TurnResponse, JSONResponse]:
        """
        Commit a move for the human player.

        A rejected word leaves the pending word in place so it can be fixed.
        """
        response = api_service.submit(session_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/pass",
        response_model=TurnResponse,
        responses=error_responses,
        tags=["Play"],
        summary="Pass the current turn",
    )
    async def pass_turn(
        session_id: str,
        request: Optional[PassRequest] = None,
    ) -> Union[TurnResponse, JSONResponse]:
        response = api_service.pass_turn(session_id, request or PassRequest())
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/bot",
        response_model=TurnResponse,
        responses=error_responses,
        tags=["Play"],
        summary="Play the bot's turn",
    )
    async def bot_turn(session_id: str) -> Union[TurnResponse, JSONResponse]:
        response = api_service.bot_turn(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return api_service.health()

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "WordPlay Engine API",
            "version": "1.0.0",
            "env": settings.env,
            "docs": "/api/docs",
            "health": "/api/v1/health",
        }

    return app
