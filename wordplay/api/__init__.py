"""
API Module - HTTP interface.

Exposes the engine via REST API. A client:
1. Validates words and looks up anagrams
2. Creates game sessions against a bot
3. Edits and submits words, or passes
4. Reads the session state and history

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    ValidateRequest,
    CreateSessionRequest,
    EditRequest,
    SubmitRequest,
    PassRequest,
    # Responses
    ValidateResponse,
    AnagramsResponse,
    SessionResponse,
    EditResponse,
    TurnResponse,
    HistoryResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    TurnInfo,
    HistoryEntry,
    # Enums
    ErrorCode,
    EditOperation,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "ValidateRequest",
    "CreateSessionRequest",
    "EditRequest",
    "SubmitRequest",
    "PassRequest",
    # Responses
    "ValidateResponse",
    "AnagramsResponse",
    "SessionResponse",
    "EditResponse",
    "TurnResponse",
    "HistoryResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "TurnInfo",
    "HistoryEntry",
    # Enums
    "ErrorCode",
    "EditOperation",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
