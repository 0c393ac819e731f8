"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a client and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- UNKNOWN_PROFILE: Bot profile id not recognised
- MALFORMED_INPUT, LENGTH_VIOLATION, NO_OP_MOVE, UNKNOWN_WORD,
  PROFANITY_BLOCKED, TOO_MANY_CHANGES: word rejected by the validator
- LETTER_LOCKED: edit would remove a locked letter
- ALREADY_PLAYED: word was used earlier in the game
- NOT_YOUR_TURN, GAME_NOT_ACTIVE: request out of turn or after the game
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..errors import FailureKind


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class EditOperation(str, Enum):
    """Edits a player can make to the pending word."""
    INSERT = "insert"
    REMOVE = "remove"
    MOVE = "move"
    REVERT = "revert"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNKNOWN_PROFILE = "UNKNOWN_PROFILE"
    MALFORMED_INPUT = "MALFORMED_INPUT"
    LENGTH_VIOLATION = "LENGTH_VIOLATION"
    NO_OP_MOVE = "NO_OP_MOVE"
    UNKNOWN_WORD = "UNKNOWN_WORD"
    PROFANITY_BLOCKED = "PROFANITY_BLOCKED"
    TOO_MANY_CHANGES = "TOO_MANY_CHANGES"
    LETTER_LOCKED = "LETTER_LOCKED"
    ALREADY_PLAYED = "ALREADY_PLAYED"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    GAME_NOT_ACTIVE = "GAME_NOT_ACTIVE"
    LEXICON_EMPTY = "LEXICON_EMPTY"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_FAILURE_CODES: dict[FailureKind, ErrorCode] = {
    FailureKind.MALFORMED_INPUT: ErrorCode.MALFORMED_INPUT,
    FailureKind.LENGTH_VIOLATION: ErrorCode.LENGTH_VIOLATION,
    FailureKind.NO_OP_MOVE: ErrorCode.NO_OP_MOVE,
    FailureKind.UNKNOWN_WORD: ErrorCode.UNKNOWN_WORD,
    FailureKind.PROFANITY_BLOCKED: ErrorCode.PROFANITY_BLOCKED,
    FailureKind.TOO_MANY_CHANGES: ErrorCode.TOO_MANY_CHANGES,
    FailureKind.LETTER_LOCKED: ErrorCode.LETTER_LOCKED,
    FailureKind.LEXICON_EMPTY: ErrorCode.LEXICON_EMPTY,
    FailureKind.ALREADY_PLAYED: ErrorCode.ALREADY_PLAYED,
    FailureKind.NOT_YOUR_TURN: ErrorCode.NOT_YOUR_TURN,
    FailureKind.GAME_NOT_ACTIVE: ErrorCode.GAME_NOT_ACTIVE,
}


def error_code_for(kind: FailureKind) -> ErrorCode:
    return _FAILURE_CODES.get(kind, ErrorCode.VALIDATION_ERROR)


# =============================================================================
# Shared Models
# =============================================================================

class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    is_bot: bool
    profile: Optional[str] = None
    is_current_turn: bool = False
    score: int = 0

    model_config = {"from_attributes": True}


class TurnInfo(BaseModel):
    """One move or pass, as shown after it was made."""
    player_id: Optional[str] = None
    word: Optional[str] = None
    score: int = 0
    key_letter_consumed: Optional[str] = None
    is_pass: bool = False
    explanation: Optional[str] = Field(None, description="Bot reasoning, bots only")

    model_config = {"from_attributes": True}


class HistoryEntry(BaseModel):
    """A session log entry."""
    turn_number: int
    player_id: str
    previous_word: str
    new_word: str
    score: int = 0
    key_letter_consumed: Optional[str] = None
    is_pass: bool = False
    timestamp: str

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class ValidateRequest(BaseModel):
    """Request to validate a word, optionally as a move from another word."""
    word: str = Field(..., description="Candidate word")
    previous_word: Optional[str] = Field(None, description="Word being moved from")
    allow_slang: bool = True
    allow_profanity: bool = False
    check_length: bool = True


class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    start_word: Optional[str] = Field(None, description="Opening word (random if omitted)")
    human_player_name: str = Field("Player", description="Display name for human")
    bot_profile: str = Field("hard", description="trainer, easy, medium, hard, boss, noob, leet or random")
    human_first: bool = True
    max_turns: Optional[int] = Field(None, ge=1, le=100)
    seed: Optional[int] = Field(None, description="Seed for reproducible games")
    allow_profanity: bool = False


class EditRequest(BaseModel):
    """A single edit to the pending word."""
    operation: EditOperation
    position: int = Field(0, ge=0, description="Index to insert at, remove, or move from")
    letter: Optional[str] = Field(None, max_length=1, description="Letter to insert")
    to_index: Optional[int] = Field(None, ge=0, description="Destination index for move")
    player_id: Optional[str] = None


class SubmitRequest(BaseModel):
    """Submit the pending word, or a typed word."""
    word: Optional[str] = Field(None, description="Typed word; omit to submit edits")
    player_id: Optional[str] = None
    auto_bot: bool = Field(True, description="Let the bot reply straight away")


class PassRequest(BaseModel):
    """Pass the current turn."""
    player_id: Optional[str] = None
    auto_bot: bool = True


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class ValidateResponse(BaseModel):
    """Validator verdict."""
    word: str
    is_valid: bool
    failure_reason: Optional[str] = None
    message: str = ""
    censored: Optional[str] = None
    length_delta: Optional[int] = None
    api_version: str = "v1"


class AnagramsResponse(BaseModel):
    """Playable anagrams of a word."""
    word: str
    anagrams: list[str] = Field(default_factory=list)
    count: int = 0
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    current_word: str
    pending_word: str
    key_letters: list[str] = Field(default_factory=list)
    locked_letters: list[str] = Field(default_factory=list)
    current_turn: int = 1
    max_turns: int = 10
    current_turn_player_id: Optional[str] = None
    players: list[PlayerInfo] = Field(default_factory=list)
    winner: Optional[str] = None
    created_at: float = 0.0
    api_version: str = "v1"


class EditResponse(BaseModel):
    """Pending word after an edit."""
    session_id: str
    success: bool
    word: str
    api_version: str = "v1"


class TurnResponse(BaseModel):
    """Outcome of a submit, pass or bot turn."""
    session_id: str
    turn: TurnInfo
    bot_turns: list[TurnInfo] = Field(default_factory=list)
    session: SessionResponse
    api_version: str = "v1"


class HistoryResponse(BaseModel):
    """Full session log."""
    session_id: str
    turns: list[HistoryEntry] = Field(default_factory=list)
    count: int = 0
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    word_count: int = 0
