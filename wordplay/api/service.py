"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions and their game loops
3. Maps engine failures to structured error responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .. import __version__
from ..config import Settings
from ..engine_core.validator import ValidationOptions, validate_word
from ..errors import FailureKind, FAILURE_MESSAGES, InvalidWordError, LexiconEmptyError
from ..lexicon import LexiconIndex, load_lexicon, normalize
from ..session import GameLoop, Session, SessionManager, TurnRecord, TurnResult
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
    HealthResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    TurnInfo,
    HistoryEntry,
    # Enums
    ErrorCode,
    SessionStatus,
    error_code_for,
)

log = logging.getLogger("wordplay.api")


def _session_not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error="Session not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
        details={"session_id": session_id},
    )


def _failure(kind: FailureKind, word: str | None = None) -> ErrorResponse:
    return ErrorResponse(
        error=FAILURE_MESSAGES[kind],
        error_code=error_code_for(kind),
        details={"word": word} if word else None,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(lexicon=load_lexicon())

        # Create session
        session_response = service.create_session(CreateSessionRequest())

        # Play
        turn_response = service.submit(session_id, SubmitRequest(word="CATS"))
    """
    lexicon: LexiconIndex
    session_manager: SessionManager | None = None

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(self.lexicon)

    @classmethod
    def from_settings(cls, settings: Settings) -> APIService:
        lexicon = load_lexicon(settings.wordlist_dir)
        manager = SessionManager(
            lexicon,
            max_turns=settings.max_turns,
            max_candidates=settings.max_candidates,
        )
        return cls(lexicon=lexicon, session_manager=manager)

    # =========================================================================
    # Dictionary
    # =========================================================================

    def health(self) -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="wordplay-engine",
            version=__version__,
            word_count=self.lexicon.word_count,
        )

    def validate(self, request: ValidateRequest) -> ValidateResponse:
        options = ValidationOptions(
            allow_slang=request.allow_slang,
            allow_profanity=request.allow_profanity,
            check_length=request.check_length,
        )
        result = validate_word(self.lexicon, request.previous_word, request.word, options)
        return ValidateResponse(
            word=result.normalized_word,
            is_valid=result.is_valid,
            failure_reason=result.failure_reason.value if result.failure_reason else None,
            message=result.message,
            censored=result.censored,
            length_delta=result.length_delta,
        )

    def anagrams(self, word: str) -> AnagramsResponse:
        found = list(self.lexicon.anagrams_of(word))
        return AnagramsResponse(word=normalize(word), anagrams=found, count=len(found))

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        """
        Create and start a new game session.

        If the bot moves first, its opening turn is played before returning.
        """
        try:
            session = self.session_manager.create_session(
                start_word=request.start_word,
                human_name=request.human_player_name,
                bot_profile=request.bot_profile,
                human_first=request.human_first,
                max_turns=request.max_turns,
                seed=request.seed,
                allow_profanity=request.allow_profanity,
            )
        except InvalidWordError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.MALFORMED_INPUT,
                details={"start_word": request.start_word},
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.UNKNOWN_PROFILE)
        except LexiconEmptyError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.LEXICON_EMPTY)

        game_loop = GameLoop(session)
        self._game_loops[session.session_id] = game_loop
        game_loop.start()
        game_loop.run_bot_turns()

        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return self._session_to_response(session)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def end_session(self, session_id: str) -> bool:
        self._game_loops.pop(session_id, None)
        return self.session_manager.end_session(session_id)

    def history(self, session_id: str) -> HistoryResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        turns = [self._record_to_entry(record) for record in session.log]
        return HistoryResponse(session_id=session_id, turns=turns, count=len(turns))

    # =========================================================================
    # Play
    # =========================================================================

    def apply_edit(self, session_id: str, request: EditRequest) -> EditResponse | ErrorResponse:
        game_loop = self._game_loops.get(session_id)
        if not game_loop:
            return _session_not_found(session_id)

        result = game_loop.apply_edit(
            request.operation.value,
            position=request.position,
            letter=request.letter,
            to_index=request.to_index,
            player_id=request.player_id,
        )
        if not result.success:
            return _failure(result.failure_reason, result.word)
        return EditResponse(session_id=session_id, success=True, word=result.word)

    def submit(self, session_id: str, request: SubmitRequest) -> TurnResponse | ErrorResponse:
        game_loop = self._game_loops.get(session_id)
        if not game_loop:
            return _session_not_found(session_id)

        result = game_loop.submit(request.word, player_id=request.player_id)
        return self._turn_response(game_loop, result, request.auto_bot)

    def pass_turn(self, session_id: str, request: PassRequest) -> TurnResponse | ErrorResponse:
        game_loop = self._game_loops.get(session_id)
        if not game_loop:
            return _session_not_found(session_id)

        result = game_loop.pass_turn(player_id=request.player_id)
        return self._turn_response(game_loop, result, request.auto_bot)

    def bot_turn(self, session_id: str) -> TurnResponse | ErrorResponse:
        game_loop = self._game_loops.get(session_id)
        if not game_loop:
            return _session_not_found(session_id)

        result = game_loop.play_bot_turn()
        return self._turn_response(game_loop, result, auto_bot=False)

    # =========================================================================
    # Conversion
    # =========================================================================

    def _turn_response(
        self,
        game_loop: GameLoop,
        result: TurnResult,
        auto_bot: bool,
    ) -> TurnResponse | ErrorResponse:
        if not result.success:
            return _failure(result.failure_reason, result.word)

        bot_turns = []
        if auto_bot:
            bot_turns = [self._turn_to_info(r) for r in game_loop.run_bot_turns()]

        session = game_loop.session
        return TurnResponse(
            session_id=session.session_id,
            turn=self._turn_to_info(result),
            bot_turns=bot_turns,
            session=self._session_to_response(session),
        )

    def _turn_to_info(self, result: TurnResult) -> TurnInfo:
        return TurnInfo(
            player_id=result.player_id,
            word=result.word,
            score=result.score,
            key_letter_consumed=result.key_letter_consumed,
            is_pass=result.is_pass,
            explanation=result.bot_decision.explanation if result.bot_decision else None,
        )

    def _record_to_entry(self, record: TurnRecord) -> HistoryEntry:
        return HistoryEntry(
            turn_number=record.turn_number,
            player_id=record.player_id,
            previous_word=record.previous_word,
            new_word=record.new_word,
            score=record.score,
            key_letter_consumed=record.key_letter_consumed,
            is_pass=record.is_pass,
            timestamp=record.timestamp.isoformat(),
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        current = session.current_player
        players = [
            PlayerInfo(
                player_id=seat.player_id,
                name=seat.name,
                is_bot=seat.is_bot,
                profile=seat.profile.profile_id if seat.profile else None,
                is_current_turn=seat is current,
                score=seat.score,
            )
            for seat in session.players
        ]
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.phase.value),
            current_word=session.current_word,
            pending_word=session.turn_state.current_word,
            key_letters=sorted(session.turn_state.key_letters),
            locked_letters=sorted(session.turn_state.locked_letters),
            current_turn=session.current_turn,
            max_turns=session.max_turns,
            current_turn_player_id=current.player_id,
            players=players,
            winner=session.winner_id,
            created_at=session.created_at,
        )
