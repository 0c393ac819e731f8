"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Create session -> start word drawn, players seated (phase: waiting)
2. Start -> start word marked used, first key letter drawn (phase: playing)
3. Players alternate: submit a word, let the bot move, or pass
4. Turn counter passes max turns -> highest score wins (phase: finished)
5. End session -> removed from memory

Sessions are in-memory only. Every session shares the manager's lexicon,
which is read-only.
"""

from __future__ import annotations
import logging
import random
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ..bots import BotProfile, DEFAULT_PROFILE, create_random_profile, get_profile
from ..bots.generator import DEFAULT_MAX_CANDIDATES
from ..engine_core.state import CommittedTurn, TurnState
from ..errors import InvalidWordError
from ..lexicon.index import MIN_WORD_LENGTH, WORD_PATTERN, LexiconIndex, normalize

log = logging.getLogger("wordplay.session")

DEFAULT_MAX_TURNS = 10
START_WORD_MIN_LENGTH = 4
START_WORD_MAX_LENGTH = 5


class GamePhase(Enum):
    """State of a game session."""
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass
class PlayerSeat:
    """A player in the session; bots carry a profile."""
    player_id: str
    name: str
    profile: BotProfile | None = None
    score: int = 0

    @property
    def is_bot(self) -> bool:
        return self.profile is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "is_bot": self.is_bot,
            "profile": self.profile.profile_id if self.profile else None,
            "score": self.score,
        }


@dataclass(frozen=True)
class TurnRecord:
    """One entry in the session log: a committed move or a pass."""
    turn_number: int
    player_id: str
    previous_word: str
    new_word: str
    score: int = 0
    key_letter_consumed: str | None = None
    is_pass: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_commit(cls, turn_number: int, turn: CommittedTurn) -> TurnRecord:
        return cls(
            turn_number=turn_number,
            player_id=turn.actor_id,
            previous_word=turn.previous_word,
            new_word=turn.new_word,
            score=turn.score_earned,
            key_letter_consumed=turn.key_letter_consumed,
            timestamp=turn.timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "turn_number": self.turn_number,
            "player_id": self.player_id,
            "previous_word": self.previous_word,
            "new_word": self.new_word,
            "score": self.score,
            "key_letter_consumed": self.key_letter_consumed,
            "is_pass": self.is_pass,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class Session:
    """
    A game session.

    Contains:
    - The turn state (word under edit, key and locked letters, commits)
    - Player seats and whose turn it is
    - Words and key letters already used this game
    - The session log (commits and passes, in order)
    """
    session_id: str
    turn_state: TurnState
    players: list[PlayerSeat]
    created_at: float

    phase: GamePhase = GamePhase.WAITING
    current_turn: int = 1
    max_turns: int = DEFAULT_MAX_TURNS
    current_player_index: int = 0
    max_candidates: int = DEFAULT_MAX_CANDIDATES
    allow_profanity: bool = False

    used_words: set[str] = field(default_factory=set)
    used_key_letters: set[str] = field(default_factory=set)
    log: list[TurnRecord] = field(default_factory=list)
    winner_id: str | None = None

    rng: random.Random = field(default_factory=random.Random)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def lexicon(self) -> LexiconIndex:
        return self.turn_state.lexicon

    @property
    def current_player(self) -> PlayerSeat:
        return self.players[self.current_player_index]

    @property
    def current_word(self) -> str:
        return self.turn_state.committed_word

    def get_player(self, player_id: str) -> PlayerSeat | None:
        for seat in self.players:
            if seat.player_id == player_id:
                return seat
        return None

    def is_active(self) -> bool:
        """Check if session is still playable."""
        return self.phase in {GamePhase.WAITING, GamePhase.PLAYING}

    def is_human_turn(self) -> bool:
        return self.phase is GamePhase.PLAYING and not self.current_player.is_bot

    def record_commit(self, turn: CommittedTurn) -> None:
        """Commit listener: mirror every accepted move into the log."""
        self.log.append(TurnRecord.from_commit(self.current_turn, turn))

    def scores(self) -> dict[str, int]:
        return {seat.player_id: seat.score for seat in self.players}

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "phase": self.phase.value,
            "current_turn": self.current_turn,
            "max_turns": self.max_turns,
            "current_word": self.current_word,
            "pending_word": self.turn_state.current_word,
            "key_letters": sorted(self.turn_state.key_letters),
            "locked_letters": sorted(self.turn_state.locked_letters),
            "current_player": self.current_player.player_id,
            "players": [seat.to_dict() for seat in self.players],
            "winner": self.winner_id,
        }


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions against the shared lexicon
    - Track active sessions
    - Clean up finished sessions
    """

    def __init__(
        self,
        lexicon: LexiconIndex,
        max_turns: int = DEFAULT_MAX_TURNS,
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
    ):
        self.lexicon = lexicon
        self.max_turns = max_turns
        self.max_candidates = max_candidates
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        start_word: str | None = None,
        human_player_id: str = "human",
        human_name: str = "Player",
        bot_profile: str = DEFAULT_PROFILE,
        human_first: bool = True,
        max_turns: int | None = None,
        seed: int | None = None,
        allow_profanity: bool = False,
    ) -> Session:
        """
        Create a new game session.

        Args:
            start_word: Opening word (random playable word if omitted)
            human_player_id: ID for the human player
            human_name: Display name for the human player
            bot_profile: Profile id of the bot opponent, or "random"
            human_first: Whether the human moves first
            max_turns: Turns before the game ends (manager default if omitted)
            seed: Random seed for start word, key letters and bot choices

        Returns:
            New Session ready to start

        Raises:
            ValueError: unknown bot profile
            InvalidWordError: start word is not letters only or too short
        """
        rng = random.Random(seed)

        if bot_profile.strip().lower() == "random":
            profile = create_random_profile(seed=seed)
        else:
            profile = get_profile(bot_profile)

        if start_word:
            word = normalize(start_word)
            if len(word) < MIN_WORD_LENGTH or not WORD_PATTERN.fullmatch(word):
                raise InvalidWordError(f"Start word must be {MIN_WORD_LENGTH}+ letters A-Z: {start_word!r}")
        else:
            word = self.lexicon.random_word_of_length(
                START_WORD_MIN_LENGTH, START_WORD_MAX_LENGTH, rng=rng
            )

        human = PlayerSeat(player_id=human_player_id, name=human_name)
        bot = PlayerSeat(player_id=f"bot_{profile.profile_id}", name=profile.name, profile=profile)
        players = [human, bot] if human_first else [bot, human]

        session = Session(
            session_id=str(uuid.uuid4()),
            turn_state=TurnState(self.lexicon, start_word=word),
            players=players,
            created_at=time.time(),
            max_turns=max_turns or self.max_turns,
            max_candidates=self.max_candidates,
            allow_profanity=allow_profanity,
            rng=rng,
            metadata={"seed": seed},
        )
        session.turn_state.add_listener(session.record_commit)

        self._sessions[session.session_id] = session
        log.info("Created session %s: start word %s vs %s", session.session_id, word, profile.profile_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.phase is not GamePhase.FINISHED:
            session.phase = GamePhase.FINISHED
        log.info("Ended session %s", session_id)
        return True

    def list_sessions(self) -> list[Session]:
        return list(self._sessions.values())

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age.

        Returns the number removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
