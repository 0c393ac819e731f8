"""
Game Loop - Turn-by-turn play for one session.

The loop:
1. Start: the start word is marked used and the first key letter drawn
2. The human edits the word and submits (or submits a typed word)
3. The bot moves, or passes when nothing legal remains
4. After each commit: score, key letters used, lock, new key letter
5. Repeat until the turn counter passes max turns

Turn bookkeeping (locks, key letters, used words) lives here; the
TurnState only knows about the word and its history.
"""

from __future__ import annotations
import logging
import string
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

from ..bots.generator import BotDecision, generate_bot_move
from ..engine_core.state import CommitResult, EditResult
from ..engine_core.validator import ValidationOptions
from ..errors import FailureKind, FAILURE_MESSAGES
from .manager import GamePhase, PlayerSeat, TurnRecord

if TYPE_CHECKING:
    from .manager import Session

log = logging.getLogger("wordplay.session")

KEY_LETTER_ALPHABET = string.ascii_uppercase


def _drops_locked_letter(previous: str, candidate: str, locked_letters) -> bool:
    before = Counter(previous)
    after = Counter(candidate)
    return any(after[letter] < before[letter] for letter in locked_letters)


@dataclass
class TurnResult:
    """
    Result of processing a turn.

    Contains the move (or pass) that was made, the points it earned and,
    once the game is over, the winner.
    """
    success: bool
    phase: GamePhase

    player_id: str | None = None
    word: str | None = None
    score: int = 0
    key_letter_consumed: str | None = None
    is_pass: bool = False

    failure_reason: FailureKind | None = None
    bot_decision: BotDecision | None = None
    messages: list[str] = field(default_factory=list)

    # Game over info
    winner: str | None = None

    @property
    def error(self) -> str | None:
        if self.failure_reason is None:
            return None
        return FAILURE_MESSAGES[self.failure_reason]

    @classmethod
    def failure(
        cls,
        reason: FailureKind,
        phase: GamePhase,
        player_id: str | None = None,
        word: str | None = None,
    ) -> TurnResult:
        return cls(
            success=False,
            phase=phase,
            player_id=player_id,
            word=word,
            failure_reason=reason,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "phase": self.phase.value,
            "player_id": self.player_id,
            "word": self.word,
            "score": self.score,
            "key_letter_consumed": self.key_letter_consumed,
            "is_pass": self.is_pass,
            "error": self.error,
            "error_code": self.failure_reason.value if self.failure_reason else None,
            "winner": self.winner,
        }


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)
        loop.start()

        result = loop.submit("CATS")
        if not result.success:
            show(result.error)

        results = loop.run_bot_turns()
    """

    def __init__(self, session: Session):
        self.session = session

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> TurnResult:
        session = self.session
        if session.phase is not GamePhase.WAITING:
            return TurnResult.failure(FailureKind.GAME_NOT_ACTIVE, session.phase)

        session.phase = GamePhase.PLAYING
        session.used_words.add(session.current_word)
        self._draw_key_letter()
        log.info("Session %s started with %s, key letters %s",
                 session.session_id, session.current_word, sorted(session.turn_state.key_letters))
        return TurnResult(
            success=True,
            phase=session.phase,
            player_id=session.current_player.player_id,
            word=session.current_word,
            messages=[f"Start word: {session.current_word}"],
        )

    # =========================================================================
    # Human moves
    # =========================================================================

    def apply_edit(
        self,
        operation: str,
        position: int = 0,
        letter: str | None = None,
        to_index: int | None = None,
        player_id: str | None = None,
    ) -> EditResult:
        """
        Edit the pending word for the human on turn.

        operation is one of: insert, remove, move, revert.
        """
        session = self.session
        state = session.turn_state
        if session.phase is not GamePhase.PLAYING:
            return EditResult.failure(state.current_word, FailureKind.GAME_NOT_ACTIVE)
        seat = session.current_player
        if seat.is_bot or (player_id is not None and player_id != seat.player_id):
            return EditResult.failure(state.current_word, FailureKind.NOT_YOUR_TURN)

        if operation == "insert":
            return state.insert_letter(position, letter or "")
        if operation == "remove":
            return state.remove_letter(position)
        if operation == "move":
            if to_index is None:
                return EditResult.failure(state.current_word, FailureKind.MALFORMED_INPUT)
            return state.move_letter(position, to_index)
        if operation == "revert":
            return state.revert()
        return EditResult.failure(state.current_word, FailureKind.MALFORMED_INPUT)

    def submit(self, word: str | None = None, player_id: str | None = None) -> TurnResult:
        """
        Commit a human move.

        With *word* the pending word is replaced first; without it the
        word built through edits is committed.
        """
        session = self.session
        if session.phase is not GamePhase.PLAYING:
            return TurnResult.failure(FailureKind.GAME_NOT_ACTIVE, session.phase)
        seat = session.current_player
        if seat.is_bot or (player_id is not None and player_id != seat.player_id):
            return TurnResult.failure(FailureKind.NOT_YOUR_TURN, session.phase, player_id)

        if word is not None:
            session.turn_state.set_current_word(word)

        options = ValidationOptions(
            allow_profanity=session.allow_profanity,
            check_letter_changes=True,
        )
        return self._commit(seat, options)

    # =========================================================================
    # Bot moves
    # =========================================================================

    def play_bot_turn(self) -> TurnResult:
        session = self.session
        if session.phase is not GamePhase.PLAYING:
            return TurnResult.failure(FailureKind.GAME_NOT_ACTIVE, session.phase)
        seat = session.current_player
        if not seat.is_bot:
            return TurnResult.failure(FailureKind.NOT_YOUR_TURN, session.phase, seat.player_id)

        state = session.turn_state
        state.revert()
        decision = generate_bot_move(
            state,
            seat.profile,
            session.lexicon,
            rng=session.rng,
            max_candidates=session.max_candidates,
            exclude=session.used_words,
        )
        if decision.is_pass:
            result = self._record_pass(seat)
            result.bot_decision = decision
            result.messages.append(decision.explanation)
            return result

        state.set_current_word(decision.word)
        result = self._commit(seat, seat.profile.validation_options())
        if not result.success:
            log.warning("Bot %s chose %s but commit failed: %s",
                        seat.player_id, decision.word, result.failure_reason.value)
            state.revert()
            result = self._record_pass(seat)
        result.bot_decision = decision
        result.messages.append(decision.explanation)
        return result

    def run_bot_turns(self) -> list[TurnResult]:
        """Play bot turns until a human is on turn or the game ends."""
        results = []
        while self.session.phase is GamePhase.PLAYING and self.session.current_player.is_bot:
            results.append(self.play_bot_turn())
        return results

    # =========================================================================
    # Passing
    # =========================================================================

    def pass_turn(self, player_id: str | None = None) -> TurnResult:
        session = self.session
        if session.phase is not GamePhase.PLAYING:
            return TurnResult.failure(FailureKind.GAME_NOT_ACTIVE, session.phase)
        seat = session.current_player
        if player_id is not None and player_id != seat.player_id:
            return TurnResult.failure(FailureKind.NOT_YOUR_TURN, session.phase, player_id)
        session.turn_state.revert()
        return self._record_pass(seat)

    # =========================================================================
    # Turn bookkeeping
    # =========================================================================

    def _commit(self, seat: PlayerSeat, options: ValidationOptions) -> TurnResult:
        session = self.session
        state = session.turn_state
        candidate = state.current_word

        if _drops_locked_letter(state.committed_word, candidate, state.locked_letters):
            return TurnResult.failure(
                FailureKind.LETTER_LOCKED, session.phase, seat.player_id, candidate
            )

        if candidate != state.committed_word and candidate in session.used_words:
            return TurnResult.failure(
                FailureKind.ALREADY_PLAYED, session.phase, seat.player_id, candidate
            )

        commit: CommitResult = state.commit(seat.player_id, options)
        if not commit.success:
            return TurnResult.failure(
                commit.failure_reason, session.phase, seat.player_id, candidate
            )

        turn = commit.turn
        seat.score += turn.score_earned
        session.used_words.add(turn.new_word)
        session.used_key_letters.update(state.key_letters)

        if turn.key_letter_consumed and turn.key_letter_consumed in turn.new_word:
            state.set_locked_letters({turn.key_letter_consumed})
        else:
            state.set_locked_letters(())
        self._draw_key_letter()

        result = TurnResult(
            success=True,
            phase=session.phase,
            player_id=seat.player_id,
            word=turn.new_word,
            score=turn.score_earned,
            key_letter_consumed=turn.key_letter_consumed,
        )
        self._advance(result)
        return result

    def _record_pass(self, seat: PlayerSeat) -> TurnResult:
        session = self.session
        word = session.current_word
        session.log.append(TurnRecord(
            turn_number=session.current_turn,
            player_id=seat.player_id,
            previous_word=word,
            new_word=word,
            is_pass=True,
        ))
        session.turn_state.set_locked_letters(())
        log.debug("Session %s: %s passed", session.session_id, seat.player_id)

        result = TurnResult(
            success=True,
            phase=session.phase,
            player_id=seat.player_id,
            word=word,
            is_pass=True,
        )
        self._advance(result)
        return result

    def _draw_key_letter(self) -> None:
        """Replace the key letters with one fresh letter, if any remain."""
        session = self.session
        state = session.turn_state
        in_word = set(state.committed_word)
        available = [
            letter for letter in KEY_LETTER_ALPHABET
            if letter not in session.used_key_letters and letter not in in_word
        ]
        if available:
            state.set_key_letters({session.rng.choice(available)})
        else:
            state.set_key_letters(())

    def _advance(self, result: TurnResult) -> None:
        session = self.session
        session.current_player_index = (session.current_player_index + 1) % len(session.players)
        session.current_turn += 1
        if session.current_turn > session.max_turns:
            self._finish()
        result.phase = session.phase
        result.winner = session.winner_id

    def _finish(self) -> None:
        session = self.session
        session.phase = GamePhase.FINISHED
        winner = max(session.players, key=lambda seat: seat.score)
        session.winner_id = winner.player_id
        log.info("Session %s finished: %s wins with %d",
                 session.session_id, winner.player_id, winner.score)
