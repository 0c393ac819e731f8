"""
Turn State - The mutable word being edited between commits.

Design principles:
- One TurnState per game session; callers serialize edits and commits
- Edits only touch `current_word`; a commit is the only way history grows
- Commit is atomic: a rejected word leaves every field as it was
- History entries are immutable and are the persistence contract
"""

from __future__ import annotations
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..errors import FailureKind, FAILURE_MESSAGES
from ..lexicon.index import LexiconIndex
from .scoring import ScoreResult, score_move
from .validator import ValidationOptions, ValidationResult, validate_word

log = logging.getLogger("wordplay.engine")


@dataclass(frozen=True)
class CommittedTurn:
    """One accepted move. Never modified after it is appended."""
    turn_number: int
    actor_id: str
    previous_word: str
    new_word: str
    score_earned: int
    key_letter_consumed: str | None = None
    key_letters_introduced: tuple[str, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "turn_number": self.turn_number,
            "actor_id": self.actor_id,
            "previous_word": self.previous_word,
            "new_word": self.new_word,
            "score_earned": self.score_earned,
            "key_letter_consumed": self.key_letter_consumed,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class EditResult:
    """Result of a single index edit on the current word."""
    success: bool
    word: str
    failure_reason: FailureKind | None = None

    @property
    def error(self) -> str | None:
        if self.failure_reason is None:
            return None
        return FAILURE_MESSAGES[self.failure_reason]

    @classmethod
    def failure(cls, word: str, reason: FailureKind) -> EditResult:
        return cls(success=False, word=word, failure_reason=reason)


@dataclass
class CommitResult:
    """
    Result of committing the current word.

    On success `turn` is the new history entry; on failure `failure_reason`
    says why and `validation` holds the full validator verdict.
    """
    success: bool
    turn: CommittedTurn | None = None
    failure_reason: FailureKind | None = None
    validation: ValidationResult | None = None
    score: ScoreResult | None = None

    @property
    def error(self) -> str | None:
        if self.failure_reason is None:
            return None
        return FAILURE_MESSAGES[self.failure_reason]

    @classmethod
    def failure(
        cls,
        reason: FailureKind,
        validation: ValidationResult | None = None,
    ) -> CommitResult:
        return cls(success=False, failure_reason=reason, validation=validation)


CommitListener = Callable[[CommittedTurn], None]


def _letter_set(letters: Iterable[str]) -> set[str]:
    return {letter.strip().upper() for letter in letters if letter and letter.strip()}


class TurnState:
    """
    Word under edit plus the committed history.

    Usage:
        state = TurnState(lexicon, start_word="CAT", key_letters={"S"})
        state.insert_letter(3, "S")
        result = state.commit("p1")
        result.turn.score_earned   # 5
    """

    def __init__(
        self,
        lexicon: LexiconIndex,
        start_word: str = "",
        key_letters: Iterable[str] = (),
        locked_letters: Iterable[str] = (),
        listeners: Iterable[CommitListener] = (),
    ):
        self.lexicon = lexicon
        self.start_word = start_word.strip().upper()
        self.current_word = self.start_word
        self.key_letters: set[str] = _letter_set(key_letters)
        self.locked_letters: set[str] = _letter_set(locked_letters)
        self.history: list[CommittedTurn] = []
        self._listeners: list[CommitListener] = list(listeners)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def committed_word(self) -> str:
        """Word of the last commit, or the start word before any commit."""
        if self.history:
            return self.history[-1].new_word
        return self.start_word

    @property
    def is_dirty(self) -> bool:
        return self.current_word != self.committed_word

    @property
    def turn_number(self) -> int:
        return len(self.history) + 1

    def add_listener(self, listener: CommitListener) -> None:
        self._listeners.append(listener)

    # =========================================================================
    # Edits
    # =========================================================================

    def insert_letter(self, position: int, letter: str) -> EditResult:
        word = self.current_word
        letter = (letter or "").strip().upper()
        if len(letter) != 1 or not ("A" <= letter <= "Z"):
            return EditResult.failure(word, FailureKind.MALFORMED_INPUT)
        if not 0 <= position <= len(word):
            return EditResult.failure(word, FailureKind.MALFORMED_INPUT)

        self.current_word = word[:position] + letter + word[position:]
        return EditResult(success=True, word=self.current_word)

    def remove_letter(self, position: int) -> EditResult:
        word = self.current_word
        if not 0 <= position < len(word):
            return EditResult.failure(word, FailureKind.MALFORMED_INPUT)
        if word[position] in self.locked_letters:
            return EditResult.failure(word, FailureKind.LETTER_LOCKED)

        self.current_word = word[:position] + word[position + 1:]
        return EditResult(success=True, word=self.current_word)

    def move_letter(self, from_index: int, to_index: int) -> EditResult:
        word = self.current_word
        if len(word) <= 1:
            return EditResult(success=True, word=word)
        if not (0 <= from_index < len(word) and 0 <= to_index < len(word)):
            return EditResult.failure(word, FailureKind.MALFORMED_INPUT)
        if from_index == to_index:
            return EditResult(success=True, word=word)

        letters = list(word)
        letter = letters.pop(from_index)
        letters.insert(to_index, letter)
        self.current_word = "".join(letters)
        return EditResult(success=True, word=self.current_word)

    def set_current_word(self, word: str) -> EditResult:
        """Replace the candidate wholesale (typed submission, bot choice)."""
        self.current_word = (word or "").strip().upper()
        return EditResult(success=True, word=self.current_word)

    def revert(self) -> EditResult:
        """Discard uncommitted edits."""
        self.current_word = self.committed_word
        return EditResult(success=True, word=self.current_word)

    def set_key_letters(self, letters: Iterable[str]) -> None:
        self.key_letters = _letter_set(letters)

    def set_locked_letters(self, letters: Iterable[str]) -> None:
        self.locked_letters = _letter_set(letters)

    # =========================================================================
    # Commit
    # =========================================================================

    def commit(self, actor_id: str, options: ValidationOptions | None = None) -> CommitResult:
        """
        Validate, score and append the current word.

        Listeners run after the entry is appended, in registration order.
        A listener that raises is logged and skipped; the commit stands.
        """
        previous = self.committed_word
        validation = validate_word(self.lexicon, previous, self.current_word, options)
        if not validation.is_valid:
            log.debug(
                "Commit rejected for %s: %s -> %s (%s)",
                actor_id, previous, self.current_word, validation.failure_reason.value,
            )
            return CommitResult.failure(validation.failure_reason, validation)

        new_word = validation.normalized_word
        result = score_move(previous, new_word, self.key_letters, self.locked_letters)
        turn = CommittedTurn(
            turn_number=self.turn_number,
            actor_id=actor_id,
            previous_word=previous,
            new_word=new_word,
            score_earned=result.total,
            key_letter_consumed=result.key_letter_consumed,
            key_letters_introduced=result.key_letters_introduced,
        )
        self.history.append(turn)
        self.current_word = new_word
        log.debug("Turn %d by %s: %s -> %s (+%d)",
                  turn.turn_number, actor_id, previous, new_word, turn.score_earned)

        for listener in self._listeners:
            try:
                listener(turn)
            except Exception:
                log.exception("Commit listener %r failed on turn %d", listener, turn.turn_number)

        return CommitResult(success=True, turn=turn, validation=validation, score=result)

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_word": self.current_word,
            "committed_word": self.committed_word,
            "key_letters": sorted(self.key_letters),
            "locked_letters": sorted(self.locked_letters),
            "history": [turn.to_dict() for turn in self.history],
        }
