"""
Daily Challenge - Transform a start word into a target word.

A challenge is a solo puzzle played under the normal move rules:
1. The date seeds the start word (five letters, none repeated)
2. The target is five to eight letters with at most two letters in
   common with the start word
3. Each accepted word extends the sequence until the target is reached
4. The player may forfeit; the sharing text marks the attempt either way

Everyone playing on the same date gets the same pair of words. States
live in a plain dict keyed by date unless the caller passes its own
mapping.
"""

from __future__ import annotations
import logging
import random
import time
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, MutableMapping

from ..engine_core.scoring import analyze_change
from ..engine_core.validator import ValidationOptions, validate_word
from ..errors import FailureKind, FAILURE_MESSAGES
from ..lexicon.index import LexiconIndex, normalize

log = logging.getLogger("wordplay.challenge")

START_WORD_LENGTH = 5
TARGET_MIN_LENGTH = 5
TARGET_MAX_LENGTH = 8
MAX_SHARED_LETTERS = 2

# Day one of the challenge numbering.
CHALLENGE_EPOCH = date(2024, 1, 1)

NEW_LETTER_MARK = "\U0001F02B"
KEPT_LETTER_MARK = "*"

FALLBACK_START_WORDS = (
    "GAMES", "WORDS", "PLAYS", "TIMES", "MAKES",
    "WORLD", "HOUSE", "LIGHT", "SOUND", "NIGHT",
)

FALLBACK_TARGET_WORDS = (
    "QUICK", "JUMPY", "BLITZ", "WALTZ", "QUIRK", "FJORD", "BUMPH",
    "ZINGY", "PROXY", "WHISK", "JERKY", "MIXED", "VINYL", "ZEBRA",
    "QUARTZ", "JOCKEY", "WHISKY", "ZEPHYR", "OXYGEN", "PYTHON",
    "RHYTHM", "SPHINX", "SYZYGY", "FLYWAY", "GIZMOS", "HIJACK", "JAUNTY",
    "QUICKLY", "JOCKEYS", "WHISKEY", "ZEPHYRS", "PYTHONS",
    "RHYTHMS", "FLYWAYS", "HIJACKS", "JAUNTED", "COMPLEX", "DYNASTY",
    "JOCKEYED", "WHISKEYS", "RHYTHMIC", "HIJACKED", "DYNAMITE", "SYMPHONY",
)

LAST_RESORT_TARGETS = ("QUICK", "JUMPY", "BLITZ")


def daily_seed(day: str) -> int:
    """Stable non-negative seed for a date string (31-multiplier string hash)."""
    h = 0
    for char in day:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def has_repeated_letters(word: str) -> bool:
    return len(set(word)) != len(word)


def shared_letter_count(first: str, second: str) -> int:
    """Letters the two words have in common, counting repeats."""
    return sum((Counter(first.upper()) & Counter(second.upper())).values())


def is_valid_target(start_word: str, target_word: str) -> bool:
    start = normalize(start_word)
    target = normalize(target_word)
    return (
        bool(target)
        and target != start
        and len(target) >= TARGET_MIN_LENGTH
        and not has_repeated_letters(target)
        and shared_letter_count(start, target) <= MAX_SHARED_LETTERS
    )


def _today() -> str:
    return date.today().isoformat()


@dataclass(frozen=True)
class ChallengeState:
    """One player's progress on one challenge."""
    date: str
    start_word: str
    target_word: str
    current_word: str
    word_sequence: tuple[str, ...]
    step_count: int = 0
    completed: bool = False
    failed: bool = False
    failed_at_word: str | None = None

    @classmethod
    def begin(cls, day: str, start_word: str, target_word: str) -> ChallengeState:
        start = normalize(start_word)
        return cls(
            date=day,
            start_word=start,
            target_word=normalize(target_word),
            current_word=start,
            word_sequence=(start,),
        )

    @property
    def is_finished(self) -> bool:
        return self.completed or self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "start_word": self.start_word,
            "target_word": self.target_word,
            "current_word": self.current_word,
            "word_sequence": list(self.word_sequence),
            "step_count": self.step_count,
            "completed": self.completed,
            "failed": self.failed,
            "failed_at_word": self.failed_at_word,
        }


@dataclass
class ChallengeSubmission:
    """Outcome of submitting a word; `state` is unchanged on failure."""
    success: bool
    state: ChallengeState
    failure_reason: FailureKind | None = None

    @property
    def is_complete(self) -> bool:
        return self.success and self.state.completed

    @property
    def error(self) -> str | None:
        if self.failure_reason is None:
            return None
        return FAILURE_MESSAGES[self.failure_reason]


@dataclass
class ChallengeEngine:
    """
    Daily challenges over a shared lexicon.

    Usage:
        engine = ChallengeEngine(load_lexicon())
        state = engine.get_daily_state("2024-03-01")
        submission = engine.submit_word(state, "WORD")
        print(engine.sharing_text(submission.state))
    """
    lexicon: LexiconIndex
    store: MutableMapping[str, ChallengeState] = field(default_factory=dict)

    # =========================================================================
    # Word selection
    # =========================================================================

    def daily_words(self, day: str) -> tuple[str, str]:
        """The (start, target) pair every player gets on *day*."""
        return self._pick_words(random.Random(daily_seed(day)))

    def _pick_words(self, rng: random.Random) -> tuple[str, str]:
        starts = [
            word for word in self.lexicon.words_of_length(START_WORD_LENGTH)
            if not has_repeated_letters(word)
        ]
        start = rng.choice(starts) if starts else rng.choice(FALLBACK_START_WORDS)

        length = len(start) + rng.randint(-1, 1)
        length = max(TARGET_MIN_LENGTH, min(TARGET_MAX_LENGTH, length))
        return start, self._pick_target(start, length, rng)

    def _pick_target(self, start: str, length: int, rng: random.Random) -> str:
        targets = [w for w in self.lexicon.words_of_length(length) if is_valid_target(start, w)]
        if not targets:
            targets = [
                w
                for n in range(TARGET_MIN_LENGTH, TARGET_MAX_LENGTH + 1)
                for w in self.lexicon.words_of_length(n)
                if is_valid_target(start, w)
            ]
        if not targets:
            targets = [
                w for w in FALLBACK_TARGET_WORDS
                if len(w) == length and is_valid_target(start, w)
            ]
        if not targets:
            targets = [w for w in FALLBACK_TARGET_WORDS if is_valid_target(start, w)]
        if not targets:
            targets = list(LAST_RESORT_TARGETS)
        return rng.choice(targets)

    # =========================================================================
    # State
    # =========================================================================

    def get_daily_state(self, day: str | None = None) -> ChallengeState:
        """
        Saved state for *day* (today if omitted), or a fresh challenge.

        Raises:
            ValueError: *day* is not an ISO date
        """
        day = date.fromisoformat(day).isoformat() if day else _today()
        existing = self.store.get(day)
        if existing is not None:
            return existing

        start, target = self.daily_words(day)
        state = ChallengeState.begin(day, start, target)
        self.store[day] = state
        log.info("New challenge for %s: %s -> %s", day, start, target)
        return state

    def reset(self, day: str | None = None) -> ChallengeState:
        """Discard saved progress for *day* and start over."""
        day = date.fromisoformat(day).isoformat() if day else _today()
        self.store.pop(day, None)
        return self.get_daily_state(day)

    def random_challenge(self, seed: int | None = None) -> ChallengeState:
        """A practice challenge outside the daily numbering. Not saved."""
        if seed is None:
            seed = int(time.time() * 1000)
        start, target = self._pick_words(random.Random(seed))
        return ChallengeState.begin(f"random-{seed}", start, target)

    # =========================================================================
    # Play
    # =========================================================================

    def is_valid_move(self, from_word: str, to_word: str) -> bool:
        return validate_word(self.lexicon, from_word, to_word, self._options()).is_valid

    def submit_word(self, state: ChallengeState, word: str) -> ChallengeSubmission:
        """Play *word* after the current word of *state*."""
        candidate = normalize(word or "")

        if state.is_finished:
            return ChallengeSubmission(False, state, FailureKind.GAME_NOT_ACTIVE)
        if candidate in state.word_sequence:
            return ChallengeSubmission(False, state, FailureKind.ALREADY_PLAYED)

        validation = validate_word(self.lexicon, state.current_word, candidate, self._options())
        if not validation.is_valid:
            log.debug("Challenge %s rejected %s: %s", state.date, candidate, validation.failure_reason)
            return ChallengeSubmission(False, state, validation.failure_reason)

        completed = candidate == state.target_word
        new_state = replace(
            state,
            current_word=candidate,
            word_sequence=state.word_sequence + (candidate,),
            step_count=state.step_count + 1,
            completed=completed,
        )
        self._save(new_state)
        if completed:
            log.info("Challenge %s solved in %d steps", state.date, new_state.step_count)
        return ChallengeSubmission(True, new_state)

    def forfeit(self, state: ChallengeState) -> ChallengeState:
        if state.is_finished:
            return state
        new_state = replace(state, failed=True, failed_at_word=state.current_word)
        self._save(new_state)
        return new_state

    def _options(self) -> ValidationOptions:
        return ValidationOptions(check_letter_changes=True)

    def _save(self, state: ChallengeState) -> None:
        if not state.date.startswith("random-"):
            self.store[state.date] = state

    # =========================================================================
    # Sharing
    # =========================================================================

    @staticmethod
    def sharing_pattern(sequence) -> list[str]:
        """
        One line per move: a tile for each letter brought in, `*` for each
        letter carried over from the previous word.
        """
        lines = []
        for previous, current in zip(sequence, sequence[1:]):
            added = Counter(analyze_change(previous, current).added)
            line = []
            for letter in current:
                if added[letter] > 0:
                    added[letter] -= 1
                    line.append(NEW_LETTER_MARK)
                else:
                    line.append(KEPT_LETTER_MARK)
            lines.append("".join(line))
        return lines

    def sharing_text(self, state: ChallengeState) -> str:
        try:
            day_number = (date.fromisoformat(state.date) - CHALLENGE_EPOCH).days + 1
            title = f"Challenge #{day_number}"
        except ValueError:
            title = "Practice challenge"

        words = f"{state.start_word} → {state.target_word}"
        if state.completed:
            text = f"{title} ✓ {words}\n\n"
        elif state.failed:
            text = f"{title} ❌ {words}\n\n"
        else:
            text = f"{title} {words} (in progress)\n\n"

        text += "\n".join(self.sharing_pattern(list(state.word_sequence)))
        if state.completed:
            text += f"\n{state.step_count} turns"
        return text
