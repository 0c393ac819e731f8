"""
Bot Move Generator - Finds, filters and picks a bot's next word.

Pipeline:
1. Enumerate candidates from the current word (insert, delete, rearrange)
2. Drop already-played words and anything the validator rejects
3. Apply the profile's key-letter and score-band filters
4. Let the profile's selection policy pick one, or pass

Enumeration goes through the lexicon's anagram buckets: a word one letter
longer than W is in the bucket of some W+letter, a word one letter shorter
is in the bucket of some W-letter, and a rearrangement is in W's own bucket.
Profiles allowed to play invalid words use a pattern generator instead and
never consult the dictionary.

The generator never mutates the turn state.
"""

from __future__ import annotations
import logging
import random
import re
import string
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum

from ..errors import FailureKind
from ..engine_core.scoring import ScoreResult, score_move
from ..engine_core.state import TurnState
from ..engine_core.validator import RuleBreaks, validate_word
from ..lexicon.index import LexiconIndex, anagram_key, normalize
from .policy import policy_for
from .profile import BotProfile

log = logging.getLogger("wordplay.bots")

DEFAULT_MAX_CANDIDATES = 500

ALPHABET = string.ascii_uppercase


class DeltaKind(Enum):
    """Shape of a candidate move relative to the current word."""
    INSERT = "insert"
    DELETE = "delete"
    REARRANGE = "rearrange"


@dataclass(frozen=True)
class MoveCandidate:
    """A word the bot could play."""
    word: str
    delta_kind: DeltaKind
    score: ScoreResult | None = None

    @property
    def total(self) -> int:
        return self.score.total if self.score else 0

    @property
    def captures_key_letter(self) -> bool:
        return bool(self.score and self.score.key_letters_introduced)


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Either a word to play or a pass. A pass is a normal outcome, not an
    invalid move.
    """
    candidate: MoveCandidate | None
    explanation: str = ""
    evaluated: int = 0
    legal: int = 0

    @property
    def is_pass(self) -> bool:
        return self.candidate is None

    @property
    def word(self) -> str | None:
        return self.candidate.word if self.candidate else None

    @property
    def failure_reason(self) -> FailureKind | None:
        return FailureKind.BOT_PASS if self.is_pass else None

    @classmethod
    def passed(cls, explanation: str, evaluated: int = 0, legal: int = 0) -> BotDecision:
        return cls(candidate=None, explanation=explanation, evaluated=evaluated, legal=legal)

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "is_pass": self.is_pass,
            "delta_kind": self.candidate.delta_kind.value if self.candidate else None,
            "score": self.candidate.total if self.candidate else 0,
            "explanation": self.explanation,
            "evaluated": self.evaluated,
        }


def delta_kind(current_word: str, word: str) -> DeltaKind:
    diff = len(word) - len(current_word)
    if diff > 0:
        return DeltaKind.INSERT
    if diff < 0:
        return DeltaKind.DELETE
    return DeltaKind.REARRANGE


# =============================================================================
# Candidate enumeration
# =============================================================================

def lexicon_candidates(
    lexicon: LexiconIndex,
    current_word: str,
    locked_letters: Iterable[str] = (),
    max_candidates: int = DEFAULT_MAX_CANDIDATES,
) -> list[str]:
    """
    Dictionary words reachable from *current_word* in one move.

    Deletions never remove a locked letter. At most *max_candidates*
    words are returned.
    """
    word = normalize(current_word)
    locked = {normalize(letter) for letter in locked_letters}

    keys: list[str] = []
    for letter in ALPHABET:
        keys.append(anagram_key(word + letter))
    for letter in sorted(set(word) - locked):
        index = word.index(letter)
        keys.append(anagram_key(word[:index] + word[index + 1:]))
    keys.append(anagram_key(word))

    found: list[str] = []
    seen = {word}
    for key in dict.fromkeys(keys):
        for candidate in lexicon.anagram_bucket(key):
            if candidate in seen:
                continue
            if len(found) >= max_candidates:
                return found
            seen.add(candidate)
            found.append(candidate)
    return found


def pattern_candidates(
    current_word: str,
    rule_breaks: RuleBreaks,
    locked_letters: Iterable[str] = (),
    max_candidates: int = DEFAULT_MAX_CANDIDATES,
) -> list[str]:
    """
    Single inserts and deletes over the allowed alphabet.

    Used by profiles that may play invalid words. Only strings matching
    the profile's custom pattern (when set) are kept.
    """
    word = normalize(current_word)
    locked = {normalize(letter) for letter in locked_letters}

    alphabet = ALPHABET
    if rule_breaks.allow_numerals:
        alphabet += string.digits
    if rule_breaks.allow_symbols:
        alphabet += string.punctuation
    pattern = re.compile(rule_breaks.custom_pattern) if rule_breaks.custom_pattern else None

    def variants():
        for position in range(len(word), -1, -1):
            for letter in alphabet:
                yield word[:position] + letter + word[position:]
        for position, letter in enumerate(word):
            if letter not in locked:
                yield word[:position] + word[position + 1:]

    found: list[str] = []
    seen = {word}
    for candidate in variants():
        if candidate in seen:
            continue
        seen.add(candidate)
        if pattern is not None and not pattern.fullmatch(candidate):
            continue
        if len(found) >= max_candidates:
            break
        found.append(candidate)
    return found


def introduces_key_letter(previous_word: str, word: str, key_letters: Iterable[str]) -> bool:
    before = Counter(previous_word)
    after = Counter(word)
    return any(after[key] > before[key] for key in key_letters)


def _within_band(candidate: MoveCandidate, profile: BotProfile) -> bool:
    if profile.min_score is not None and candidate.total < profile.min_score:
        return False
    if profile.max_score is not None and candidate.total > profile.max_score:
        return False
    return True


# =============================================================================
# Generation
# =============================================================================

def generate_bot_move(
    turn_state: TurnState,
    profile: BotProfile,
    lexicon: LexiconIndex,
    rng: random.Random | None = None,
    max_candidates: int = DEFAULT_MAX_CANDIDATES,
    exclude: Iterable[str] = (),
) -> BotDecision:
    """
    Choose the bot's next word for *turn_state*.

    Args:
        turn_state: Read only; nothing on it is changed
        profile: Strategy, rule breaks and filters to apply
        lexicon: Shared word index
        rng: Randomness source for random strategies (seed it for replays)
        max_candidates: Hard cap on enumerated candidates
        exclude: Words that may not be played (already used this game)

    Returns:
        BotDecision with a candidate, or a pass
    """
    current = turn_state.current_word
    keys = sorted(turn_state.key_letters)
    locked = sorted(turn_state.locked_letters)
    excluded = {normalize(w) for w in exclude}
    policy = policy_for(profile, rng)
    options = profile.validation_options()

    proposed = policy.propose(current)
    if proposed is not None:
        raw = [normalize(w) for w in proposed]
    elif profile.rule_breaks.allow_invalid_words:
        raw = pattern_candidates(current, profile.rule_breaks, locked, max_candidates)
    else:
        raw = lexicon_candidates(lexicon, current, locked, max_candidates)

    legal = [
        MoveCandidate(word=w, delta_kind=delta_kind(current, w))
        for w in raw
        if w not in excluded and validate_word(lexicon, current, w, options).is_valid
    ]
    log.debug("%s: %d candidates from %s, %d legal", profile.profile_id, len(raw), current, len(legal))

    if not legal:
        return BotDecision.passed("No legal move found", evaluated=len(raw))

    pool = legal
    if profile.avoid_key_letters and keys:
        avoiding = [c for c in pool if not introduces_key_letter(current, c.word, keys)]
        pool = avoiding or pool

    if policy.scores_candidates:
        pool = [replace(c, score=score_move(current, c.word, keys, locked)) for c in pool]
        banded = [c for c in pool if _within_band(c, profile)]
        pool = banded or pool

    chosen = policy.select(pool)
    if chosen is None:
        return BotDecision.passed("Policy declined to play", evaluated=len(raw), legal=len(legal))

    if chosen.score is None:
        chosen = replace(chosen, score=score_move(current, chosen.word, keys, locked))

    explanation = f"{policy.get_name()} chose {chosen.word} ({chosen.delta_kind.value}, {chosen.total} pts)"
    log.debug("%s: %s", profile.profile_id, explanation)
    return BotDecision(
        candidate=chosen,
        explanation=explanation,
        evaluated=len(raw),
        legal=len(legal),
    )
