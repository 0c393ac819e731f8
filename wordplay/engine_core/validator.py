"""
Move Validator - Decides whether a word is a legal successor.

Checks run in a fixed order and stop at the first failure:
1. Normalize (strip + uppercase); empty input is malformed
2. Character class (A-Z only, unless a bot rule break widens it)
3. Length delta of at most one letter, and no unchanged word
4. Minimum length of three letters
5. Dictionary membership (standard, plus slang when allowed)
6. Profanity policy

A rule break only ever applies to bots (`is_bot=True`); for humans the
flags are ignored. Validation has no side effects.
"""

from __future__ import annotations
import re
import string
from dataclasses import dataclass, field

from ..errors import FailureKind, FAILURE_MESSAGES
from ..lexicon.index import MIN_WORD_LENGTH, LexiconIndex, WordClass
from .scoring import analyze_change

_LETTERS = "A-Z"
_DIGITS = "0-9"
_SYMBOLS = re.escape(string.punctuation)


@dataclass(frozen=True)
class RuleBreaks:
    """
    Validation relaxations granted to automated players.

    `custom_pattern`, when set, replaces the character-class regex
    entirely and is matched against the whole uppercased word.
    """
    allow_invalid_words: bool = False
    allow_numerals: bool = False
    allow_symbols: bool = False
    custom_pattern: str | None = None

    @property
    def any(self) -> bool:
        return (
            self.allow_invalid_words
            or self.allow_numerals
            or self.allow_symbols
            or self.custom_pattern is not None
        )


NO_RULE_BREAKS = RuleBreaks()


@dataclass(frozen=True)
class ValidationOptions:
    """Rule profile for one validation call."""
    is_bot: bool = False
    allow_slang: bool = True
    allow_profanity: bool = False
    check_length: bool = True
    rule_breaks: RuleBreaks = field(default_factory=RuleBreaks)

    # At most one added and one removed letter per move
    check_letter_changes: bool = False


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a candidate word."""
    is_valid: bool
    normalized_word: str
    failure_reason: FailureKind | None = None
    censored: str | None = None
    length_delta: int | None = None

    @property
    def message(self) -> str:
        if self.failure_reason is None:
            return ""
        return FAILURE_MESSAGES[self.failure_reason]

    @classmethod
    def failure(
        cls,
        word: str,
        reason: FailureKind,
        length_delta: int | None = None,
    ) -> ValidationResult:
        return cls(
            is_valid=False,
            normalized_word=word,
            failure_reason=reason,
            length_delta=length_delta,
        )


def character_pattern(options: ValidationOptions) -> re.Pattern[str]:
    """The regex a normalized word must fully match under *options*."""
    breaks = options.rule_breaks if options.is_bot else NO_RULE_BREAKS
    if breaks.custom_pattern is not None:
        return re.compile(breaks.custom_pattern)
    allowed = _LETTERS
    if breaks.allow_numerals:
        allowed += _DIGITS
    if breaks.allow_symbols:
        allowed += _SYMBOLS
    return re.compile(f"[{allowed}]+")


def validate_word(
    lexicon: LexiconIndex,
    previous_word: str | None,
    candidate: str | None,
    options: ValidationOptions | None = None,
) -> ValidationResult:
    """
    Validate *candidate* as the move after *previous_word*.

    *previous_word* may be empty (start of game), in which case the length
    and no-op checks are skipped.
    """
    options = options or ValidationOptions()
    breaks = options.rule_breaks if options.is_bot else NO_RULE_BREAKS

    word = (candidate or "").strip().upper()
    previous = (previous_word or "").strip().upper()

    if not word:
        return ValidationResult.failure(word, FailureKind.MALFORMED_INPUT)

    if not character_pattern(options).fullmatch(word):
        return ValidationResult.failure(word, FailureKind.MALFORMED_INPUT)

    delta = None
    if previous:
        delta = len(word) - len(previous)
    if options.check_length and previous:
        if abs(delta) > 1:
            return ValidationResult.failure(word, FailureKind.LENGTH_VIOLATION, delta)
        if word == previous:
            return ValidationResult.failure(word, FailureKind.NO_OP_MOVE, delta)
        if options.check_letter_changes:
            change = analyze_change(previous, word)
            if len(change.added) > 1 or len(change.removed) > 1:
                return ValidationResult.failure(word, FailureKind.TOO_MANY_CHANGES, delta)

    if len(word) < MIN_WORD_LENGTH:
        return ValidationResult.failure(word, FailureKind.LENGTH_VIOLATION, delta)

    disallowed = lexicon.is_disallowed(word)
    if not breaks.allow_invalid_words:
        permitted = {WordClass.STANDARD}
        if options.allow_slang:
            permitted.add(WordClass.SLANG)
        if not (disallowed or lexicon.contains(word, permitted)):
            return ValidationResult.failure(word, FailureKind.UNKNOWN_WORD, delta)

    if disallowed and not options.allow_profanity:
        return ValidationResult.failure(word, FailureKind.PROFANITY_BLOCKED, delta)

    return ValidationResult(
        is_valid=True,
        normalized_word=word,
        censored=lexicon.censor(word) if disallowed else None,
        length_delta=delta,
    )


@dataclass
class MoveValidator:
    """
    Validator bound to a lexicon and a default rule profile.

    Usage:
        validator = MoveValidator(lexicon)
        result = validator.validate("CAT", "CATS")
    """
    lexicon: LexiconIndex
    options: ValidationOptions = field(default_factory=ValidationOptions)

    def validate(
        self,
        previous_word: str | None,
        candidate: str | None,
        options: ValidationOptions | None = None,
    ) -> ValidationResult:
        return validate_word(self.lexicon, previous_word, candidate, options or self.options)

    def is_valid(self, previous_word: str | None, candidate: str | None) -> bool:
        return self.validate(previous_word, candidate).is_valid
