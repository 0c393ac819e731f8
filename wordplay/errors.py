"""
Failure kinds - The typed outcomes the engine reports instead of raising.

Every rejected move, edit or request comes back as a result object that
carries one of these kinds. Two things raise instead: a lexicon with nothing
playable in it, because `random_word_of_length` has no result object to
carry it, and a session start word that could never be played on.
"""

from __future__ import annotations
from enum import Enum


class FailureKind(Enum):
    """Why an engine call did not succeed."""
    # Word validation
    MALFORMED_INPUT = "MalformedInput"
    LENGTH_VIOLATION = "LengthViolation"
    NO_OP_MOVE = "NoOpMove"
    UNKNOWN_WORD = "UnknownWord"
    PROFANITY_BLOCKED = "ProfanityBlocked"
    TOO_MANY_CHANGES = "TooManyChanges"

    # Turn state edits
    LETTER_LOCKED = "LetterLocked"

    # Lexicon
    LEXICON_EMPTY = "LexiconEmpty"

    # Bots (a legitimate outcome, not an error)
    BOT_PASS = "BotPass"

    # Session orchestration
    ALREADY_PLAYED = "AlreadyPlayed"
    NOT_YOUR_TURN = "NotYourTurn"
    GAME_NOT_ACTIVE = "GameNotActive"


# Short texts the presentation layer can show as-is.
FAILURE_MESSAGES: dict[FailureKind, str] = {
    FailureKind.MALFORMED_INPUT: "only letters allowed",
    FailureKind.LENGTH_VIOLATION: "illegal length",
    FailureKind.NO_OP_MOVE: "word unchanged",
    FailureKind.UNKNOWN_WORD: "not a word",
    FailureKind.PROFANITY_BLOCKED: "word not allowed",
    FailureKind.TOO_MANY_CHANGES: "one add and one remove per turn",
    FailureKind.LETTER_LOCKED: "letter is locked",
    FailureKind.LEXICON_EMPTY: "no words loaded",
    FailureKind.BOT_PASS: "pass",
    FailureKind.ALREADY_PLAYED: "already played",
    FailureKind.NOT_YOUR_TURN: "not your turn",
    FailureKind.GAME_NOT_ACTIVE: "game is not in progress",
}


class WordplayError(Exception):
    """Base class for the few failures the engine raises."""
    kind: FailureKind = FailureKind.MALFORMED_INPUT

    def __init__(self, message: str | None = None):
        super().__init__(message or FAILURE_MESSAGES[self.kind])


class LexiconEmptyError(WordplayError):
    """Random word requested from an index with no playable words."""
    kind = FailureKind.LEXICON_EMPTY


class InvalidWordError(WordplayError, ValueError):
    """A start word that could never be played on: not letters only, or too short."""
    kind = FailureKind.MALFORMED_INPUT
