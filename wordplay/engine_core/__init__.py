"""
Engine Core - Word validation, scoring and the turn state.

The engine is the runtime that:
1. Validates a candidate word against the previous one
2. Scores accepted moves, including key-letter bonuses
3. Holds the word under edit and the committed history
"""

from .scoring import ScoreResult, WordChange, analyze_change, score, score_move
from .validator import (
    MoveValidator,
    RuleBreaks,
    ValidationOptions,
    ValidationResult,
    validate_word,
)
from .state import CommitResult, CommittedTurn, EditResult, TurnState

__all__ = [
    "ScoreResult",
    "WordChange",
    "analyze_change",
    "score",
    "score_move",
    "MoveValidator",
    "RuleBreaks",
    "ValidationOptions",
    "ValidationResult",
    "validate_word",
    "CommitResult",
    "CommittedTurn",
    "EditResult",
    "TurnState",
]
