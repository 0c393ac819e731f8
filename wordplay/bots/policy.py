"""
Selection Policy - Interface for picking a bot's move.

A SelectionPolicy receives the legal candidates the generator found and
returns one of them, or None to pass. Policies never validate and never
touch the turn state.
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .profile import BotProfile, SelectionStrategy

if TYPE_CHECKING:
    from .generator import MoveCandidate


class SelectionPolicy(ABC):
    """
    Abstract base class for selection policies.

    `scores_candidates` tells the generator whether to score every legal
    candidate before calling `select`; a policy that does not look at
    scores skips that pass and only the chosen word gets scored.
    """

    scores_candidates: bool = True

    def propose(self, current_word: str) -> list[str] | None:
        """
        Words to consider instead of enumerating the lexicon.

        None (the default) means "enumerate normally".
        """
        return None

    @abstractmethod
    def select(self, candidates: list[MoveCandidate]) -> MoveCandidate | None:
        """
        Pick one candidate.

        Args:
            candidates: Legal, non-empty, in generation order

        Returns:
            The chosen candidate, or None to pass
        """
        pass

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__


def _best(candidates: list[MoveCandidate]) -> MoveCandidate:
    # Highest score; ties go to the shorter word, then alphabetical
    return min(candidates, key=lambda c: (-c.total, len(c.word), c.word))


class MaximizeScorePolicy(SelectionPolicy):
    """Highest-scoring candidate."""

    def select(self, candidates: list[MoveCandidate]) -> MoveCandidate | None:
        if not candidates:
            return None
        return _best(candidates)


class PreferKeyCapturePolicy(SelectionPolicy):
    """
    Key-letter moves first.

    Candidates are split into those that introduce a key letter and those
    that do not; the best of the first non-empty group wins.
    """

    def select(self, candidates: list[MoveCandidate]) -> MoveCandidate | None:
        capturing = [c for c in candidates if c.captures_key_letter]
        others = [c for c in candidates if not c.captures_key_letter]
        for group in (capturing, others):
            if group:
                return _best(group)
        return None


class RandomPolicy(SelectionPolicy):
    """
    Random policy - selects a legal candidate uniformly at random.

    Used for:
    - Trainer bots
    - Baseline comparison
    """

    scores_candidates = False

    def __init__(self, rng: random.Random | None = None, seed: int | None = None):
        self.rng = rng or random.Random(seed)

    def select(self, candidates: list[MoveCandidate]) -> MoveCandidate | None:
        if not candidates:
            return None
        return self.rng.choice(candidates)


class FixedPatternPolicy(SelectionPolicy):
    """
    Fixed-pattern policy - appends the same suffix every turn.

    Passes when the extended word is not legal for the bot.
    """

    def __init__(self, suffix: str = "S"):
        self.suffix = suffix.strip().upper()

    def propose(self, current_word: str) -> list[str] | None:
        return [current_word + self.suffix]

    def select(self, candidates: list[MoveCandidate]) -> MoveCandidate | None:
        return candidates[0] if candidates else None


def policy_for(profile: BotProfile, rng: random.Random | None = None) -> SelectionPolicy:
    """Build the policy a profile's strategy calls for."""
    strategy = profile.strategy
    if strategy is SelectionStrategy.MAXIMIZE_SCORE:
        return MaximizeScorePolicy()
    if strategy is SelectionStrategy.PREFER_KEY_CAPTURE:
        return PreferKeyCapturePolicy()
    if strategy is SelectionStrategy.UNIFORM_RANDOM:
        return RandomPolicy(rng=rng)
    if strategy is SelectionStrategy.FIXED_PATTERN:
        return FixedPatternPolicy(profile.fixed_append)
    raise ValueError(f"Unsupported selection strategy: {strategy}")
