"""
Bots module - Automated opponents.

Provides:
- generate_bot_move: candidate enumeration, filtering and selection
- SelectionPolicy: Interface for picking among legal candidates
- BotProfile: Configurable play styles
"""

from .profile import (
    BotProfile,
    SelectionStrategy,
    PROFILES,
    DEFAULT_PROFILE,
    get_profile,
    create_random_profile,
)
from .policy import (
    SelectionPolicy,
    MaximizeScorePolicy,
    PreferKeyCapturePolicy,
    RandomPolicy,
    FixedPatternPolicy,
    policy_for,
)
from .generator import (
    BotDecision,
    DeltaKind,
    MoveCandidate,
    DEFAULT_MAX_CANDIDATES,
    generate_bot_move,
    lexicon_candidates,
    pattern_candidates,
)

__all__ = [
    "BotProfile",
    "SelectionStrategy",
    "PROFILES",
    "DEFAULT_PROFILE",
    "get_profile",
    "create_random_profile",
    "SelectionPolicy",
    "MaximizeScorePolicy",
    "PreferKeyCapturePolicy",
    "RandomPolicy",
    "FixedPatternPolicy",
    "policy_for",
    "BotDecision",
    "DeltaKind",
    "MoveCandidate",
    "DEFAULT_MAX_CANDIDATES",
    "generate_bot_move",
    "lexicon_candidates",
    "pattern_candidates",
]
