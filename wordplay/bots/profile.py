"""
Bot Profiles - Configurable play styles.

Profiles adjust:
- Selection strategy (how a move is picked from the legal candidates)
- Rule breaks (which validation checks the bot may skip)
- Key-letter behaviour (avoid or chase the bonus letters)
- Score band (keep easy bots from playing their best move)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..engine_core.validator import RuleBreaks, ValidationOptions


class SelectionStrategy(Enum):
    """How a bot picks among its legal candidates."""
    MAXIMIZE_SCORE = "maximize_score"
    PREFER_KEY_CAPTURE = "prefer_key_capture"
    UNIFORM_RANDOM = "uniform_random"
    FIXED_PATTERN = "fixed_pattern"


@dataclass
class BotProfile:
    """
    A bot profile that defines play style.

    Profiles can be:
    - Predefined (trainer, easy, hard, boss, noob, leet)
    - Generated (random variations, see `create_random_profile`)
    """
    profile_id: str
    name: str
    description: str = ""

    strategy: SelectionStrategy = SelectionStrategy.MAXIMIZE_SCORE
    rule_breaks: RuleBreaks = field(default_factory=RuleBreaks)

    # Behavioral parameters
    avoid_key_letters: bool = False
    allow_slang: bool = True
    fixed_append: str = "S"  # FIXED_PATTERN only

    # Inclusive score band; candidates outside it are dropped unless that
    # would leave nothing to play
    min_score: int | None = None
    max_score: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def validation_options(self) -> ValidationOptions:
        """Rule profile the bot's candidates are validated under."""
        return ValidationOptions(
            is_bot=True,
            allow_slang=self.allow_slang,
            allow_profanity=False,
            check_length=True,
            rule_breaks=self.rule_breaks,
            check_letter_changes=True,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile_id": self.profile_id,
            "name": self.name,
            "description": self.description,
            "strategy": self.strategy.value,
            "avoid_key_letters": self.avoid_key_letters,
            "rule_breaks": {
                "allow_invalid_words": self.rule_breaks.allow_invalid_words,
                "allow_numerals": self.rule_breaks.allow_numerals,
                "allow_symbols": self.rule_breaks.allow_symbols,
                "custom_pattern": self.rule_breaks.custom_pattern,
            },
        }


# ============================================================================
# Predefined Profiles
# ============================================================================

TRAINER = BotProfile(
    profile_id="trainer",
    name="Trainer Bot",
    description="Plays any legal move at random, ignores key letters",
    strategy=SelectionStrategy.UNIFORM_RANDOM,
)


EASY = BotProfile(
    profile_id="easy",
    name="Easy Bot",
    description="Plays small moves and never uses key letters",
    strategy=SelectionStrategy.MAXIMIZE_SCORE,
    avoid_key_letters=True,
    max_score=4,
)


MEDIUM = BotProfile(
    profile_id="medium",
    name="Medium Bot",
    description="Plays up to five-point moves, can use key letters",
    strategy=SelectionStrategy.MAXIMIZE_SCORE,
    max_score=5,
)


HARD = BotProfile(
    profile_id="hard",
    name="Hard Bot",
    description="Always plays the highest-scoring legal move",
    strategy=SelectionStrategy.MAXIMIZE_SCORE,
)


BOSS = BotProfile(
    profile_id="boss",
    name="Boss Bot",
    description="Grabs key letters whenever it can, then maximizes score",
    strategy=SelectionStrategy.PREFER_KEY_CAPTURE,
)


NOOB = BotProfile(
    profile_id="noob",
    name="Noob Bot",
    description='Only adds "S" to the end of words, even if invalid',
    strategy=SelectionStrategy.FIXED_PATTERN,
    rule_breaks=RuleBreaks(allow_invalid_words=True, custom_pattern=".*S$"),
    fixed_append="S",
)


LEET = BotProfile(
    profile_id="leet",
    name="1337 Bot",
    description="Plays dictionary words only; leetspeak digits are for display, never played",
    strategy=SelectionStrategy.MAXIMIZE_SCORE,
    rule_breaks=RuleBreaks(allow_numerals=True, custom_pattern="[A-Z0-9]+"),
)


# All predefined profiles
PROFILES: dict[str, BotProfile] = {
    "trainer": TRAINER,
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
    "boss": BOSS,
    "noob": NOOB,
    "leet": LEET,
}

DEFAULT_PROFILE = "hard"


def get_profile(profile_id: str) -> BotProfile:
    """
    Look up a predefined profile by id (case-insensitive).

    Raises:
        ValueError: unknown profile id
    """
    profile = PROFILES.get(profile_id.strip().lower())
    if profile is None:
        raise ValueError(
            f"Unknown bot profile: {profile_id}. Available: {', '.join(PROFILES)}"
        )
    return profile


def create_random_profile(
    name: str = "Random Bot",
    seed: int | None = None,
) -> BotProfile:
    """
    Create a profile with a randomly chosen dictionary-bound strategy.

    Args:
        name: Name for the profile
        seed: Random seed for reproducibility
    """
    import random
    rng = random.Random(seed)

    strategy = rng.choice([
        SelectionStrategy.MAXIMIZE_SCORE,
        SelectionStrategy.PREFER_KEY_CAPTURE,
        SelectionStrategy.UNIFORM_RANDOM,
    ])
    avoid = strategy is not SelectionStrategy.PREFER_KEY_CAPTURE and rng.random() < 0.5

    return BotProfile(
        profile_id="random",
        name=name,
        description=f"Randomly generated ({strategy.value})",
        strategy=strategy,
        avoid_key_letters=avoid,
        metadata={"seed": seed},
    )
