"""
Pytest fixtures for WordPlay tests.
"""

import pytest

from ..lexicon import LexiconIndex, build_lexicon
from ..engine_core.state import TurnState
from ..session import GameLoop, Session, SessionManager


STANDARD_WORDS = [
    "CAT", "CATS", "ACT", "ACTS", "CAST", "SCAT",
    "DOG", "DOGS", "GOD",
    "WORD", "WORDS", "SWORD", "WORE", "LORD",
    "COAT", "TACO", "COT", "COST", "TEST",
]

SLANG_WORDS = ["BRUH", "YEET"]

DISALLOWED_WORDS = ["DARN", "DARNS"]


@pytest.fixture
def lexicon() -> LexiconIndex:
    """Small lexicon with all three word classes."""
    return build_lexicon(STANDARD_WORDS, SLANG_WORDS, DISALLOWED_WORDS)


@pytest.fixture
def scenario_lexicon() -> LexiconIndex:
    """The four-word lexicon used by the reference scenarios."""
    return build_lexicon(["CAT", "CATS", "ACT", "DOG"])


@pytest.fixture
def cat_state(lexicon: LexiconIndex) -> TurnState:
    """Turn state sitting on CAT with key letter S."""
    return TurnState(lexicon, start_word="CAT", key_letters={"S"})


@pytest.fixture
def manager(lexicon: LexiconIndex) -> SessionManager:
    return SessionManager(lexicon, max_turns=4)


@pytest.fixture
def session(manager: SessionManager) -> Session:
    """Human-first session against the hard bot, starting on CAT."""
    return manager.create_session(start_word="CAT", bot_profile="hard", seed=7)


@pytest.fixture
def started_loop(session: Session) -> GameLoop:
    """Started game loop with the key letter pinned to S."""
    loop = GameLoop(session)
    loop.start()
    session.turn_state.set_key_letters({"S"})
    return loop
