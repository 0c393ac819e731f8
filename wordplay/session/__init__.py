"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created with a start word and a bot opponent
- Holds the turn state, scores and used words
- Processes human submissions and bot turns
- Destroyed when the game ends or is abandoned

The daily challenge is the solo variant: one player turns a seeded
start word into a target word under the same move rules.

Sessions are never persisted. The commit history is exposed so callers
can persist it themselves.
"""

from .manager import SessionManager, Session, GamePhase, PlayerSeat, TurnRecord
from .game_loop import GameLoop, TurnResult
from .challenge import ChallengeEngine, ChallengeState, ChallengeSubmission

__all__ = [
    "SessionManager",
    "Session",
    "GamePhase",
    "PlayerSeat",
    "TurnRecord",
    "GameLoop",
    "TurnResult",
    "ChallengeEngine",
    "ChallengeState",
    "ChallengeSubmission",
]
