"""
Configuration - Process-wide settings read from the environment.

Variables:
    WORDPLAY_ENV             development | production (default: development)
    WORDPLAY_WORDLIST_DIR    Directory holding standard.txt, slang.txt, disallowed.txt
    WORDPLAY_MAX_CANDIDATES  Bot enumeration cap (default: 500)
    WORDPLAY_MAX_TURNS       Turns per game (default: 10)
    WORDPLAY_LOG_LEVEL       Logging level name (default: INFO)
    ALLOWED_ORIGINS          Comma-separated CORS origins (default: *)
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field


def _int_env(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


@dataclass
class Settings:
    env: str = "development"
    wordlist_dir: str | None = None
    max_candidates: int = 500
    max_turns: int = 10
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @classmethod
    def from_env(cls) -> Settings:
        origins = os.getenv("ALLOWED_ORIGINS", "*").split(",")
        return cls(
            env=os.getenv("WORDPLAY_ENV", "development"),
            wordlist_dir=os.getenv("WORDPLAY_WORDLIST_DIR") or None,
            max_candidates=_int_env("WORDPLAY_MAX_CANDIDATES", 500),
            max_turns=_int_env("WORDPLAY_MAX_TURNS", 10),
            log_level=os.getenv("WORDPLAY_LOG_LEVEL", "INFO").upper(),
            allowed_origins=[o.strip() for o in origins if o.strip()],
        )


def configure_logging(level: str | int = "INFO") -> None:
    """Set up root logging for the CLI and the server."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
