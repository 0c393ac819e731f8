"""
Tests for environment settings.
"""

import logging

import pytest

from ..config import Settings, configure_logging


ENV_VARS = [
    "WORDPLAY_ENV",
    "WORDPLAY_WORDLIST_DIR",
    "WORDPLAY_MAX_CANDIDATES",
    "WORDPLAY_MAX_TURNS",
    "WORDPLAY_LOG_LEVEL",
    "ALLOWED_ORIGINS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()
    assert settings.env == "development"
    assert settings.wordlist_dir is None
    assert settings.max_candidates == 500
    assert settings.max_turns == 10
    assert settings.log_level == "INFO"
    assert settings.allowed_origins == ["*"]
    assert not settings.is_production


def test_reads_environment(clean_env, tmp_path):
    clean_env.setenv("WORDPLAY_ENV", "production")
    clean_env.setenv("WORDPLAY_WORDLIST_DIR", str(tmp_path))
    clean_env.setenv("WORDPLAY_MAX_CANDIDATES", "50")
    clean_env.setenv("WORDPLAY_MAX_TURNS", "6")
    clean_env.setenv("WORDPLAY_LOG_LEVEL", "debug")
    clean_env.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")

    settings = Settings.from_env()

    assert settings.is_production
    assert settings.wordlist_dir == str(tmp_path)
    assert settings.max_candidates == 50
    assert settings.max_turns == 6
    assert settings.log_level == "DEBUG"
    assert settings.allowed_origins == ["https://a.example", "https://b.example"]


def test_blank_integer_uses_default(clean_env):
    clean_env.setenv("WORDPLAY_MAX_TURNS", " ")
    assert Settings.from_env().max_turns == 10


def test_bad_integer(clean_env):
    clean_env.setenv("WORDPLAY_MAX_CANDIDATES", "lots")
    with pytest.raises(ValueError, match="WORDPLAY_MAX_CANDIDATES"):
        Settings.from_env()


def test_configure_logging_accepts_names(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("debug")
    configure_logging("nonsense")
    configure_logging(logging.WARNING)

    assert [c["level"] for c in calls] == [logging.DEBUG, logging.INFO, logging.WARNING]


@pytest.mark.parametrize("raw", ["0", "-5"])
def test_caps_below_one_rejected(clean_env, raw):
    clean_env.setenv("WORDPLAY_MAX_CANDIDATES", raw)
    with pytest.raises(ValueError, match="at least 1"):
        Settings.from_env()
