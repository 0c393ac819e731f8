"""Word list loading from disk, with a built-in minimal fallback."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from .index import LexiconIndex, build_lexicon

log = logging.getLogger("wordplay.lexicon")

# File names tried, in order, for each list inside a word-list directory.
STANDARD_FILES = ("standard.txt", "enable.txt", "enable.json", "words.txt", "dictionary.txt")
SLANG_FILES = ("slang.txt", "slang.json")
DISALLOWED_FILES = ("disallowed.txt", "disallowed.json", "profanity.txt", "profanity.json")

MINIMAL_STANDARD_WORDS = frozenset({
    "ACT", "ANT", "ARE", "ART", "ATE", "BAT", "BATS", "BEAT", "BEST", "BET",
    "CAR", "CART", "CARTS", "CAT", "CATS", "COAT", "COATS", "COT", "DOG",
    "DOGS", "EAT", "EATS", "GAME", "GAMES", "GOD", "HAT", "HATS", "HEAT",
    "LATE", "LOVE", "MATE", "MEAT", "MOVE", "NET", "NEST", "OAT", "OATS",
    "PAT", "PLAY", "RAT", "RATE", "RATS", "REST", "SAT", "SCAT", "SEAT",
    "SET", "STAR", "TAB", "TABS", "TACO", "TAR", "TARS", "TART", "TEA",
    "TEAM", "TEAS", "TEN", "TEST", "TOGA", "WORD", "WORDS", "WORE", "WORN",
    "WORST", "WRIT",
})

MINIMAL_SLANG_WORDS = frozenset({
    "BRUH", "YEET", "MEME", "NOOB", "EPIC", "VLOG", "BLOG", "LEET",
})


def read_word_file(path: str | os.PathLike[str]) -> list[str]:
    """
    Read one word list.

    Plain text files hold one word per line (blank lines and `#` comments
    skipped). JSON files hold either an array of strings or an array of
    objects with a `term` (or `word`) field, as slang dumps usually do.
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a JSON array of words")
        words: list[str] = []
        for entry in data:
            if isinstance(entry, str):
                words.append(entry)
            elif isinstance(entry, dict):
                term = entry.get("term") or entry.get("word")
                if isinstance(term, str):
                    words.append(term)
        return words

    words = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip()
            if word and not word.startswith("#"):
                words.append(word)
    return words


def _first_existing(directory: Path, names: tuple[str, ...]) -> Path | None:
    for name in names:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_lexicon(wordlist_dir: str | os.PathLike[str] | None = None) -> LexiconIndex:
    """
    Build a lexicon from the word lists in *wordlist_dir*.

    Falls back to the built-in minimal lists when the directory is missing
    or holds no standard list, so the engine always starts.
    """
    standard: list[str] = []
    slang: list[str] = []
    disallowed: list[str] = []

    if wordlist_dir:
        directory = Path(wordlist_dir).expanduser()
        standard_path = _first_existing(directory, STANDARD_FILES)
        if standard_path is not None:
            standard = read_word_file(standard_path)
            log.info("Loaded %s standard words from %s", f"{len(standard):,}", standard_path)
            slang_path = _first_existing(directory, SLANG_FILES)
            if slang_path is not None:
                slang = read_word_file(slang_path)
                log.info("Loaded %s slang words from %s", f"{len(slang):,}", slang_path)
            disallowed_path = _first_existing(directory, DISALLOWED_FILES)
            if disallowed_path is not None:
                disallowed = read_word_file(disallowed_path)
                log.info("Loaded %s disallowed words from %s", f"{len(disallowed):,}", disallowed_path)
        else:
            log.warning("No standard word list found in %s", directory)

    if not standard:
        log.warning("Using built-in minimal word list.")
        log.warning("Point WORDPLAY_WORDLIST_DIR at a directory holding standard.txt for full play.")
        standard = sorted(MINIMAL_STANDARD_WORDS)
        slang = sorted(MINIMAL_SLANG_WORDS)

    return build_lexicon(standard, slang, disallowed)
