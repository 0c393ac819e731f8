"""
Lexicon Index - Immutable word lookup built once per process.

The index answers the three questions the rest of the engine asks:
- Is this word known, and under which classification?
- Which playable words have exactly N letters?
- Which playable words are anagrams of this one?

Construction is the only mutation point. After `build_lexicon` returns, the
buckets are frozen (tuples and frozensets behind read-only mappings), so a
single index can be shared by every game session in the process.
"""

from __future__ import annotations
import logging
import random
import re
from collections.abc import Iterable, Sequence
from enum import Enum
from types import MappingProxyType

from ..errors import LexiconEmptyError

log = logging.getLogger("wordplay.lexicon")

MIN_WORD_LENGTH = 3

# Shape of an enumerable word; anything else is queryable only.
WORD_PATTERN = re.compile(r"[A-Z]+")

# Mask characters for disallowed words shown with the vanity filter on.
CENSOR_SYMBOLS = "!@#$%^&*"


class WordClass(Enum):
    """Classification a word can carry in the lexicon."""
    STANDARD = "standard"
    SLANG = "slang"
    DISALLOWED = "disallowed"


PLAYABLE_CLASSES = frozenset({WordClass.STANDARD, WordClass.SLANG})


def normalize(word: str) -> str:
    """Canonical form: stripped and uppercased."""
    return word.strip().upper()


def anagram_key(word: str) -> str:
    """Sorted-letter signature shared by all anagrams of *word*."""
    return "".join(sorted(normalize(word)))


class LexiconIndex:
    """
    Read-only word index.

    Usage:
        lexicon = build_lexicon(standard_words, slang_words, disallowed_words)
        lexicon.contains("cats", {WordClass.STANDARD})
        lexicon.words_of_length(4)
        lexicon.anagrams_of("CAT")       # ("ACT",)
    """

    def __init__(
        self,
        classes: dict[WordClass, frozenset[str]],
        by_length: dict[int, tuple[str, ...]],
        by_anagram: dict[str, tuple[str, ...]],
    ):
        self._classes = MappingProxyType(dict(classes))
        self._by_length = MappingProxyType(dict(by_length))
        self._by_anagram = MappingProxyType(dict(by_anagram))
        self._playable = frozenset().union(
            *(self._classes.get(c, frozenset()) for c in PLAYABLE_CLASSES)
        )

    # =========================================================================
    # Membership
    # =========================================================================

    def contains(self, word: str, classes: Iterable[WordClass] = PLAYABLE_CLASSES) -> bool:
        """True if the uppercased word is in any of the requested classes."""
        upper = normalize(word)
        return any(upper in self._classes.get(c, frozenset()) for c in classes)

    def classify(self, word: str) -> frozenset[WordClass]:
        """All classifications the word carries (possibly none)."""
        upper = normalize(word)
        return frozenset(c for c, words in self._classes.items() if upper in words)

    def is_playable(self, word: str) -> bool:
        return normalize(word) in self._playable

    def is_disallowed(self, word: str) -> bool:
        return self.contains(word, (WordClass.DISALLOWED,))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_playable(word)

    def __len__(self) -> int:
        return len(self._playable)

    @property
    def word_count(self) -> int:
        """Number of playable (standard + slang) words."""
        return len(self._playable)

    # =========================================================================
    # Enumeration
    # =========================================================================

    def words_of_length(self, n: int) -> Sequence[str]:
        """All playable words with exactly *n* letters, sorted."""
        if n < MIN_WORD_LENGTH:
            return ()
        return self._by_length.get(n, ())

    def lengths(self) -> list[int]:
        """Word lengths present in the index, ascending."""
        return sorted(self._by_length)

    def anagrams_of(self, word: str) -> Sequence[str]:
        """Playable words with the same letters as *word*, excluding it."""
        upper = normalize(word)
        bucket = self._by_anagram.get(anagram_key(upper), ())
        return tuple(w for w in bucket if w != upper)

    def anagram_bucket(self, key: str) -> Sequence[str]:
        """Every playable word whose AnagramKey is *key*."""
        return self._by_anagram.get(key, ())

    def random_word_of_length(
        self,
        min_length: int,
        max_length: int | None = None,
        rng: random.Random | None = None,
    ) -> str:
        """
        Sample uniformly from playable words with length in [min, max].

        If that band is empty, the nearest non-empty length is used instead
        (ties go to the shorter length).

        Raises:
            LexiconEmptyError: the index holds no playable words at all.
        """
        rng = rng or random.Random()
        if max_length is None:
            max_length = min_length
        if min_length > max_length:
            min_length, max_length = max_length, min_length

        pool: list[str] = []
        for n in range(min_length, max_length + 1):
            pool.extend(self.words_of_length(n))
        if pool:
            return rng.choice(pool)

        lengths = [n for n in self.lengths() if self.words_of_length(n)]
        if not lengths:
            raise LexiconEmptyError("Random word requested from an empty lexicon")

        def distance(n: int) -> tuple[int, int]:
            return (min(abs(n - min_length), abs(n - max_length)), n)

        nearest = min(lengths, key=distance)
        log.debug(
            "No words of length %d-%d, falling back to length %d",
            min_length, max_length, nearest,
        )
        return rng.choice(list(self.words_of_length(nearest)))

    # =========================================================================
    # Display
    # =========================================================================

    def censor(self, word: str) -> str:
        """Symbol-masked form of a disallowed word; other words unchanged."""
        upper = normalize(word)
        if not self.is_disallowed(upper):
            return upper
        return "".join(CENSOR_SYMBOLS[i % len(CENSOR_SYMBOLS)] for i in range(len(upper)))

    def __repr__(self) -> str:
        sizes = ", ".join(f"{c.value}={len(w)}" for c, w in self._classes.items())
        return f"LexiconIndex({sizes})"


def _clean(words: Iterable[str]) -> frozenset[str]:
    cleaned = set()
    for word in words:
        if not isinstance(word, str):
            continue
        upper = normalize(word)
        if upper:
            cleaned.add(upper)
    return frozenset(cleaned)


def build_lexicon(
    standard_words: Iterable[str],
    slang_words: Iterable[str] = (),
    disallowed_words: Iterable[str] = (),
) -> LexiconIndex:
    """
    Build the frozen index from plain word lists (case-insensitive).

    Words shorter than three letters, and entries that are not plain A-Z
    (multi-word slang, digits), stay queryable through `contains` but are
    never enumerated, since no move can produce them.
    """
    classes = {
        WordClass.STANDARD: _clean(standard_words),
        WordClass.SLANG: _clean(slang_words),
        WordClass.DISALLOWED: _clean(disallowed_words),
    }
    playable = classes[WordClass.STANDARD] | classes[WordClass.SLANG]

    length_buckets: dict[int, list[str]] = {}
    anagram_buckets: dict[str, list[str]] = {}
    for word in playable:
        if len(word) < MIN_WORD_LENGTH or not WORD_PATTERN.fullmatch(word):
            continue
        length_buckets.setdefault(len(word), []).append(word)
        anagram_buckets.setdefault(anagram_key(word), []).append(word)

    index = LexiconIndex(
        classes=classes,
        by_length={n: tuple(sorted(ws)) for n, ws in length_buckets.items()},
        by_anagram={k: tuple(sorted(ws)) for k, ws in anagram_buckets.items()},
    )
    log.info(
        "Built lexicon: %s standard, %s slang, %s disallowed",
        f"{len(classes[WordClass.STANDARD]):,}",
        f"{len(classes[WordClass.SLANG]):,}",
        f"{len(classes[WordClass.DISALLOWED]):,}",
    )
    return index
