"""
Scoring - Point value of a committed move.

Rules:
- Base score is the length of the new word.
- +1 for every key-letter instance the move newly introduces (a key letter
  already present at that count in the previous word earns nothing).
- At most one key letter is reported as consumed per turn: the
  alphabetically first one that earned a bonus.

Scores are never negative, so a rearrangement still earns len(new_word).
"""

from __future__ import annotations
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class WordChange:
    """What changed between two words, letter-multiset-wise."""
    added: tuple[str, ...]
    removed: tuple[str, ...]
    reordered: bool

    @property
    def is_rearrangement(self) -> bool:
        return not self.added and not self.removed and self.reordered


@dataclass(frozen=True)
class ScoreResult:
    """Score for one move plus the key letter it consumed."""
    total: int
    key_letter_consumed: str | None = None
    key_letters_introduced: tuple[str, ...] = ()
    breakdown: dict[str, int] = field(default_factory=dict)


def _letters(letters: Iterable[str]) -> set[str]:
    return {letter.strip().upper() for letter in letters if letter and letter.strip()}


def analyze_change(previous_word: str, new_word: str) -> WordChange:
    """
    Compare two words.

    `reordered` is true when the letters common to both words appear in a
    different relative order, so CAT -> CATS is not a reorder while
    CAT -> ACTS is.
    """
    prev = previous_word.strip().upper()
    new = new_word.strip().upper()
    prev_counts = Counter(prev)
    new_counts = Counter(new)

    added = tuple(sorted((new_counts - prev_counts).elements()))
    removed = tuple(sorted((prev_counts - new_counts).elements()))

    stayed = prev_counts & new_counts
    return WordChange(
        added=added,
        removed=removed,
        reordered=_stayed_sequence(prev, stayed) != _stayed_sequence(new, stayed),
    )


def _stayed_sequence(word: str, stayed: Counter) -> str:
    remaining = Counter(stayed)
    sequence = []
    for ch in word:
        if remaining[ch] > 0:
            sequence.append(ch)
            remaining[ch] -= 1
    return "".join(sequence)


def score_move(
    previous_word: str,
    new_word: str,
    key_letters: Iterable[str] = (),
    locked_letters_used: Iterable[str] = (),
) -> ScoreResult:
    """
    Score a move from *previous_word* to *new_word*.

    `locked_letters_used` does not affect the total; it is accepted so the
    call mirrors what the turn state knows at commit time.
    """
    prev = previous_word.strip().upper()
    new = new_word.strip().upper()
    keys = _letters(key_letters)

    prev_counts = Counter(prev)
    new_counts = Counter(new)

    introduced: list[str] = []
    for key in sorted(keys):
        introduced.extend([key] * max(0, new_counts[key] - prev_counts[key]))

    base = len(new)
    bonus = len(introduced)
    return ScoreResult(
        total=base + bonus,
        key_letter_consumed=introduced[0] if introduced else None,
        key_letters_introduced=tuple(introduced),
        breakdown={"base": base, "key_bonus": bonus},
    )


def score(
    previous_word: str,
    new_word: str,
    key_letters: Iterable[str] = (),
    locked_letters_used: Iterable[str] = (),
) -> int:
    """Total points only."""
    return score_move(previous_word, new_word, key_letters, locked_letters_used).total
