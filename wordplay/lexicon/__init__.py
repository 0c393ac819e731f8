"""
Lexicon module - Word lists and the frozen lookup index.

Provides:
- LexiconIndex: membership, length buckets, anagram buckets
- build_lexicon: one-shot construction from plain word lists
- load_lexicon: construction from word-list files on disk
"""

from .index import (
    LexiconIndex,
    WordClass,
    PLAYABLE_CLASSES,
    MIN_WORD_LENGTH,
    anagram_key,
    build_lexicon,
    normalize,
)
from .loader import load_lexicon, read_word_file

__all__ = [
    "LexiconIndex",
    "WordClass",
    "PLAYABLE_CLASSES",
    "MIN_WORD_LENGTH",
    "anagram_key",
    "build_lexicon",
    "normalize",
    "load_lexicon",
    "read_word_file",
]
