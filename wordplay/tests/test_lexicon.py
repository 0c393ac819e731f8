"""
Tests for the lexicon index and word-list loading.

Tests:
- Membership and classification
- Length and anagram buckets
- Random word sampling and its fallback
- Loading word lists from disk
"""

import json
import random

import pytest

from ..errors import FailureKind, LexiconEmptyError
from ..lexicon import (
    WordClass,
    anagram_key,
    build_lexicon,
    load_lexicon,
    normalize,
    read_word_file,
)


def all_playable(lexicon):
    return [w for n in lexicon.lengths() for w in lexicon.words_of_length(n)]


class TestMembership:
    """Tests for contains / classify."""

    def test_contains_is_case_insensitive(self, lexicon):
        assert lexicon.contains("cat")
        assert lexicon.contains(" Cats ")
        assert "dog" in lexicon

    def test_contains_respects_classes(self, lexicon):
        assert lexicon.contains("BRUH", {WordClass.SLANG})
        assert not lexicon.contains("BRUH", {WordClass.STANDARD})
        assert lexicon.contains("DARN", {WordClass.DISALLOWED})
        assert not lexicon.contains("DARN")

    def test_classify(self, lexicon):
        assert lexicon.classify("cat") == frozenset({WordClass.STANDARD})
        assert lexicon.classify("yeet") == frozenset({WordClass.SLANG})
        assert lexicon.classify("zebra") == frozenset()

    def test_word_count_excludes_disallowed(self, lexicon):
        assert lexicon.word_count == 21
        assert len(lexicon) == 21


class TestBuckets:
    """Tests for length and anagram enumeration."""

    def test_words_of_length_sorted(self, lexicon):
        assert lexicon.words_of_length(3) == ("ACT", "CAT", "COT", "DOG", "GOD")

    def test_words_of_length_short_or_missing(self, lexicon):
        assert lexicon.words_of_length(2) == ()
        assert lexicon.words_of_length(0) == ()
        assert lexicon.words_of_length(42) == ()

    def test_disallowed_words_not_enumerated(self, lexicon):
        assert "DARN" not in lexicon.words_of_length(4)
        assert lexicon.anagram_bucket(anagram_key("DARN")) == ()

    def test_anagrams_of_excludes_word_itself(self, scenario_lexicon):
        assert list(scenario_lexicon.anagrams_of("CAT")) == ["ACT"]
        assert list(scenario_lexicon.anagrams_of("act")) == ["CAT"]
        assert list(scenario_lexicon.anagrams_of("DOG")) == []

    def test_anagram_symmetry(self, lexicon):
        for a in all_playable(lexicon):
            for b in lexicon.anagrams_of(a):
                assert a in lexicon.anagrams_of(b)

    def test_short_words_are_queryable_not_enumerated(self):
        lexicon = build_lexicon(["AT", "CAT"])
        assert lexicon.contains("AT")
        assert lexicon.lengths() == [3]

    def test_non_letter_entries_are_not_enumerated(self):
        lexicon = build_lexicon(["CAT", "ICE CREAM", "B2B"], ["NO CAP"])

        assert lexicon.contains("ice cream")
        assert lexicon.contains("NO CAP", {WordClass.SLANG})
        assert lexicon.words_of_length(9) == ()
        assert lexicon.words_of_length(3) == ("CAT",)
        assert lexicon.lengths() == [3]
        assert lexicon.anagram_bucket(anagram_key("B2B")) == ()
        assert lexicon.random_word_of_length(6, 6, rng=random.Random(1)) == "CAT"

    def test_normalize_and_key(self):
        assert normalize("  cat ") == "CAT"
        assert anagram_key("tac") == "ACT"


class TestRandomWord:
    """Tests for random_word_of_length."""

    def test_sample_within_band(self, lexicon):
        rng = random.Random(3)
        for _ in range(20):
            word = lexicon.random_word_of_length(4, 4, rng=rng)
            assert len(word) == 4
            assert lexicon.is_playable(word)

    def test_seeded_sampling_is_reproducible(self, lexicon):
        first = lexicon.random_word_of_length(3, 5, rng=random.Random(11))
        second = lexicon.random_word_of_length(3, 5, rng=random.Random(11))
        assert first == second

    def test_falls_back_to_nearest_length(self, lexicon):
        word = lexicon.random_word_of_length(10, 12, rng=random.Random(0))
        assert word in {"WORDS", "SWORD"}

    def test_empty_lexicon_raises(self):
        lexicon = build_lexicon([], disallowed_words=["DARN"])
        with pytest.raises(LexiconEmptyError) as excinfo:
            lexicon.random_word_of_length(3, 5)
        assert excinfo.value.kind is FailureKind.LEXICON_EMPTY


class TestCensor:
    """Tests for the vanity filter mask."""

    def test_censor_disallowed(self, lexicon):
        assert lexicon.censor("darn") == "!@#$"

    def test_censor_leaves_clean_words(self, lexicon):
        assert lexicon.censor("cat") == "CAT"


class TestLoading:
    """Tests for word-list files."""

    def test_read_text_file(self, tmp_path):
        path = tmp_path / "standard.txt"
        path.write_text("# comment\ncat\n\n  dog  \n", encoding="utf-8")
        assert read_word_file(path) == ["cat", "dog"]

    def test_read_json_strings(self, tmp_path):
        path = tmp_path / "slang.json"
        path.write_text(json.dumps(["bruh", "yeet"]), encoding="utf-8")
        assert read_word_file(path) == ["bruh", "yeet"]

    def test_read_json_objects(self, tmp_path):
        path = tmp_path / "slang.json"
        path.write_text(json.dumps([{"term": "bruh"}, {"word": "yeet"}, {"x": 1}]), encoding="utf-8")
        assert read_word_file(path) == ["bruh", "yeet"]

    def test_read_json_rejects_non_array(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"cat": 1}), encoding="utf-8")
        with pytest.raises(ValueError):
            read_word_file(path)

    def test_load_directory(self, tmp_path):
        (tmp_path / "standard.txt").write_text("cat\ncats\nact\n", encoding="utf-8")
        (tmp_path / "slang.txt").write_text("bruh\n", encoding="utf-8")
        (tmp_path / "disallowed.txt").write_text("darn\n", encoding="utf-8")

        lexicon = load_lexicon(tmp_path)

        assert lexicon.contains("CATS")
        assert lexicon.contains("BRUH", {WordClass.SLANG})
        assert lexicon.is_disallowed("DARN")
        assert not lexicon.contains("DOG")

    def test_missing_directory_falls_back(self, tmp_path):
        lexicon = load_lexicon(tmp_path / "nowhere")
        assert lexicon.contains("CAT")
        assert lexicon.word_count > 0

    def test_no_directory_falls_back(self):
        lexicon = load_lexicon(None)
        assert lexicon.contains("WORD")
