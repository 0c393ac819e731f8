"""
Tests for move scoring.
"""

from ..engine_core.scoring import analyze_change, score, score_move


class TestScore:
    """Base score and key-letter bonus."""

    def test_base_is_length(self):
        assert score("CAT", "CATS") == 4
        assert score("CATS", "CAT") == 3

    def test_key_letter_bonus(self):
        result = score_move("CAT", "CATS", {"S"})
        assert result.total == 5
        assert result.key_letter_consumed == "S"
        assert result.breakdown == {"base": 4, "key_bonus": 1}

    def test_rearrangement_earns_length(self):
        assert score("CAT", "ACT", {"S"}) == 3

    def test_key_letter_already_present_earns_nothing(self):
        result = score_move("CATS", "CAST", {"S"})
        assert result.total == 4
        assert result.key_letter_consumed is None

    def test_each_new_instance_counts(self):
        result = score_move("CAT", "SCATS", {"S"})
        assert result.total == 7
        assert result.key_letters_introduced == ("S", "S")

    def test_consumed_letter_is_alphabetically_first(self):
        result = score_move("CAT", "COATS", {"S", "O"})
        assert result.total == 7
        assert result.key_letter_consumed == "O"
        assert result.key_letters_introduced == ("O", "S")

    def test_keys_are_case_insensitive(self):
        assert score("cat", "cats", ["s"]) == 5

    def test_locked_letters_do_not_change_total(self):
        assert score("CAT", "CATS", {"S"}, {"C"}) == score("CAT", "CATS", {"S"})

    def test_lower_bound(self):
        pairs = [("CAT", "CATS"), ("CATS", "CAT"), ("", "DOG"), ("WORD", "SWORD"), ("DOG", "GOD")]
        for keys in [set(), {"S"}, {"D", "W"}, {"Z"}]:
            for previous, new in pairs:
                result = score_move(previous, new, keys)
                assert result.total >= len(new)
                if not result.key_letters_introduced:
                    assert result.total == len(new)


class TestAnalyzeChange:
    """Letter-multiset comparison."""

    def test_insert(self):
        change = analyze_change("CAT", "CATS")
        assert change.added == ("S",)
        assert change.removed == ()
        assert not change.reordered

    def test_rearrangement(self):
        change = analyze_change("CAT", "ACT")
        assert change.is_rearrangement

    def test_substitution(self):
        change = analyze_change("cat", "cot")
        assert change.added == ("O",)
        assert change.removed == ("A",)
        assert not change.is_rearrangement
