"""
Tests for the turn state.

Tests:
- Index edits and locked letters
- Atomic commits and history
- Commit listeners
"""

import random

from ..engine_core.state import TurnState
from ..errors import FailureKind


class TestEdits:
    """insert / remove / move."""

    def test_locked_letter_scenario(self, lexicon):
        state = TurnState(lexicon, start_word="WORD", locked_letters={"W"})

        result = state.remove_letter(0)
        assert not result.success
        assert result.failure_reason is FailureKind.LETTER_LOCKED
        assert state.current_word == "WORD"

        result = state.remove_letter(3)
        assert result.success
        assert state.current_word == "WOR"

    def test_insert(self, cat_state):
        result = cat_state.insert_letter(3, "s")
        assert result.success
        assert result.word == "CATS"

    def test_insert_rejects_bad_input(self, cat_state):
        assert cat_state.insert_letter(9, "S").failure_reason is FailureKind.MALFORMED_INPUT
        assert cat_state.insert_letter(0, "1").failure_reason is FailureKind.MALFORMED_INPUT
        assert cat_state.insert_letter(0, "AB").failure_reason is FailureKind.MALFORMED_INPUT
        assert cat_state.current_word == "CAT"

    def test_remove_out_of_range(self, cat_state):
        result = cat_state.remove_letter(3)
        assert result.failure_reason is FailureKind.MALFORMED_INPUT
        assert result.error is not None

    def test_move(self, cat_state):
        assert cat_state.move_letter(0, 2).word == "ATC"
        assert cat_state.move_letter(2, 0).word == "CAT"

    def test_move_to_same_index_is_noop(self, cat_state):
        result = cat_state.move_letter(1, 1)
        assert result.success
        assert result.word == "CAT"

    def test_move_in_single_letter_word(self, lexicon):
        state = TurnState(lexicon, start_word="A")
        result = state.move_letter(0, 5)
        assert result.success
        assert result.word == "A"

    def test_move_out_of_range(self, cat_state):
        assert cat_state.move_letter(0, 3).failure_reason is FailureKind.MALFORMED_INPUT

    def test_revert(self, cat_state):
        cat_state.insert_letter(0, "S")
        assert cat_state.is_dirty
        cat_state.revert()
        assert cat_state.current_word == "CAT"
        assert not cat_state.is_dirty

    def test_set_letters_replace_sets(self, cat_state):
        cat_state.set_key_letters(["x", "y"])
        cat_state.set_locked_letters("c")
        assert cat_state.key_letters == {"X", "Y"}
        assert cat_state.locked_letters == {"C"}

    def test_locked_letters_never_removed(self, lexicon):
        rng = random.Random(5)
        state = TurnState(lexicon, start_word="SWORDSWORD", locked_letters={"W", "D"})
        for _ in range(50):
            if not state.current_word:
                break
            position = rng.randrange(len(state.current_word))
            before = state.current_word
            result = state.remove_letter(position)
            if before[position] in state.locked_letters:
                assert result.failure_reason is FailureKind.LETTER_LOCKED
                assert state.current_word == before
            else:
                assert result.success
        assert state.current_word.count("W") == 2
        assert state.current_word.count("D") == 2


class TestCommit:
    """Validation, scoring and history."""

    def test_commit_appends_history(self, cat_state):
        cat_state.insert_letter(3, "S")
        result = cat_state.commit("p1")

        assert result.success
        turn = result.turn
        assert turn.turn_number == 1
        assert turn.actor_id == "p1"
        assert turn.previous_word == "CAT"
        assert turn.new_word == "CATS"
        assert turn.score_earned == 5
        assert turn.key_letter_consumed == "S"
        assert cat_state.committed_word == "CATS"
        assert len(cat_state.history) == 1

    def test_failed_commit_changes_nothing(self, cat_state):
        cat_state.set_current_word("CAB")
        result = cat_state.commit("p1")

        assert not result.success
        assert result.failure_reason is FailureKind.UNKNOWN_WORD
        assert result.validation.normalized_word == "CAB"
        assert cat_state.history == []
        assert cat_state.committed_word == "CAT"
        assert cat_state.current_word == "CAB"
        assert cat_state.key_letters == {"S"}

    def test_round_trip_edits_are_noop(self, cat_state):
        cat_state.move_letter(0, 2)
        cat_state.move_letter(2, 0)
        result = cat_state.commit("p1")
        assert result.failure_reason is FailureKind.NO_OP_MOVE

    def test_commit_keeps_key_and_locked_letters(self, cat_state):
        cat_state.set_locked_letters({"C"})
        cat_state.set_current_word("CATS")
        cat_state.commit("p1")
        assert cat_state.key_letters == {"S"}
        assert cat_state.locked_letters == {"C"}

    def test_first_commit_from_empty_start(self, lexicon):
        state = TurnState(lexicon)
        state.set_current_word("dog")
        result = state.commit("p1")
        assert result.success
        assert result.turn.previous_word == ""
        assert result.turn.score_earned == 3

    def test_commit_options_passed_through(self, cat_state):
        from ..engine_core.validator import ValidationOptions

        cat_state.set_current_word("DOG")
        result = cat_state.commit("p1", ValidationOptions(check_letter_changes=True))
        assert result.failure_reason is FailureKind.TOO_MANY_CHANGES

    def test_turn_numbers_increase(self, cat_state):
        cat_state.set_current_word("CATS")
        cat_state.commit("p1")
        cat_state.set_current_word("CAST")
        result = cat_state.commit("p2")
        assert result.turn.turn_number == 2
        assert result.turn.previous_word == "CATS"

    def test_history_record_serializes(self, cat_state):
        cat_state.set_current_word("CATS")
        record = cat_state.commit("p1").turn.to_dict()
        assert record["previous_word"] == "CAT"
        assert record["new_word"] == "CATS"
        assert record["score_earned"] == 5
        assert "timestamp" in record


class TestListeners:
    """Commit listeners."""

    def test_listeners_receive_turns(self, lexicon):
        seen = []
        state = TurnState(lexicon, start_word="CAT", listeners=[seen.append])
        state.add_listener(lambda turn: seen.append(turn.new_word))

        state.set_current_word("CATS")
        state.commit("p1")

        assert len(seen) == 2
        assert seen[0].new_word == "CATS"
        assert seen[1] == "CATS"

    def test_listeners_not_called_on_failure(self, lexicon):
        seen = []
        state = TurnState(lexicon, start_word="CAT", listeners=[seen.append])
        state.set_current_word("CAB")
        state.commit("p1")
        assert seen == []

    def test_raising_listener_does_not_break_commit(self, lexicon, caplog):
        seen = []

        def broken(turn):
            raise RuntimeError("store offline")

        state = TurnState(lexicon, start_word="CAT", listeners=[broken, seen.append])
        state.set_current_word("CATS")
        result = state.commit("p1")

        assert result.success
        assert result.turn.new_word == "CATS"
        assert state.committed_word == "CATS"
        assert len(state.history) == 1
        assert [turn.new_word for turn in seen] == ["CATS"]
        assert "Commit listener" in caplog.text
