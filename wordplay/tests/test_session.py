"""
Tests for sessions and the game loop.

Tests:
- Session creation and the manager's bookkeeping
- Turn order, key letters and locks
- Human edits, submits and passes
- Bot turns and game end
"""

import time

import pytest

from ..errors import FailureKind, InvalidWordError
from ..session import GameLoop, GamePhase, SessionManager


class TestManager:
    """SessionManager bookkeeping."""

    def test_create_session(self, manager):
        session = manager.create_session(start_word="cat", human_name="Ada")

        assert session.phase is GamePhase.WAITING
        assert session.current_word == "CAT"
        assert [seat.player_id for seat in session.players] == ["human", "bot_hard"]
        assert session.players[0].name == "Ada"
        assert session.players[1].is_bot
        assert session.max_turns == 4
        assert manager.get_session(session.session_id) is session

    def test_random_start_word(self, manager, lexicon):
        first = manager.create_session(seed=12)
        second = manager.create_session(seed=12)

        assert first.current_word == second.current_word
        assert 4 <= len(first.current_word) <= 5
        assert lexicon.is_playable(first.current_word)

    def test_bot_first(self, manager):
        session = manager.create_session(start_word="CAT", human_first=False)
        assert session.players[0].is_bot

    def test_random_profile(self, manager):
        session = manager.create_session(start_word="CAT", bot_profile="random", seed=1)
        assert session.players[1].player_id == "bot_random"

    def test_unknown_profile(self, manager):
        with pytest.raises(ValueError):
            manager.create_session(start_word="CAT", bot_profile="grandmaster")

    @pytest.mark.parametrize("word", ["C4T", "AB", "ICE CREAM", "c-a-t"])
    def test_unplayable_start_word(self, manager, word):
        with pytest.raises(ValueError):
            manager.create_session(start_word=word)
        assert manager.list_sessions() == []

    def test_unplayable_start_word_kind(self, manager):
        with pytest.raises(InvalidWordError) as excinfo:
            manager.create_session(start_word="C4T")
        assert excinfo.value.kind is FailureKind.MALFORMED_INPUT

    def test_max_turns_override(self, manager):
        session = manager.create_session(start_word="CAT", max_turns=2)
        assert session.max_turns == 2

    def test_end_session(self, manager, session):
        assert manager.end_session(session.session_id)
        assert session.phase is GamePhase.FINISHED
        assert manager.get_session(session.session_id) is None
        assert not manager.end_session(session.session_id)

    def test_list_sessions(self, manager):
        active = manager.create_session(start_word="CAT")
        finished = manager.create_session(start_word="DOG")
        finished.phase = GamePhase.FINISHED

        assert len(manager.list_sessions()) == 2
        assert manager.list_active_sessions() == [active.session_id]

    def test_cleanup_stale_sessions(self, manager):
        old_active = manager.create_session(start_word="CAT")
        old_finished = manager.create_session(start_word="DOG")
        recent_finished = manager.create_session(start_word="WORD")
        old_active.created_at = time.time() - 7200
        old_finished.created_at = time.time() - 7200
        old_finished.phase = GamePhase.FINISHED
        recent_finished.phase = GamePhase.FINISHED

        assert manager.cleanup_stale_sessions(max_age_seconds=3600) == 1
        assert manager.get_session(old_finished.session_id) is None
        assert manager.get_session(old_active.session_id) is old_active
        assert manager.get_session(recent_finished.session_id) is recent_finished


class TestLifecycle:
    """Start and phase checks."""

    def test_start(self, session):
        loop = GameLoop(session)
        result = loop.start()

        assert result.success
        assert session.phase is GamePhase.PLAYING
        assert "CAT" in session.used_words
        assert len(session.turn_state.key_letters) == 1
        assert not session.turn_state.key_letters & set("CAT")

    def test_start_twice(self, started_loop):
        result = started_loop.start()
        assert not result.success
        assert result.failure_reason is FailureKind.GAME_NOT_ACTIVE

    def test_submit_before_start(self, session):
        result = GameLoop(session).submit("CATS")
        assert result.failure_reason is FailureKind.GAME_NOT_ACTIVE

    def test_seeded_key_letters_reproducible(self, manager):
        first = manager.create_session(start_word="CAT", seed=99)
        second = manager.create_session(start_word="CAT", seed=99)
        GameLoop(first).start()
        GameLoop(second).start()
        assert first.turn_state.key_letters == second.turn_state.key_letters


class TestHumanTurns:
    """Submits, edits and passes."""

    def test_submit_scores_and_locks(self, started_loop, session):
        result = started_loop.submit("cats")

        assert result.success
        assert result.word == "CATS"
        assert result.score == 5
        assert result.key_letter_consumed == "S"
        assert session.players[0].score == 5
        assert session.turn_state.locked_letters == {"S"}
        assert "CATS" in session.used_words
        assert "S" in session.used_key_letters
        assert session.current_player.is_bot
        assert session.current_turn == 2

    def test_new_key_letter_is_fresh(self, started_loop, session):
        started_loop.submit("CATS")
        keys = session.turn_state.key_letters

        assert len(keys) == 1
        assert not keys & session.used_key_letters
        assert not keys & set("CATS")

    def test_move_without_key_letter_clears_locks(self, started_loop, session):
        session.turn_state.set_locked_letters({"C"})
        started_loop.submit("ACT")
        assert session.turn_state.locked_letters == set()

    def test_edit_then_submit(self, started_loop, session):
        edit = started_loop.apply_edit("insert", position=3, letter="S")
        assert edit.success
        assert edit.word == "CATS"

        result = started_loop.submit()
        assert result.success
        assert session.current_word == "CATS"

    def test_edit_operations(self, started_loop, session):
        assert started_loop.apply_edit("move", position=0, to_index=2).word == "ATC"
        assert started_loop.apply_edit("remove", position=0).word == "TC"
        assert started_loop.apply_edit("revert").word == "CAT"

        bad = started_loop.apply_edit("shuffle")
        assert bad.failure_reason is FailureKind.MALFORMED_INPUT
        missing = started_loop.apply_edit("move", position=0)
        assert missing.failure_reason is FailureKind.MALFORMED_INPUT

    def test_invalid_submit_keeps_turn(self, started_loop, session):
        result = started_loop.submit("CAB")

        assert not result.success
        assert result.failure_reason is FailureKind.UNKNOWN_WORD
        assert result.error == "not a word"
        assert session.current_turn == 1
        assert not session.current_player.is_bot
        assert session.log == []

    def test_too_many_changes(self, started_loop):
        result = started_loop.submit("DOG")
        assert result.failure_reason is FailureKind.TOO_MANY_CHANGES

    def test_wrong_player(self, started_loop):
        result = started_loop.submit("CATS", player_id="bot_hard")
        assert result.failure_reason is FailureKind.NOT_YOUR_TURN

        edit = started_loop.apply_edit("insert", position=0, letter="S", player_id="someone")
        assert edit.failure_reason is FailureKind.NOT_YOUR_TURN

    def test_human_cannot_move_on_bot_turn(self, started_loop):
        started_loop.submit("CATS")

        assert started_loop.submit("CAST").failure_reason is FailureKind.NOT_YOUR_TURN
        edit = started_loop.apply_edit("remove", position=0)
        assert edit.failure_reason is FailureKind.NOT_YOUR_TURN

    def test_bot_cannot_play_on_human_turn(self, started_loop):
        result = started_loop.play_bot_turn()
        assert result.failure_reason is FailureKind.NOT_YOUR_TURN

    def test_typed_word_cannot_drop_locked_letter(self, manager):
        session = manager.create_session(start_word="CATS", seed=7)
        loop = GameLoop(session)
        loop.start()
        session.turn_state.set_locked_letters({"S"})

        result = loop.submit("CAT")

        assert not result.success
        assert result.failure_reason is FailureKind.LETTER_LOCKED
        assert session.current_word == "CATS"
        assert session.current_turn == 1
        assert session.log == []

        assert loop.submit("ACT").failure_reason is FailureKind.LETTER_LOCKED
        assert loop.submit("CAST").success

    def test_listener_failure_keeps_bookkeeping(self, started_loop, session):
        def broken(turn):
            raise RuntimeError("analytics down")

        session.turn_state.add_listener(broken)
        result = started_loop.submit("CATS")

        assert result.success
        assert session.players[0].score == 5
        assert "CATS" in session.used_words
        assert session.turn_state.locked_letters == {"S"}
        assert session.current_turn == 2
        assert session.log[-1].new_word == "CATS"

    def test_pass(self, started_loop, session):
        session.turn_state.set_locked_letters({"C"})
        started_loop.apply_edit("insert", position=3, letter="S")
        result = started_loop.pass_turn()

        assert result.success
        assert result.is_pass
        assert session.current_word == "CAT"
        assert session.turn_state.current_word == "CAT"
        assert session.turn_state.locked_letters == set()
        assert session.turn_state.key_letters == {"S"}
        assert session.log[-1].is_pass
        assert session.current_player.is_bot


class TestFullGame:
    """A short game against the hard bot."""

    def test_game_to_the_end(self, started_loop, session):
        human = started_loop.submit("CATS")
        assert human.score == 5

        bot = started_loop.play_bot_turn()
        assert bot.word == "ACTS"
        assert bot.score == 4
        assert bot.bot_decision is not None
        assert session.turn_state.locked_letters == set()

        repeat = started_loop.submit("CATS")
        assert repeat.failure_reason is FailureKind.ALREADY_PLAYED

        assert started_loop.pass_turn().is_pass

        results = started_loop.run_bot_turns()
        assert [r.word for r in results] == ["CAST"]

        assert session.phase is GamePhase.FINISHED
        assert results[-1].winner == "bot_hard"
        assert session.winner_id == "bot_hard"
        assert session.scores() == {"human": 5, "bot_hard": 8}

        log = [(r.turn_number, r.player_id, r.new_word, r.is_pass) for r in session.log]
        assert log == [
            (1, "human", "CATS", False),
            (2, "bot_hard", "ACTS", False),
            (3, "human", "ACTS", True),
            (4, "bot_hard", "CAST", False),
        ]

    def test_no_moves_after_finish(self, started_loop, session):
        for _ in range(4):
            started_loop.pass_turn()

        assert session.phase is GamePhase.FINISHED
        assert session.winner_id is not None
        assert started_loop.submit("CATS").failure_reason is FailureKind.GAME_NOT_ACTIVE
        assert started_loop.pass_turn().failure_reason is FailureKind.GAME_NOT_ACTIVE

    def test_bot_opens(self, manager):
        session = manager.create_session(start_word="CAT", human_first=False, seed=3)
        loop = GameLoop(session)
        loop.start()

        results = loop.run_bot_turns()

        assert len(results) == 1
        assert results[0].player_id == "bot_hard"
        assert session.is_human_turn()

    def test_bot_passes_when_stuck(self, scenario_lexicon):
        manager = SessionManager(scenario_lexicon, max_turns=4)
        session = manager.create_session(start_word="DOG", human_first=False)
        loop = GameLoop(session)
        loop.start()

        result = loop.play_bot_turn()

        assert result.success
        assert result.is_pass
        assert result.bot_decision.is_pass
        assert session.current_word == "DOG"
        assert session.is_human_turn()

    def test_serialization(self, started_loop, session):
        started_loop.submit("CATS")
        data = session.to_dict()

        assert data["phase"] == "playing"
        assert data["current_word"] == "CATS"
        assert data["locked_letters"] == ["S"]
        assert data["players"][0]["score"] == 5
        assert session.log[0].to_dict()["new_word"] == "CATS"
