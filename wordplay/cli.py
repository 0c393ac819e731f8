"""
WordPlay CLI - Command-line interface for the engine.

Usage:
    wordplay validate <word> [--previous WORD]   Validate a word or a move
    wordplay anagrams <word>                     List playable anagrams
    wordplay bot <word> [--profile NAME]         Show the bot's reply to a word
    wordplay play [--profile NAME]               Play a game in the terminal
    wordplay challenge [--date YYYY-MM-DD]       Play the daily challenge
    wordplay serve [--host H] [--port P]         Run the HTTP API

Word lists are read from --wordlist-dir or WORDPLAY_WORDLIST_DIR.
"""

import argparse
import random
import sys

from .config import Settings, configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="WordPlay - Turn-based word game engine",
        prog="wordplay",
    )
    parser.add_argument("--wordlist-dir", help="Directory holding standard.txt, slang.txt, disallowed.txt")
    parser.add_argument("--log-level", help="Logging level (default: WORDPLAY_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a word or a move")
    validate_parser.add_argument("word", help="Candidate word")
    validate_parser.add_argument("--previous", "-p", default="", help="Word being moved from")
    validate_parser.add_argument("--no-slang", action="store_true", help="Reject slang words")
    validate_parser.add_argument("--allow-profanity", action="store_true", help="Accept disallowed words")

    # Anagrams command
    anagrams_parser = subparsers.add_parser("anagrams", help="List playable anagrams")
    anagrams_parser.add_argument("word", help="Word to rearrange")

    # Bot command
    bot_parser = subparsers.add_parser("bot", help="Show the bot's reply to a word")
    bot_parser.add_argument("word", help="Current word")
    bot_parser.add_argument("--profile", default="hard", help="Bot profile id")
    bot_parser.add_argument("--key-letters", default="", help="Key letters, e.g. SX")
    bot_parser.add_argument("--locked", default="", help="Locked letters, e.g. W")
    bot_parser.add_argument("--seed", type=int, help="Random seed")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--profile", default="hard", help="Bot profile id (or 'random')")
    play_parser.add_argument("--start-word", help="Opening word")
    play_parser.add_argument("--turns", type=int, help="Turns per game")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument("--bot-first", action="store_true", help="Let the bot open")

    # Challenge command
    challenge_parser = subparsers.add_parser("challenge", help="Play the daily challenge")
    challenge_parser.add_argument("--date", help="Challenge date, YYYY-MM-DD (default: today)")
    challenge_parser.add_argument("--practice", action="store_true", help="Random practice challenge")
    challenge_parser.add_argument("--seed", type=int, help="Random seed for --practice")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.wordlist_dir:
        settings.wordlist_dir = args.wordlist_dir
    configure_logging(args.log_level or settings.log_level)

    if args.command == "validate":
        cmd_validate(args, settings)
    elif args.command == "anagrams":
        cmd_anagrams(args, settings)
    elif args.command == "bot":
        cmd_bot(args, settings)
    elif args.command == "play":
        cmd_play(args, settings)
    elif args.command == "challenge":
        cmd_challenge(args, settings)
    elif args.command == "serve":
        cmd_serve(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_validate(args, settings):
    """Validate a word or a move."""
    from .engine_core import ValidationOptions, validate_word
    from .lexicon import load_lexicon

    lexicon = load_lexicon(settings.wordlist_dir)
    options = ValidationOptions(
        allow_slang=not args.no_slang,
        allow_profanity=args.allow_profanity,
    )
    result = validate_word(lexicon, args.previous, args.word, options)

    if result.is_valid:
        shown = result.censored or result.normalized_word
        print(f"{shown}: valid")
        return
    print(f"{result.normalized_word}: {result.failure_reason.value} ({result.message})")
    sys.exit(1)


def cmd_anagrams(args, settings):
    """List playable anagrams."""
    from .lexicon import load_lexicon

    lexicon = load_lexicon(settings.wordlist_dir)
    found = lexicon.anagrams_of(args.word)
    if not found:
        print(f"No anagrams of {args.word.strip().upper()}")
        return
    for word in found:
        print(word)


def cmd_bot(args, settings):
    """Show the bot's reply to a word."""
    from .bots import generate_bot_move, get_profile
    from .engine_core import TurnState
    from .lexicon import load_lexicon

    try:
        profile = get_profile(args.profile)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    lexicon = load_lexicon(settings.wordlist_dir)
    state = TurnState(
        lexicon,
        start_word=args.word,
        key_letters=args.key_letters,
        locked_letters=args.locked,
    )
    decision = generate_bot_move(
        state,
        profile,
        lexicon,
        rng=random.Random(args.seed),
        max_candidates=settings.max_candidates,
    )

    if decision.is_pass:
        print(f"{profile.name} passes ({decision.explanation})")
        return
    print(f"{profile.name} plays {decision.word} for {decision.candidate.total} points")
    print(f"  {decision.explanation}; {decision.legal} legal of {decision.evaluated} candidates")


def cmd_play(args, settings):
    """Play a game in the terminal."""
    from .lexicon import load_lexicon
    from .session import GameLoop, GamePhase, SessionManager

    lexicon = load_lexicon(settings.wordlist_dir)

    manager = SessionManager(
        lexicon,
        max_turns=args.turns or settings.max_turns,
        max_candidates=settings.max_candidates,
    )
    try:
        session = manager.create_session(
            start_word=args.start_word,
            bot_profile=args.profile,
            human_first=not args.bot_first,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    loop = GameLoop(session)
    loop.start()
    bot = next(seat for seat in session.players if seat.is_bot)
    print(f"Playing against {bot.name}, start word {session.current_word}")
    print("Type a word to play it, /pass to pass, /quit to stop.\n")

    while session.phase is GamePhase.PLAYING:
        for result in loop.run_bot_turns():
            if result.is_pass:
                print("  bot passes")
            else:
                print(f"  bot plays {result.word} (+{result.score})")
        if session.phase is not GamePhase.PLAYING:
            break

        state = session.turn_state
        keys = "".join(sorted(state.key_letters)) or "-"
        locked = "".join(sorted(state.locked_letters)) or "-"
        print(f"[turn {session.current_turn}/{session.max_turns}] {session.current_word}"
              f"  key: {keys}  locked: {locked}  score: {session.current_player.score}")
        try:
            line = input("> ").strip()
        except EOFError:
            line = "/quit"

        if line == "/quit":
            print("Game abandoned.")
            manager.end_session(session.session_id)
            return
        if line == "/pass":
            loop.pass_turn()
            continue

        result = loop.submit(line)
        if result.success:
            print(f"  you play {result.word} (+{result.score})")
        else:
            print(f"  {result.error}")
            session.turn_state.revert()

    print("\nGame over.")
    for seat in session.players:
        print(f"  {seat.name}: {seat.score}")
    winner = session.get_player(session.winner_id)
    if winner:
        print(f"Winner: {winner.name}")


def cmd_challenge(args, settings):
    """Play the daily (or a practice) challenge in the terminal."""
    from .lexicon import load_lexicon
    from .session import ChallengeEngine

    engine = ChallengeEngine(load_lexicon(settings.wordlist_dir))
    if args.practice:
        state = engine.random_challenge(seed=args.seed)
    else:
        try:
            state = engine.get_daily_state(args.date)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

    print(f"Challenge {state.date}: turn {state.start_word} into {state.target_word}")
    print("Type a word to play it, /forfeit to give up, /quit to stop.\n")

    while not state.is_finished:
        print(f"[step {state.step_count}] {state.current_word} -> {state.target_word}")
        try:
            line = input("> ").strip()
        except EOFError:
            line = "/quit"

        if line == "/quit":
            print("Challenge left unfinished.")
            return
        if line == "/forfeit":
            state = engine.forfeit(state)
            break

        submission = engine.submit_word(state, line)
        if submission.success:
            state = submission.state
        else:
            print(f"  {submission.error}")

    if state.completed:
        print(f"\nSolved in {state.step_count} steps!")
    print()
    print(engine.sharing_text(state))


def cmd_serve(args, settings):
    """Run the HTTP API with uvicorn."""
    import uvicorn
    from .api import create_app

    app = create_app(settings=settings)
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
