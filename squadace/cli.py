"""
Squad Ace CLI - Command-line interface for the engine.

Usage:
    squadace play                 Play a match against the AI in the terminal
    squadace simulate             Let the timeout auto-play face the AI
    squadace serve                Run the JSON API with uvicorn
"""

import argparse
import logging
import random
import sys

from .config import EngineConfig


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Squad Ace - Cricket Stat-Battle Engine",
        prog="squadace",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a match in the terminal")
    play_parser.add_argument("--name", default="You", help="Your display name")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument(
        "--strong-bot", action="store_true", help="AI picks its strongest stat"
    )

    # Simulate command
    sim_parser = subparsers.add_parser("simulate", help="Run a match on auto-play")
    sim_parser.add_argument("--seed", type=int, help="Random seed")
    sim_parser.add_argument("--cards", type=int, default=5, help="Cards per player")
    sim_parser.add_argument(
        "--max-rounds", type=int, default=500, help="Stop after this many rounds"
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the JSON API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _describe_card(card, spec) -> str:
    lines = [f"  {card.name}"]
    for index, stat in enumerate(spec.stats, start=1):
        value = card.stat_value(stat.name)
        arrow = "" if stat.higher_is_better else " (lower wins)"
        lines.append(f"    {index}. {stat.label:<13} {value}{arrow}")
    return "\n".join(lines)


def _print_scores(state) -> None:
    print("  " + " | ".join(f"{p.name}: {p.card_count} cards" for p in state.players))


def cmd_play(args):
    """Interactive match; the AI's moves run on a fake clock."""
    from .bots import RandomStatPolicy, StrongestStatPolicy
    from .engine_core.state import Phase
    from .session import TurnEngine, ManualScheduler

    rng = random.Random(args.seed)
    config = EngineConfig(auto_advance=False)
    scheduler = ManualScheduler()
    bot = StrongestStatPolicy() if args.strong_bot else RandomStatPolicy(rng=rng)
    engine = TurnEngine(
        config=config, scheduler=scheduler, bot=bot, rng=rng, user_name=args.name
    )
    engine.on_notification(lambda n: print(f"\n*** {n.title}: {n.description}"))

    state = engine.initialize_match(f"{rng.getrandbits(32):08x}")
    print(f"Squad Ace - invite code {state.invite_code}")
    print(state.message)
    input("Press Enter to start...")
    engine.start_game()
    print(engine.state.message)
    engine.toss()

    spec = engine.spec
    last_message = None
    while True:
        state = engine.state
        if state.message != last_message:
            print(f"\n{state.message}")
            last_message = state.message

        if state.phase == Phase.GAME_OVER:
            _print_scores(state)
            again = input("Play again? [y/N] ").strip().lower()
            if again != "y":
                return
            engine.initialize_match(state.match_id)
            engine.start_game()
            engine.toss()
            continue

        if state.phase == Phase.ROUND_OVER:
            _print_scores(state)
            input("Press Enter for the next round...")
            engine.advance_to_next_round()
            continue

        if not state.is_user_input_phase:
            scheduler.run_next()
            continue

        if state.phase == Phase.PLAYER_TURN_SELECT_STAT:
            print(_describe_card(state.selections[0].card, spec))
            choice = input(f"Pick a stat [1-{len(spec.stats)}]: ").strip()
            if choice.isdigit() and 1 <= int(choice) <= len(spec.stats):
                engine.select_stat(spec.stats[int(choice) - 1].name)
            else:
                print("Not a stat number.")
            continue

        if state.phase == Phase.PLAYER_TURN_RESPOND_TO_OPPONENT_CHALLENGE:
            label = spec.get_stat(state.selected_stat).label
            print(f"  Challenge: {label}")
        print(_describe_card(state.local_user.top_card, spec))
        command = input("Play your top card? [Enter / q to quit] ").strip().lower()
        if command == "q":
            return
        engine.play_top_card()


def cmd_simulate(args):
    """Run a whole match where every user turn times out."""
    from .engine_core.state import Phase
    from .session import TurnEngine, ManualScheduler

    config = EngineConfig(cards_per_player=args.cards)
    scheduler = ManualScheduler()
    engine = TurnEngine(config=config, scheduler=scheduler, rng=random.Random(args.seed))
    engine.on_notification(
        lambda n: print(f"[{scheduler.now:7.1f}s] round {engine.state.round_number}: {n.description}")
    )

    engine.initialize_match("simulation")
    engine.start_game()
    engine.toss()
    print(engine.state.message)

    while engine.state.phase != Phase.GAME_OVER:
        if engine.state.round_number >= args.max_rounds:
            print(f"No winner after {args.max_rounds} rounds.")
            _print_scores(engine.state)
            return
        if not scheduler.run_next():
            print("Engine stalled with no pending timers.")
            sys.exit(1)

    print(engine.state.message)
    _print_scores(engine.state)


def cmd_serve(args):
    """Serve the API."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    uvicorn.run("squadace.api.app:create_app", factory=True, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
