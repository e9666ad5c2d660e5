"""Command-line interface for Last Card."""

from __future__ import annotations

import argparse
import logging
import random
from typing import TYPE_CHECKING

from lastcard_engine.cards import format_cards
from lastcard_engine.executor import declare_last_card, execute_move
from lastcard_engine.move_generator import generate_legal_moves
from lastcard_engine.state import create_initial_state, is_round_over

if TYPE_CHECKING:
    from lastcard_engine.moves import Move
    from lastcard_engine.state import GameState


def format_state(state: GameState, viewer: int | None = 0) -> str:
    """Format game state for display.

    Args:
        state: State to show.
        viewer: Seat whose hand is shown; None shows every hand.
    """
    lines = []

    arrow = "→" if state.direction == 1 else "←"
    lines.append("=" * 60)
    lines.append(
        f"Top card: {state.top_card} | Direction: {arrow} | Draw pressure: {state.draw_pressure}"
    )
    lines.append("=" * 60)

    for i, hand in enumerate(state.hands):
        prefix = "→ " if i == state.current_player else "  "
        called = " (last card!)" if state.last_card_called[i] else ""
        lines.append(f"{prefix}Player {i + 1}{called}")
        if viewer is None or i == viewer:
            lines.append(f"  Hand: {format_cards(hand)}")
        else:
            lines.append(f"  Hand: [{len(hand)} cards]")

    lines.append(f"\nDeck: {len(state.deck)} cards | Discard: {len(state.discard_pile)} cards")
    if state.message:
        lines.append(state.message)

    outcome = is_round_over(state)
    if outcome.over:
        lines.append("\n" + "=" * 60)
        if outcome.winner is None:
            lines.append("HAND OVER - stalemate, nobody wins")
        else:
            lines.append(f"HAND OVER - Player {outcome.winner + 1} wins!")
        lines.append("=" * 60)

    return "\n".join(lines)


def format_moves(moves: list[Move]) -> str:
    """Format available moves for display."""
    lines = ["Available moves:"]
    for i, move in enumerate(moves):
        lines.append(f"  {i + 1}. {move}")
    return "\n".join(lines)


def play_interactive(seed: int | None = None, difficulty: str = "medium") -> None:
    """Play an interactive hand against the heuristic bot."""
    from strategies.heuristic import HeuristicStrategy

    bot = HeuristicStrategy(difficulty=difficulty, seed=seed)
    rng = random.Random(seed)
    state = create_initial_state(seed=seed)

    print("\nWelcome to Last Card!")
    print("You are Player 1. Type the number of a move to play.")
    print("Type 'q' to quit.\n")

    while not is_round_over(state).over:
        print(format_state(state, viewer=0))

        if state.current_player == 0:
            legal_moves = generate_legal_moves(state)
            print(f"\n{format_moves(legal_moves)}")

            while True:
                try:
                    choice = input("\nYour move: ").strip()
                    if choice.lower() == "q":
                        print("Goodbye!")
                        return

                    move_idx = int(choice) - 1
                    if 0 <= move_idx < len(legal_moves):
                        move = legal_moves[move_idx]
                        break
                    else:
                        print(f"Please enter a number 1-{len(legal_moves)}")
                except ValueError:
                    print("Please enter a valid number or 'q' to quit")
        else:
            # Declarations happen off-turn, so offer one before the bot moves
            if len(state.hands[0]) <= 3 and not state.last_card_called[0]:
                answer = input("\nDeclare last card before the bot moves? [y/N] ").strip()
                if answer.lower() == "y":
                    declared = declare_last_card(state, 0)
                    if declared is state:
                        print("Declaration not accepted.")
                    state = declared

            if bot.wants_to_declare(state, 1):
                state = declare_last_card(state, 1)

            legal_moves = generate_legal_moves(state)
            move = bot.select_move(state, legal_moves)
            print(f"\nBot plays: {move}")

        state = execute_move(state, move, rng)
        print()

        if state.current_player == 0 and bot.wants_to_declare(state, 1):
            state = declare_last_card(state, 1)

    print(format_state(state, viewer=None))


def watch_game(seed: int | None = None, delay: float = 0.5) -> None:
    """Watch two bots play against each other."""
    import time

    from strategies.heuristic import HeuristicStrategy
    from strategies.random_strategy import RandomStrategy

    strategies = (HeuristicStrategy(seed=seed), RandomStrategy(seed=seed))
    rng = random.Random(seed)
    state = create_initial_state(seed=seed)

    print(f"\nWatching: {strategies[0].name} vs {strategies[1].name}")
    print("Press Ctrl+C to stop.\n")

    try:
        while not is_round_over(state).over:
            for seat, strategy in enumerate(strategies):
                if seat != state.current_player and strategy.wants_to_declare(state, seat):
                    state = declare_last_card(state, seat)

            print(format_state(state, viewer=None))

            acting_player = state.current_player
            legal_moves = generate_legal_moves(state)
            strategy = strategies[acting_player]
            move = strategy.select_move(state, legal_moves)

            print(f"\nPlayer {acting_player + 1} ({strategy.name}) plays: {move}")
            state = execute_move(state, move, rng)

            time.sleep(delay)
            print("\n" + "-" * 60 + "\n")

    except KeyboardInterrupt:
        print("\nStopped.")

    print(format_state(state, viewer=None))


def run_tournament(num_games: int = 100, seed: int = 42) -> None:
    """Run a batch of hands between bots and print a summary."""
    from simulation.runner import run_batch
    from strategies.heuristic import HeuristicStrategy
    from strategies.random_strategy import RandomStrategy

    matchups = [
        (RandomStrategy(seed=seed), RandomStrategy(seed=seed + 1000)),
        (HeuristicStrategy("hard", seed=seed), RandomStrategy(seed=seed + 1000)),
        (HeuristicStrategy("hard", seed=seed), HeuristicStrategy("easy", seed=seed + 1000)),
    ]

    for strategy0, strategy1 in matchups:
        print(f"\nRunning {num_games} hands: {strategy0.name} vs {strategy1.name}")
        results = run_batch((strategy0, strategy1), num_games, start_seed=seed)

        p0_wins = sum(1 for r in results if r.winner == 0)
        p1_wins = sum(1 for r in results if r.winner == 1)
        stalemates = sum(1 for r in results if r.stalemate)
        unfinished = num_games - p0_wins - p1_wins - stalemates
        avg_turns = sum(r.turns for r in results) / len(results)
        avg_duration = sum(r.duration_ms for r in results) / len(results)

        print(f"  {strategy0.name} wins: {p0_wins} ({100*p0_wins/num_games:.1f}%)")
        print(f"  {strategy1.name} wins: {p1_wins} ({100*p1_wins/num_games:.1f}%)")
        print(f"  Stalemates: {stalemates} | Unfinished: {unfinished}")
        print(f"  Average turns: {avg_turns:.1f}")
        print(f"  Average duration: {avg_duration:.2f}ms")


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Last Card shedding game")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play against the bot")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument(
        "--difficulty", choices=["easy", "medium", "hard"], default="medium"
    )

    # Watch command
    watch_parser = subparsers.add_parser("watch", help="Watch bot vs bot")
    watch_parser.add_argument("--seed", type=int, help="Random seed")
    watch_parser.add_argument(
        "--delay", type=float, default=0.5, help="Delay between moves (seconds)"
    )

    # Tournament command
    tournament_parser = subparsers.add_parser("tournament", help="Run bot matchups")
    tournament_parser.add_argument(
        "--games", type=int, default=100, help="Number of hands"
    )
    tournament_parser.add_argument("--seed", type=int, default=42, help="Random seed")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play_interactive(seed=args.seed, difficulty=args.difficulty)
    elif args.command == "watch":
        watch_game(seed=args.seed, delay=args.delay)
    elif args.command == "tournament":
        run_tournament(num_games=args.games, seed=args.seed)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
