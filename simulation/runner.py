"""Game runner for Last Card simulations."""

from __future__ import annotations

import logging
import random
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Sequence

from lastcard_engine.executor import declare_last_card, execute_move
from lastcard_engine.move_generator import generate_legal_moves
from lastcard_engine.moves import DeclareLastCard
from lastcard_engine.state import create_initial_state, is_round_over

if TYPE_CHECKING:
    from lastcard_engine.state import GameState
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed hand."""

    game_id: str
    winner: int | None  # Seat index, or None for stalemate / turn limit
    stalemate: bool
    turns: int
    final_hand_sizes: tuple[int, ...]
    player_strategies: tuple[str, ...]
    seed: int | None
    duration_ms: float
    move_count: int


@dataclass
class MoveRecord:
    """Record of a single move."""

    turn: int
    player: int
    move: str
    state_after: dict


@dataclass
class GameLog:
    """Complete log of a hand."""

    game_id: str
    timestamp: str
    seed: int | None
    player_strategies: tuple[str, ...]
    initial_state: dict
    moves: list[MoveRecord] = field(default_factory=list)
    result: GameResult | None = None


class GameRunner:
    """Runs Last Card hands between bot strategies."""

    def __init__(
        self,
        strategies: Sequence[Strategy],
        max_turns: int = 500,
        log_moves: bool = True,
        hand_size: int = 5,
    ):
        """Initialize the game runner.

        Args:
            strategies: One strategy per seat (2-4).
            max_turns: Maximum turns before the hand is abandoned.
            log_moves: Whether to log individual moves.
            hand_size: Cards dealt to each seat.
        """
        self.strategies = tuple(strategies)
        self.max_turns = max_turns
        self.log_moves = log_moves
        self.hand_size = hand_size

    def run_game(self, seed: int | None = None) -> tuple[GameResult, GameLog | None]:
        """Run a single hand.

        Args:
            seed: Random seed for the deal and reshuffles.

        Returns:
            Tuple of (result, log). Log is None if log_moves is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())
        rng = random.Random(seed)

        state = create_initial_state(
            player_count=len(self.strategies), hand_size=self.hand_size, seed=seed
        )

        for i, strategy in enumerate(self.strategies):
            strategy.on_game_start(state, i)

        game_log = None
        if self.log_moves:
            game_log = GameLog(
                game_id=game_id,
                timestamp=datetime.now().isoformat(),
                seed=seed,
                player_strategies=tuple(s.name for s in self.strategies),
                initial_state=state_to_dict(state),
            )

        turns = 0
        move_count = 0

        while not is_round_over(state).over and turns < self.max_turns:
            # Waiting seats may declare before the current player acts
            for seat, strategy in enumerate(self.strategies):
                if seat == state.current_player or state.last_card_called[seat]:
                    continue
                if not strategy.wants_to_declare(state, seat):
                    continue
                declared = declare_last_card(state, seat)
                if declared is not state:
                    state = declared
                    move_count += 1
                    self._record(game_log, turns, seat, DeclareLastCard(player=seat), state)

            acting_player = state.current_player
            legal_moves = generate_legal_moves(state)
            if not legal_moves:
                break

            strategy = self.strategies[acting_player]
            move = strategy.select_move(state, legal_moves)
            new_state = execute_move(state, move, rng)
            turns += 1
            move_count += 1

            self._record(game_log, turns, acting_player, move, new_state)

            for s in self.strategies:
                s.on_move_made(new_state, move, acting_player)

            state = new_state

        outcome = is_round_over(state)
        if not outcome.over:
            logger.info(f"Hand {game_id} abandoned after {turns} turns")

        result = GameResult(
            game_id=game_id,
            winner=outcome.winner,
            stalemate=outcome.over and outcome.winner is None,
            turns=turns,
            final_hand_sizes=tuple(len(h) for h in state.hands),
            player_strategies=tuple(s.name for s in self.strategies),
            seed=seed,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            move_count=move_count,
        )

        if game_log:
            game_log.result = result

        for strategy in self.strategies:
            strategy.on_game_end(state, outcome.winner)

        return result, game_log

    def _record(self, game_log, turn, player, move, state_after) -> None:
        if game_log is None:
            return
        game_log.moves.append(
            MoveRecord(
                turn=turn,
                player=player,
                move=str(move),
                state_after=state_to_dict(state_after),
            )
        )


def state_to_dict(state: GameState) -> dict:
    """Convert game state to a dictionary for logging."""
    return {
        "current_player": state.current_player,
        "direction": state.direction,
        "draw_pressure": state.draw_pressure,
        "message": state.message,
        "deck_size": len(state.deck),
        "discard_size": len(state.discard_pile),
        "top_card": str(state.top_card) if state.top_card else None,
        "hands": [[str(c) for c in hand] for hand in state.hands],
        "last_card_called": list(state.last_card_called),
        "has_played": list(state.has_played),
    }


def run_batch(
    strategies: Sequence[Strategy],
    num_games: int,
    start_seed: int = 0,
    log_moves: bool = False,
) -> list[GameResult]:
    """Run multiple hands.

    Args:
        strategies: One strategy per seat.
        num_games: Number of hands to run.
        start_seed: Starting seed (incremented for each hand).
        log_moves: Whether to log moves (slower).

    Returns:
        List of game results.
    """
    runner = GameRunner(strategies, log_moves=log_moves)
    results = []

    for i in range(num_games):
        result, _ = runner.run_game(seed=start_seed + i)
        results.append(result)

    return results
