"""Priority-list heuristic used for the single-player bot.

The bot works down a fixed list:

1. With a declaration outstanding, take any play that empties the hand.
2. Easy bots play a random legal card or run 30% of the time.
3. Hard bots first reach for whatever play adds the most draw pressure.
4. Otherwise, prefer plays that end on a Two, then a black Jack, then a red
   Jack, then an Ace; ties go to the play with the larger draw value.
5. Otherwise play the first legal option, and draw when nothing is playable.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import TYPE_CHECKING, Callable

from lastcard_engine.cards import Rank, draw_value
from lastcard_engine.moves import DrawCards, PlayCards
from strategies.base import Strategy

if TYPE_CHECKING:
    from lastcard_engine.moves import Move
    from lastcard_engine.state import GameState


class Difficulty(str, Enum):
    """Bot difficulty level."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Seconds the bot "thinks" before acting
BOT_TURN_DELAYS = {
    Difficulty.EASY: 2.0,
    Difficulty.MEDIUM: 1.5,
    Difficulty.HARD: 1.0,
}


def bot_turn_delay(difficulty: Difficulty | str = Difficulty.MEDIUM) -> float:
    """Thinking delay for a bot of the given difficulty."""
    return BOT_TURN_DELAYS[Difficulty(difficulty)]


def _ends_on_two(play: PlayCards) -> bool:
    return play.last_card.rank == Rank.TWO


def _ends_on_black_jack(play: PlayCards) -> bool:
    return play.last_card.rank == Rank.JACK and play.last_card.is_draw_card


def _ends_on_red_jack(play: PlayCards) -> bool:
    return play.last_card.is_red_jack


def _ends_on_ace(play: PlayCards) -> bool:
    return play.last_card.rank == Rank.ACE


PRIORITIES: list[Callable[[PlayCards], bool]] = [
    _ends_on_two,
    _ends_on_black_jack,
    _ends_on_red_jack,
    _ends_on_ace,
]


class HeuristicStrategy(Strategy):
    """Bot that follows a fixed priority list, tuned by difficulty."""

    RANDOM_PLAY_CHANCE = 0.3

    def __init__(
        self, difficulty: Difficulty | str = Difficulty.MEDIUM, seed: int | None = None
    ):
        self.difficulty = Difficulty(difficulty)
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return f"Heuristic ({self.difficulty.value})"

    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        """Select a move by difficulty and priority."""
        if not legal_moves:
            raise ValueError("No legal moves available")

        plays = [m for m in legal_moves if isinstance(m, PlayCards)]
        if not plays:
            return next((m for m in legal_moves if isinstance(m, DrawCards)), DrawCards())

        if state.last_card_called[state.current_player]:
            hand_size = len(state.current_hand)
            finishing = [p for p in plays if len(p.cards) == hand_size]
            if finishing:
                return finishing[0]

        if (
            self.difficulty == Difficulty.EASY
            and self._rng.random() < self.RANDOM_PLAY_CHANCE
        ):
            return self._rng.choice(plays)

        if self.difficulty == Difficulty.HARD:
            pressure_plays = [p for p in plays if draw_value(p.cards) > 0]
            if pressure_plays:
                return self._most_pressure(pressure_plays)

        for matches in PRIORITIES:
            choices = [p for p in plays if matches(p)]
            if choices:
                return self._most_pressure(choices)

        return plays[0]

    @staticmethod
    def _most_pressure(plays: list[PlayCards]) -> PlayCards:
        # max() keeps the first of equal plays
        return max(plays, key=lambda p: draw_value(p.cards))
