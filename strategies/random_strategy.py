"""Random baseline bot."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from lastcard_engine.moves import DrawCards, PlayCards
from strategies.base import Strategy

if TYPE_CHECKING:
    from lastcard_engine.moves import Move
    from lastcard_engine.state import GameState


class RandomStrategy(Strategy):
    """Plays a uniformly random card or run.

    Drawing is only chosen when nothing is playable, unless
    ``voluntary_draws`` is set, in which case Draw is one more random option.
    """

    def __init__(self, seed: int | None = None, voluntary_draws: bool = False):
        self._rng = random.Random(seed)
        self.voluntary_draws = voluntary_draws

    @property
    def name(self) -> str:
        return "Random (drawing)" if self.voluntary_draws else "Random"

    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        if not legal_moves:
            raise ValueError("No legal moves available")
        if self.voluntary_draws:
            return self._rng.choice(legal_moves)

        plays = [m for m in legal_moves if isinstance(m, PlayCards)]
        if plays:
            return self._rng.choice(plays)
        return next((m for m in legal_moves if isinstance(m, DrawCards)), legal_moves[0])
