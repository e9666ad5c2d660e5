"""Bot strategies for Last Card."""

from strategies.base import Strategy
from strategies.factory import StrategyFactory, create_strategy
from strategies.heuristic import Difficulty, HeuristicStrategy, bot_turn_delay
from strategies.random_strategy import RandomStrategy

__all__ = [
    "Strategy",
    "RandomStrategy",
    "HeuristicStrategy",
    "Difficulty",
    "bot_turn_delay",
    "StrategyFactory",
    "create_strategy",
]
