"""Factory for creating strategy instances by name."""

from __future__ import annotations

from typing import Any

from strategies.base import Strategy


class StrategyFactory:
    """Factory for creating strategy instances."""

    AVAILABLE_STRATEGIES = {
        "random": "Random player (baseline)",
        "easy": "Heuristic bot, easy (sometimes plays at random)",
        "medium": "Heuristic bot, medium (priority list)",
        "hard": "Heuristic bot, hard (maximises draw pressure)",
    }

    def create(self, name: str, params: dict[str, Any] | None = None) -> Strategy:
        """Create a strategy instance."""
        params = params or {}
        name_lower = name.lower()

        match name_lower:
            case "random":
                from strategies.random_strategy import RandomStrategy
                return RandomStrategy(
                    seed=params.get("seed"),
                    voluntary_draws=params.get("voluntary_draws", False),
                )

            case "easy" | "medium" | "hard" | "heuristic":
                from strategies.heuristic import HeuristicStrategy
                difficulty = "medium" if name_lower == "heuristic" else name_lower
                return HeuristicStrategy(
                    difficulty=params.get("difficulty", difficulty),
                    seed=params.get("seed"),
                )

            case _:
                raise ValueError(f"Unknown strategy: {name}")

    def list_strategies(self) -> dict[str, str]:
        """List available strategies with descriptions."""
        return self.AVAILABLE_STRATEGIES.copy()


def create_strategy(name: str, params: dict[str, Any] | None = None) -> Strategy:
    """Create a strategy by name (see ``StrategyFactory.AVAILABLE_STRATEGIES``)."""
    return StrategyFactory().create(name, params)
