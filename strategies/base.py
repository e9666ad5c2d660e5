"""Base strategy interface for Last Card players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lastcard_engine.moves import Move
    from lastcard_engine.state import GameState


class Strategy(ABC):
    """Abstract base class for player strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        """Select a move from the list of legal moves.

        Args:
            state: Current game state.
            legal_moves: Every legal play for the current player, plus Draw.

        Returns:
            The selected move.
        """
        ...

    def wants_to_declare(self, state: GameState, player: int) -> bool:
        """Whether to attempt a last-card declaration while waiting.

        Called for seats that are not on turn. The declaration gate still
        decides whether the claim is accepted, so the default simply tries.

        Args:
            state: Current game state.
            player: Seat this strategy controls.
        """
        return True

    def on_game_start(self, state: GameState, player_index: int) -> None:
        """Called when a hand starts.

        Override to initialize per-game state.

        Args:
            state: Initial game state.
            player_index: Which seat this strategy controls.
        """
        pass

    def on_game_end(self, state: GameState, winner: int | None) -> None:
        """Called when a hand ends.

        Args:
            state: Final game state.
            winner: Winning seat, or None for a stalemate.
        """
        pass

    def on_move_made(self, state: GameState, move: Move, player: int) -> None:
        """Called after any move is made (by any player).

        Args:
            state: State after the move.
            move: The move that was made.
            player: Which seat made the move.
        """
        pass
