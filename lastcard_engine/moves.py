"""Move types for Last Card."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lastcard_engine.cards import Card


class MoveType(IntEnum):
    """Type of move."""

    PLAY_CARDS = auto()  # Single card or run
    DRAW_CARDS = auto()  # Draw one card, or resolve draw pressure
    DECLARE_LAST_CARD = auto()  # Off-turn claim to finish next turn


@dataclass(frozen=True, slots=True)
class Move(ABC):
    """Base class for all moves."""

    @property
    @abstractmethod
    def move_type(self) -> MoveType:
        """The type of this move."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable move description."""
        ...


@dataclass(frozen=True, slots=True)
class PlayCards(Move):
    """Play one card or an ordered run, first card onto the discard pile first."""

    cards: tuple[Card, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cards", tuple(self.cards))

    @property
    def move_type(self) -> MoveType:
        return MoveType.PLAY_CARDS

    @property
    def is_run(self) -> bool:
        return len(self.cards) > 1

    @property
    def last_card(self) -> Card:
        return self.cards[-1]

    def __str__(self) -> str:
        if len(self.cards) == 1:
            return f"Play {self.cards[0]}"
        return "Play run " + " → ".join(str(c) for c in self.cards)


@dataclass(frozen=True, slots=True)
class DrawCards(Move):
    """Draw from the deck (the whole draw pressure if any is pending)."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.DRAW_CARDS

    def __str__(self) -> str:
        return "Draw"


@dataclass(frozen=True, slots=True)
class DeclareLastCard(Move):
    """Declare that ``player`` will empty their hand on their next turn."""

    player: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.DECLARE_LAST_CARD

    def __str__(self) -> str:
        return f"Player {self.player + 1} declares last card"
