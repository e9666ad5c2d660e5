"""Card, Suit, and Rank models for Last Card."""

from __future__ import annotations

from enum import IntEnum
from functools import total_ordering
from typing import ClassVar


class Suit(IntEnum):
    """Card suits in canonical deck order."""

    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return {
            Suit.SPADES: "♠",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
        }[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @classmethod
    def from_symbol(cls, symbol: str) -> Suit:
        for suit in cls:
            if suit.symbol == symbol:
                return suit
        raise ValueError(f"Unknown suit symbol: {symbol!r}")


class Rank(IntEnum):
    """Card ranks (Ace=1 through King=13)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        if self.value == 1:
            return "A"
        elif self.value <= 10:
            return str(self.value)
        else:
            return self.name[0]

    @classmethod
    def from_symbol(cls, symbol: str) -> Rank:
        for rank in cls:
            if rank.symbol == symbol:
                return rank
        raise ValueError(f"Unknown rank symbol: {symbol!r}")


@total_ordering
class Card:
    """A playing card.

    Cards are immutable and interned: ``Card(Rank.ACE, Suit.SPADES)`` always
    returns the same instance. Comparison is by rank, then suit.
    """

    __slots__ = ("_rank", "_suit")

    _instances: ClassVar[dict[tuple[Rank, Suit], Card]] = {}

    def __new__(cls, rank: Rank, suit: Suit) -> Card:
        key = (Rank(rank), Suit(suit))
        if key not in cls._instances:
            instance = object.__new__(cls)
            instance._rank = key[0]
            instance._suit = key[1]
            cls._instances[key] = instance
        return cls._instances[key]

    @classmethod
    def from_id(cls, card_id: str) -> Card:
        """Parse a card id such as ``"10♥"`` or ``"Q♠"``."""
        if not isinstance(card_id, str) or len(card_id) < 2:
            raise ValueError(f"Invalid card id: {card_id!r}")
        return cls(Rank.from_symbol(card_id[:-1]), Suit.from_symbol(card_id[-1]))

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def id(self) -> str:
        """Stable unique identifier (rank symbol + suit symbol)."""
        return f"{self._rank.symbol}{self._suit.symbol}"

    @property
    def is_draw_card(self) -> bool:
        """Twos and black Jacks force the next player to draw."""
        if self._rank == Rank.TWO:
            return True
        return self._rank == Rank.JACK and not self._suit.is_red

    @property
    def is_red_jack(self) -> bool:
        """Red Jacks shield against accumulated draw pressure."""
        return self._rank == Rank.JACK and self._suit.is_red

    @property
    def draw_value(self) -> int:
        """Cards this card adds to the draw pressure."""
        if self._rank == Rank.TWO:
            return 2
        if self._rank == Rank.JACK and not self._suit.is_red:
            return 5
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._rank == other._rank and self._suit == other._suit

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        if self._rank != other._rank:
            return self._rank < other._rank
        return self._suit < other._suit

    def __hash__(self) -> int:
        return hash((self._rank, self._suit))

    def __reduce__(self) -> tuple:
        """Support pickling for multiprocessing."""
        return (Card, (self._rank, self._suit))

    def __repr__(self) -> str:
        return f"Card({self._rank.name}, {self._suit.name})"

    def __str__(self) -> str:
        return self.id


def draw_value(cards: tuple[Card, ...] | list[Card]) -> int:
    """Total draw pressure carried by a sequence of cards."""
    return sum(card.draw_value for card in cards)


def format_cards(cards) -> str:
    """Comma-separated card ids, or ``(empty)``."""
    return ", ".join(str(c) for c in cards) or "(empty)"
