"""Deck construction, shuffling, dealing, and drawing."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Sequence

from lastcard_engine.cards import Card, Rank, Suit

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DealResult:
    """Hands dealt to each seat plus the undealt remainder."""

    hands: tuple[tuple[Card, ...], ...]
    remaining: tuple[Card, ...]


@dataclass(frozen=True, slots=True)
class DrawResult:
    """Outcome of drawing from the deck.

    Attributes:
        deck: Deck after the draw (possibly rebuilt from the discard pile)
        discard_pile: Discard pile after the draw
        drawn: Cards drawn, in draw order; may be shorter than requested
    """

    deck: tuple[Card, ...]
    discard_pile: tuple[Card, ...]
    drawn: tuple[Card, ...]


def build_deck() -> list[Card]:
    """Create a standard 52-card deck (no jokers) in canonical order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle(deck: Sequence[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a shuffled copy of the deck."""
    rng = rng or random.Random()
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled


def deal(deck: Sequence[Card], players: int, hand_size: int = 5) -> DealResult:
    """Deal ``hand_size`` cards to each of ``players`` seats.

    Seat 0 takes the first block of cards, seat 1 the next, and so on.

    Raises:
        ValueError: If the deck cannot cover the deal.
    """
    if players < 1 or hand_size < 0:
        raise ValueError(f"Cannot deal {hand_size} cards to {players} players")
    if players * hand_size > len(deck):
        raise ValueError(
            f"Deck of {len(deck)} cards cannot deal {hand_size} cards to {players} players"
        )

    hands = tuple(
        tuple(deck[i * hand_size : (i + 1) * hand_size]) for i in range(players)
    )
    remaining = tuple(deck[players * hand_size :])
    return DealResult(hands=hands, remaining=remaining)


def draw_cards(
    deck: Sequence[Card],
    discard_pile: Sequence[Card],
    count: int,
    rng: random.Random | None = None,
) -> DrawResult:
    """Draw up to ``count`` cards from the front of the deck.

    When the deck runs out, every discard except the top card is shuffled
    into a new deck. If nothing is left to recycle, drawing stops early.
    """
    current_deck = list(deck)
    current_discard = list(discard_pile)
    drawn: list[Card] = []

    for _ in range(count):
        if not current_deck:
            if len(current_discard) > 1:
                top = current_discard[-1]
                current_deck = shuffle(current_discard[:-1], rng)
                current_discard = [top]
                logger.debug(f"Recycled {len(current_deck)} discards into the deck")
            else:
                break
        drawn.append(current_deck.pop(0))

    if len(drawn) < count:
        logger.warning(
            f"Deck exhaustion: could only draw {len(drawn)} of {count} requested cards"
        )

    return DrawResult(
        deck=tuple(current_deck),
        discard_pile=tuple(current_discard),
        drawn=tuple(drawn),
    )
