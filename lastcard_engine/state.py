"""Immutable game state for Last Card."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from lastcard_engine.cards import Card

MIN_PLAYERS = 2
MAX_PLAYERS = 4
DEFAULT_HAND_SIZE = 5


class RoundResult(NamedTuple):
    """Whether the hand is over and who won (``None`` for a stalemate)."""

    over: bool
    winner: int | None


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Every accepted action produces a new GameState; nothing mutates one after
    it has been handed out.

    Attributes:
        deck: Remaining cards in the draw pile (front is drawn first)
        discard_pile: Played cards; the last one is the top card
        hands: One hand per seat
        current_player: Seat whose turn it is
        direction: +1 or -1, order of play
        message: Description of the last transition (display only)
        last_card_called: Outstanding last-card declaration per seat
        draw_pressure: Cards the current player must draw unless they stack or shield
        has_played: Whether each seat has completed a turn this hand
    """

    deck: tuple[Card, ...]
    discard_pile: tuple[Card, ...]
    hands: tuple[tuple[Card, ...], ...]
    current_player: int = 0
    direction: int = 1
    message: str = ""
    last_card_called: tuple[bool, ...] = ()
    draw_pressure: int = 0
    has_played: tuple[bool, ...] = ()

    def __post_init__(self) -> None:
        count = len(self.hands)
        # Flags default to "all false" so tests and callers can omit them
        if not self.last_card_called:
            object.__setattr__(self, "last_card_called", (False,) * count)
        if not self.has_played:
            object.__setattr__(self, "has_played", (False,) * count)

    @property
    def player_count(self) -> int:
        return len(self.hands)

    @property
    def top_card(self) -> Card | None:
        """The card governing legal plays, or None if the pile is empty."""
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def current_hand(self) -> tuple[Card, ...]:
        return self.hands[self.current_player]

    @property
    def total_cards(self) -> int:
        """Cards across deck, discard pile and all hands."""
        return len(self.deck) + len(self.discard_pile) + sum(len(h) for h in self.hands)

    def next_player(self, seat: int | None = None, direction: int | None = None) -> int:
        """Seat that follows ``seat`` (default: current player) in ``direction``."""
        seat = self.current_player if seat is None else seat
        direction = self.direction if direction is None else direction
        return (seat + direction) % self.player_count

    def with_hand(self, seat: int, hand: tuple[Card, ...]) -> GameState:
        """Return new state with one seat's hand replaced."""
        hands = list(self.hands)
        hands[seat] = hand
        return replace(self, hands=tuple(hands))

    def with_last_card_called(self, seat: int, called: bool) -> GameState:
        """Return new state with one seat's declaration flag replaced."""
        flags = list(self.last_card_called)
        flags[seat] = called
        return replace(self, last_card_called=tuple(flags))

    def with_has_played(self, seat: int) -> GameState:
        """Return new state with ``seat`` marked as having played."""
        flags = list(self.has_played)
        flags[seat] = True
        return replace(self, has_played=tuple(flags))

    def with_message(self, message: str) -> GameState:
        return replace(self, message=message)


def is_round_over(state: GameState) -> RoundResult:
    """Decide whether the hand is over.

    The winner is the first seat with an empty hand and an outstanding
    declaration. An empty hand without a declaration ends the hand as a
    stalemate.
    """
    for seat, hand in enumerate(state.hands):
        if not hand and state.last_card_called[seat]:
            return RoundResult(over=True, winner=seat)

    if any(not hand for hand in state.hands):
        return RoundResult(over=True, winner=None)

    return RoundResult(over=False, winner=None)


def create_initial_state(
    player_count: int = 2,
    hand_size: int = DEFAULT_HAND_SIZE,
    deck: list[Card] | None = None,
    seed: int | None = None,
    message: str = "Game started!",
) -> GameState:
    """Create the state for a fresh hand.

    Args:
        player_count: Number of seats (2-4).
        hand_size: Cards dealt to each seat.
        deck: Optional pre-ordered deck. If None, creates and shuffles a new deck.
        seed: Random seed for shuffling (only used if deck is None).
        message: Initial status message.

    Returns:
        Initial state with hands dealt and one starter card flipped.

    Raises:
        ValueError: If the player count or hand size cannot be dealt.
    """
    from lastcard_engine.deck import build_deck, deal, shuffle

    if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
        raise ValueError(
            f"Player count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {player_count}"
        )

    if deck is None:
        deck = shuffle(build_deck(), random.Random(seed))

    if player_count * hand_size >= len(deck):
        raise ValueError(f"Not enough cards to deal {hand_size} to {player_count} players")

    dealt = deal(deck, player_count, hand_size)
    starter, remaining = dealt.remaining[0], dealt.remaining[1:]

    return GameState(
        deck=remaining,
        discard_pile=(starter,),
        hands=dealt.hands,
        current_player=0,
        direction=1,
        message=message,
        last_card_called=(False,) * player_count,
        draw_pressure=0,
        has_played=(False,) * player_count,
    )
