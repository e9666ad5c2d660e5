"""Move execution for Last Card.

``apply_card_effect``, ``apply_penalty``, ``apply_draw`` and
``declare_last_card`` are the rules themselves and trust their input.
``execute_move`` is the validating entry point used by every caller that
receives untrusted moves (the relay server, the local transport, bots).
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Sequence

from lastcard_engine.cards import Card, Rank, draw_value
from lastcard_engine.deck import draw_cards
from lastcard_engine.move_generator import is_valid_play, legal_moves
from lastcard_engine.moves import DeclareLastCard, DrawCards, Move, PlayCards
from lastcard_engine.state import GameState, is_round_over

logger = logging.getLogger(__name__)


class IllegalMoveError(Exception):
    """Raised when an illegal move is attempted."""

    pass


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


def apply_card_effect(
    state: GameState, played_cards: Sequence[Card], rng: random.Random | None = None
) -> GameState:
    """Resolve a play by the current player and return the next state.

    The rank of the last card played decides the effect; a run resolves once,
    at its end. The cards must already have been validated.

    Raises:
        IllegalMoveError: If no cards were played.
    """
    if not played_cards:
        raise IllegalMoveError("No cards played")

    played = tuple(played_cards)
    actor = state.current_player
    player_count = state.player_count

    hands = [list(hand) for hand in state.hands]
    hands[actor] = [c for c in hands[actor] if c not in played]
    discard_pile = state.discard_pile + played
    deck = state.deck
    direction = state.direction
    draw_pressure = state.draw_pressure
    last_card_called = list(state.last_card_called)
    has_played = list(state.has_played)
    has_played[actor] = True
    current = actor
    message = ""

    last = played[-1]
    added_pressure = draw_value(played)

    match last.rank:
        case Rank.TWO:
            draw_pressure += added_pressure
            current = (actor + direction) % player_count
            last_card_called[current] = False
            message = f"Draw pressure increases to {draw_pressure}"

        case Rank.JACK if last.is_draw_card:
            draw_pressure += added_pressure
            current = (actor + direction) % player_count
            last_card_called[current] = False
            message = f"Draw pressure increases to {draw_pressure}"

        case Rank.JACK:
            message = (
                "Red Jack cancels draw pressure"
                if draw_pressure > 0
                else "Red Jack cancels effects"
            )
            draw_pressure = 0
            current = (actor + direction) % player_count

        case Rank.EIGHT:
            skipped = (actor + direction) % player_count
            has_played[skipped] = True
            last_card_called[skipped] = False
            current = (skipped + direction) % player_count
            message = f"Player {skipped + 1} is skipped"

        case Rank.KING:
            direction *= -1
            current = (actor + direction) % player_count
            message = "Order of play reversed"

        case Rank.ACE:
            current = (actor + direction) % player_count
            message = f"Suit changed to {last.suit.symbol}"

        case Rank.QUEEN if len(played) == 1:
            drawn = draw_cards(deck, discard_pile, 1, rng)
            deck, discard_pile = drawn.deck, drawn.discard_pile
            hands[actor].extend(drawn.drawn)
            last_card_called[actor] = False
            current = (actor + direction) % player_count
            message = (
                f"Player {actor + 1} draws {len(drawn.drawn)} card{_plural(len(drawn.drawn))} "
                f"for not covering the Queen"
            )

        case Rank.QUEEN:
            current = (actor + direction) % player_count
            message = "Queen covered"

        case _:
            current = (actor + direction) % player_count
            message = f"Player {current + 1}'s turn"

    if not hands[actor] and not state.last_card_called[actor]:
        # Going out without a declaration costs a card, even from an empty hand
        drawn = draw_cards(deck, discard_pile, 1, rng)
        deck, discard_pile = drawn.deck, drawn.discard_pile
        hands[actor].extend(drawn.drawn)
        last_card_called[actor] = False
        penalty = (
            f"Player {actor + 1} draws {len(drawn.drawn)} card{_plural(len(drawn.drawn))} "
            f"for not calling last card"
        )
        message = f"{message} {penalty}" if message else penalty
        logger.debug(f"Declaration penalty for player {actor}: drew {len(drawn.drawn)}")
    elif hands[actor]:
        last_card_called[actor] = False

    return GameState(
        deck=deck,
        discard_pile=discard_pile,
        hands=tuple(tuple(hand) for hand in hands),
        current_player=current,
        direction=direction,
        message=message,
        last_card_called=tuple(last_card_called),
        draw_pressure=draw_pressure,
        has_played=tuple(has_played),
    )


def apply_penalty(
    state: GameState,
    player: int,
    exposure: int = 1,
    misplay: int = 2,
    rng: random.Random | None = None,
) -> GameState:
    """Punish a rule infraction detected by the surrounding game.

    The offender draws ``misplay + exposure`` cards, loses any declaration,
    counts as having played, and the turn passes to the seat after them.
    """
    drawn = draw_cards(state.deck, state.discard_pile, misplay + exposure, rng)

    exposure_drawn = min(exposure, len(drawn.drawn))
    misplay_drawn = len(drawn.drawn) - exposure_drawn
    message = (
        f"Incorrect move, pick up {misplay_drawn} card{_plural(misplay_drawn)} for a mistake "
        f"and {exposure_drawn} card{_plural(exposure_drawn)} for exposure"
    )
    logger.info(f"Penalty for player {player}: {message}")

    new_state = (
        state.with_hand(player, state.hands[player] + drawn.drawn)
        .with_last_card_called(player, False)
        .with_has_played(player)
    )
    return replace(
        new_state,
        deck=drawn.deck,
        discard_pile=drawn.discard_pile,
        current_player=state.next_player(player),
        message=message,
    )


def apply_draw(state: GameState, rng: random.Random | None = None) -> GameState:
    """Current player draws instead of playing.

    Draws the whole pending draw pressure if any, otherwise one card. The
    pressure is resolved and the turn passes on.
    """
    player = state.current_player
    count = state.draw_pressure if state.draw_pressure > 0 else 1
    drawn = draw_cards(state.deck, state.discard_pile, count, rng)

    new_state = (
        state.with_hand(player, state.hands[player] + drawn.drawn)
        .with_last_card_called(player, False)
        .with_has_played(player)
    )
    return replace(
        new_state,
        deck=drawn.deck,
        discard_pile=drawn.discard_pile,
        current_player=state.next_player(player),
        draw_pressure=0,
        message=f"Player {player + 1} draws {len(drawn.drawn)} card{_plural(len(drawn.drawn))}",
    )


def can_go_out(state: GameState, player: int) -> bool:
    """Whether ``player`` could empty their whole hand in one play right now."""
    hand = state.hands[player]
    top_card = state.top_card
    if not hand or top_card is None:
        return False

    options = legal_moves(hand, top_card, state.draw_pressure)
    if len(hand) == 1:
        return hand[0] in options.singles
    return any(len(run) == len(hand) for run in options.runs)


def declare_last_card(state: GameState, player: int) -> GameState:
    """Record a last-card declaration for ``player``.

    Valid only when every seat has taken a turn, it is not the declarer's
    turn, the hand is not over, and the declarer could empty their hand in a
    single play. Any failed condition returns ``state`` unchanged.
    """
    if player < 0 or player >= state.player_count:
        return state
    if is_round_over(state).over:
        return state
    if not all(state.has_played):
        return state
    if state.current_player == player:
        return state
    if not can_go_out(state, player):
        return state

    return state.with_last_card_called(player, True).with_message(
        f"Player {player + 1} declares last card!"
    )


def execute_move(
    state: GameState, move: Move, rng: random.Random | None = None
) -> GameState:
    """Validate a move and return the new game state.

    Args:
        state: Current game state.
        move: Move to execute. Plays and draws act for the current player;
            declarations name their own player.
        rng: Optional random source for reshuffling the discard pile.

    Returns:
        New game state after the move.

    Raises:
        IllegalMoveError: If the move is not legal.
    """
    if is_round_over(state).over:
        raise IllegalMoveError("Round is already over")

    match move:
        case PlayCards(cards=cards):
            _validate_play(state, cards)
            return apply_card_effect(state, cards, rng)
        case DrawCards():
            return apply_draw(state, rng)
        case DeclareLastCard(player=player):
            return declare_last_card(state, player)
        case _:
            raise IllegalMoveError(f"Unknown move type: {type(move)}")


def _validate_play(state: GameState, cards: tuple[Card, ...]) -> None:
    if not cards:
        raise IllegalMoveError("No cards played")
    hand = state.current_hand
    for card in cards:
        if card not in hand:
            raise IllegalMoveError(f"Card {card} not in hand")
    if len(set(cards)) != len(cards):
        raise IllegalMoveError("A card cannot be played twice in one run")
    top_card = state.top_card
    if top_card is None or not is_valid_play(cards, top_card, state.draw_pressure):
        played = ", ".join(str(c) for c in cards)
        raise IllegalMoveError(f"Cannot play {played} on {top_card}")
