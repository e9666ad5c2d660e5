"""Legal move generation for Last Card.

A play is a single card or a run: an ordered sequence of distinct cards from
one hand. The first card must match the top of the discard pile (same suit,
same rank, or anything on a Queen). Each following card must be related to
the card before it by one of:

- an adjacent-rank step in the same suit, keeping the direction (+1/-1) set
  by the first step of the run; King→Ace and Ace→Two count as +1 and their
  mirrors as -1,
- a same-rank hop, which changes suit without touching the direction,
- a Queen pivot: a Queen may only follow a Jack or King of its own suit, and
  anything may follow a Queen.

A step between an Ace and a Two wraps the rank order and may happen at most
once per run. Under draw pressure normal matching is suspended: only draw
cards (2s and black Jacks) may start or extend a run, and a red Jack may be
added directly after a draw card as the final card.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, NamedTuple

from lastcard_engine.cards import Card, Rank
from lastcard_engine.moves import DrawCards, Move, PlayCards

if TYPE_CHECKING:
    from lastcard_engine.state import GameState

# Rank pairs whose step is not their plain rank difference
_WRAP_STEPS: dict[tuple[Rank, Rank], int] = {
    (Rank.KING, Rank.ACE): 1,
    (Rank.ACE, Rank.TWO): 1,
    (Rank.TWO, Rank.ACE): -1,
    (Rank.ACE, Rank.KING): -1,
}


@dataclass(frozen=True, slots=True)
class LegalMoves:
    """Every legal single card and multi-card run for one hand.

    Attributes:
        singles: Cards playable on their own
        runs: Ordered sequences of two or more cards
    """

    singles: tuple[Card, ...]
    runs: tuple[tuple[Card, ...], ...]

    @property
    def plays(self) -> list[tuple[Card, ...]]:
        """All plays as card sequences, singles first."""
        return [(card,) for card in self.singles] + list(self.runs)

    def is_empty(self) -> bool:
        return not self.singles and not self.runs


class _RunState(NamedTuple):
    """Constraints carried along a run while it is being extended."""

    direction: int | None
    wraps: int


_FRESH_RUN = _RunState(direction=None, wraps=0)


def _rank_step(last: Card, nxt: Card) -> int:
    return _WRAP_STEPS.get((last.rank, nxt.rank), nxt.rank - last.rank)


def _can_start(card: Card, top_card: Card, draw_pressure: int) -> bool:
    if draw_pressure > 0:
        return card.is_draw_card or card.is_red_jack
    return (
        top_card.rank == Rank.QUEEN
        or card.suit == top_card.suit
        or card.rank == top_card.rank
    )


def _extend(
    last: Card, nxt: Card, run_state: _RunState, draw_pressure: int
) -> _RunState | None:
    """Constraints after appending ``nxt`` behind ``last``, or None if illegal."""
    if draw_pressure > 0:
        if last.is_red_jack:
            return None
        if nxt.is_red_jack:
            return run_state if last.is_draw_card else None
        return run_state if nxt.is_draw_card else None

    if last.rank == Rank.QUEEN:
        return _RunState(direction=None, wraps=run_state.wraps)

    if nxt.rank == Rank.QUEEN:
        if last.rank in (Rank.JACK, Rank.KING) and last.suit == nxt.suit:
            return _RunState(direction=None, wraps=run_state.wraps)
        return None

    step = _rank_step(last, nxt)
    if step == 0:
        return run_state
    if abs(step) != 1 or last.suit != nxt.suit:
        return None
    if run_state.direction is not None and run_state.direction != step:
        return None

    wraps = run_state.wraps
    if {last.rank, nxt.rank} == {Rank.ACE, Rank.TWO}:
        wraps += 1
        if wraps > 1:
            return None
    return _RunState(direction=step, wraps=wraps)


def legal_moves(
    hand: Iterable[Card], top_card: Card, draw_pressure: int = 0
) -> LegalMoves:
    """Enumerate every legal single card and run for ``hand``.

    Runs are found by depth-first search from every card that may start a
    play. Every prefix of a run is itself a legal play and is recorded, so a
    run of length n also yields its shorter heads.

    Args:
        hand: Cards held by the player.
        top_card: Top card of the discard pile.
        draw_pressure: Pending draw count; suspends normal matching when > 0.

    Returns:
        LegalMoves with singles and runs.
    """
    ordered = sorted(hand, key=lambda c: c.rank)
    singles: list[Card] = []
    runs: list[tuple[Card, ...]] = []

    for start in ordered:
        if not _can_start(start, top_card, draw_pressure):
            continue

        stack: list[tuple[tuple[Card, ...], _RunState]] = [((start,), _FRESH_RUN)]
        while stack:
            run, run_state = stack.pop()
            if len(run) == 1:
                singles.append(run[0])
            else:
                runs.append(run)

            last = run[-1]
            branches = []
            for nxt in ordered:
                if nxt in run:
                    continue
                extended = _extend(last, nxt, run_state, draw_pressure)
                if extended is not None:
                    branches.append((run + (nxt,), extended))
            # Reversed so branches are explored in hand order
            stack.extend(reversed(branches))

    return LegalMoves(singles=tuple(singles), runs=tuple(runs))


def is_valid_play(
    cards: Iterable[Card], top_card: Card, draw_pressure: int = 0
) -> bool:
    """Check one ordered card sequence against the run rules.

    Equivalent to membership in ``legal_moves`` for a hand containing the
    cards, without enumerating every alternative.
    """
    cards = tuple(cards)
    if not cards or len(set(cards)) != len(cards):
        return False
    if not _can_start(cards[0], top_card, draw_pressure):
        return False

    run_state: _RunState | None = _FRESH_RUN
    for last, nxt in zip(cards, cards[1:]):
        run_state = _extend(last, nxt, run_state, draw_pressure)
        if run_state is None:
            return False
    return True


def generate_legal_moves(state: GameState) -> list[Move]:
    """Generate all legal moves for the current player.

    Args:
        state: Current game state.

    Returns:
        Every PlayCards option (singles, then runs) followed by DrawCards.
        Empty once the hand is over.
    """
    from lastcard_engine.state import is_round_over

    if is_round_over(state).over:
        return []

    moves: list[Move] = []
    top_card = state.top_card
    if top_card is not None:
        options = legal_moves(state.current_hand, top_card, state.draw_pressure)
        moves.extend(PlayCards(cards=play) for play in options.plays)

    moves.append(DrawCards())
    return moves
