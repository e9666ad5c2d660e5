"""Projections of the full game state that are safe to send."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from transport.schemas import CardModel, PlayerSummary, PrivateHandPayload, PublicGameView

if TYPE_CHECKING:
    from lastcard_engine.state import GameState


def to_public_view(
    state: GameState, room_id: str, players: Sequence[PlayerSummary]
) -> PublicGameView:
    """Build the view every seat may see.

    ``players`` gives the seats in order; their hand counts are refreshed
    from ``state``.
    """
    summaries = [
        player.model_copy(update={"hand_count": len(state.hands[seat])})
        if seat < state.player_count
        else player
        for seat, player in enumerate(players)
    ]
    return PublicGameView(
        room_id=room_id,
        deck_count=len(state.deck),
        discard_pile=[CardModel.from_card(c) for c in state.discard_pile],
        current_player=state.current_player,
        direction=state.direction,
        message=state.message,
        last_card_called=list(state.last_card_called),
        draw_pressure=state.draw_pressure,
        has_played=list(state.has_played),
        players=summaries,
    )


def to_hand_payload(
    state: GameState, room_id: str, player_id: str, seat: int
) -> PrivateHandPayload:
    """Build the private hand message for one seat."""
    return PrivateHandPayload(
        room_id=room_id,
        player_id=player_id,
        hand=[CardModel.from_card(c) for c in state.hands[seat]],
    )
