"""Server-side game flow: starting hands and applying player actions.

Every action runs through the same ``execute_move`` the local transport and
the simulator use, under the room's lock, so a room sees one action at a
time.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Sequence

from lastcard_engine.cards import Card
from lastcard_engine.executor import IllegalMoveError, execute_move
from lastcard_engine.moves import DeclareLastCard, DrawCards, Move, PlayCards
from lastcard_engine.state import MIN_PLAYERS, create_initial_state, is_round_over
from transport.views import to_hand_payload, to_public_view

if TYPE_CHECKING:
    from web.api.connections import ConnectionManager
    from web.api.room_manager import Room, RoomManager

logger = logging.getLogger(__name__)

ACTIONS = ("play_cards", "draw_card", "declare_last_card")


def action_payload(move: Move) -> dict:
    """Describe a move the way clients send it."""
    match move:
        case PlayCards(cards=cards):
            return {"type": "play_cards", "cards": [c.id for c in cards]}
        case DrawCards():
            return {"type": "draw_card"}
        case DeclareLastCard():
            return {"type": "declare_last_card"}
        case _:
            raise ValueError(f"Unknown move type: {type(move)}")


def error_message(message: str) -> dict:
    return {"type": "error", "message": message}


class GameHandler:
    """Starts games and relays validated actions to a room."""

    def __init__(
        self,
        rooms: RoomManager,
        connections: ConnectionManager,
        hand_size: int = 5,
        rng: random.Random | None = None,
    ):
        self.rooms = rooms
        self.connections = connections
        self.hand_size = hand_size
        self._rng = rng or random.Random()

    async def start_game(self, room_id: str, player_id: str) -> bool:
        """Deal a hand for the room; only the host may do this."""
        room = self.rooms.get_room(room_id)
        if room is None:
            await self._reject(room_id, player_id, "Room not found")
            return False

        async with room.lock:
            if room.host_id != player_id:
                await self._reject(room_id, player_id, "Only host can start game")
                return False
            if room.is_started:
                await self._reject(room_id, player_id, "Game already started")
                return False
            if len(room.players) < MIN_PLAYERS:
                await self._reject(room_id, player_id, f"Need at least {MIN_PLAYERS} players")
                return False

            state = create_initial_state(
                player_count=len(room.players),
                hand_size=self.hand_size,
                seed=self._rng.randrange(2**32),
            )
            room.set_state(state)
            logger.info(f"Starting game in room {room.room_id} with {len(room.players)} players")

            view = to_public_view(state, room.room_id, room.players).model_dump(mode="json")
            for seat, player in enumerate(room.players):
                hand = to_hand_payload(state, room.room_id, player.player_id, seat)
                await self.connections.send_to(
                    room.room_id,
                    player.player_id,
                    {"type": "game_start", "state": view, "hand": hand.model_dump(mode="json")},
                )
        return True

    async def handle_action(
        self,
        room_id: str,
        player_id: str,
        action: str,
        cards: Sequence[str] | None = None,
    ) -> bool:
        """Validate and apply one action, then broadcast the result.

        Args:
            room_id: Room the sender sits in.
            player_id: Sender.
            action: One of ``play_cards``, ``draw_card``, ``declare_last_card``.
            cards: Card ids for ``play_cards``, in play order.

        Returns:
            True if the action changed the game.
        """
        room = self.rooms.get_room(room_id)
        if room is None or room.state is None:
            await self._reject(room_id, player_id, "Game not found")
            return False

        async with room.lock:
            state = room.state
            seat = room.seat_of(player_id)
            if seat is None or seat >= state.player_count:
                await self._reject(room_id, player_id, "Player not found")
                return False
            if is_round_over(state).over:
                await self._reject(room_id, player_id, "Game is over")
                return False
            if action not in ACTIONS:
                await self._reject(room_id, player_id, f"Unknown action: {action}")
                return False
            if action != "declare_last_card" and state.current_player != seat:
                await self._reject(room_id, player_id, "Not your turn")
                return False

            match action:
                case "play_cards":
                    if not cards:
                        await self._reject(room_id, player_id, "No cards provided")
                        return False
                    try:
                        move = PlayCards(tuple(Card.from_id(c) for c in cards))
                    except ValueError as e:
                        await self._reject(room_id, player_id, str(e))
                        return False
                case "draw_card":
                    move = DrawCards()
                case _:
                    move = DeclareLastCard(player=seat)

            try:
                new_state = execute_move(state, move, self._rng)
            except IllegalMoveError as e:
                await self._reject(room_id, player_id, str(e))
                return False

            if new_state is state:
                await self._reject(room_id, player_id, "Cannot declare last card now")
                return False

            room.set_state(new_state)
            logger.debug(f"Room {room.room_id}: {player_id} {move}")
            await self._broadcast_state(room, player_id, move)
        return True

    async def _broadcast_state(self, room: Room, player_id: str, move: Move) -> None:
        state = room.state
        view = to_public_view(state, room.room_id, room.players).model_dump(mode="json")
        await self.connections.broadcast(
            room.room_id, {"type": "game_state_update", "state": view}
        )

        for seat, player in enumerate(room.players):
            hand = to_hand_payload(state, room.room_id, player.player_id, seat)
            await self.connections.send_to(
                room.room_id,
                player.player_id,
                {"type": "hand_update", "hand": hand.model_dump(mode="json")},
            )

        await self.connections.broadcast(
            room.room_id,
            {"type": "player_action", "player_id": player_id, "action": action_payload(move)},
        )

        outcome = is_round_over(state)
        if outcome.over:
            winner_id = (
                room.players[outcome.winner].player_id if outcome.winner is not None else None
            )
            message = f"{winner_id} wins!" if winner_id is not None else "It's a draw!"
            logger.info(f"Game over in room {room.room_id}: {message}")
            await self.connections.broadcast(
                room.room_id, {"type": "game_over", "winner_id": winner_id, "message": message}
            )

    async def _reject(self, room_id: str, player_id: str, message: str) -> None:
        logger.debug(f"Rejected action from {player_id} in {room_id}: {message}")
        await self.connections.send_to(room_id, player_id, error_message(message))
