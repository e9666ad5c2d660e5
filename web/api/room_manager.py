"""Room bookkeeping for networked games."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field

from lastcard_engine.state import MAX_PLAYERS, MIN_PLAYERS, GameState
from transport.schemas import PlayerSummary, RoomInfo

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 6


class RoomError(Exception):
    """Raised when a room operation cannot be carried out."""

    pass


@dataclass
class Room:
    """A lobby and, once started, its game."""

    room_id: str
    host_id: str
    max_players: int
    players: list[PlayerSummary] = field(default_factory=list)
    state: GameState | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def is_started(self) -> bool:
        return self.state is not None

    def seat_of(self, player_id: str) -> int | None:
        for seat, player in enumerate(self.players):
            if player.player_id == player_id:
                return seat
        return None

    def player_ids(self) -> list[str]:
        return [p.player_id for p in self.players]

    def set_state(self, state: GameState) -> None:
        """Store a new game state and refresh the hand counts."""
        self.state = state
        for seat, hand in enumerate(state.hands):
            if seat < len(self.players):
                self.players[seat].hand_count = len(hand)

    def info(self) -> RoomInfo:
        return RoomInfo(
            room_id=self.room_id,
            host_id=self.host_id,
            players=[p.model_copy() for p in self.players],
            max_players=self.max_players,
            is_started=self.is_started,
        )


class RoomManager:
    """Creates rooms, seats players and tracks who is connected."""

    def __init__(self, max_players: int = MAX_PLAYERS, rng: random.Random | None = None):
        self.max_players = max_players
        self._rooms: dict[str, Room] = {}
        self._rng = rng or random.Random()

    def generate_room_code(self) -> str:
        """Return an unused 6-character room code."""
        while True:
            code = "".join(
                self._rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH)
            )
            if code not in self._rooms:
                return code

    def create_room(self, host_name: str, max_players: int | None = None) -> Room:
        """Open a room with ``host_name`` seated as host."""
        limit = self.max_players if max_players is None else max_players
        if not MIN_PLAYERS <= limit <= self.max_players:
            raise RoomError(f"Rooms hold {MIN_PLAYERS} to {self.max_players} players")
        if not host_name:
            raise RoomError("Player name is required")

        room = Room(
            room_id=self.generate_room_code(),
            host_id=host_name,
            max_players=limit,
            players=[PlayerSummary(player_id=host_name)],
        )
        self._rooms[room.room_id] = room
        logger.info(f"Created room {room.room_id} by {host_name}")
        return room

    def join_room(self, room_id: str, player_name: str) -> Room:
        """Seat ``player_name`` in an open room.

        Raises:
            RoomError: If the room is missing, started, full, or the name is taken.
        """
        room = self._rooms.get(room_id.upper())
        if room is None:
            raise RoomError("Room not found")
        if room.is_started:
            raise RoomError("Game already started")
        if len(room.players) >= room.max_players:
            raise RoomError("Room is full")
        if not player_name:
            raise RoomError("Player name is required")
        if room.seat_of(player_name) is not None:
            raise RoomError("Name already taken in this room")

        room.players.append(PlayerSummary(player_id=player_name))
        logger.info(f"{player_name} joined room {room.room_id}")
        return room

    def leave_room(self, room_id: str, player_name: str) -> Room | None:
        """Remove a player; returns the room, or None if it is gone or unknown."""
        room = self._rooms.get(room_id)
        if room is None:
            return None
        seat = room.seat_of(player_name)
        if seat is None:
            return None

        if room.is_started:
            # Seats are fixed once dealt, so a leaver mid-game only goes offline
            room.players[seat].connected = False
            remaining = [p for p in room.players if p.connected]
        else:
            room.players.pop(seat)
            remaining = room.players

        if not remaining:
            del self._rooms[room_id]
            logger.info(f"Room {room_id} deleted (empty)")
            return None

        if room.host_id == player_name:
            room.host_id = remaining[0].player_id
            logger.info(f"New host for room {room_id}: {room.host_id}")

        logger.info(f"{player_name} left room {room_id}")
        return room

    def set_connected(self, room_id: str, player_name: str, connected: bool) -> None:
        room = self._rooms.get(room_id)
        if room is None:
            return
        seat = room.seat_of(player_name)
        if seat is not None:
            room.players[seat].connected = connected

    def get_room(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id.upper())

    def list_rooms(self) -> list[Room]:
        return list(self._rooms.values())

    def delete_room(self, room_id: str) -> None:
        if self._rooms.pop(room_id, None) is not None:
            logger.info(f"Room {room_id} deleted")
