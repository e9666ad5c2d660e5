"""WebSocket registry per room and player."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages WebSocket connections for rooms."""

    def __init__(self):
        self.connections: dict[str, dict[str, WebSocket]] = {}

    def register(self, room_id: str, player_id: str, websocket: WebSocket) -> None:
        """Attach an accepted socket to a player in a room."""
        self.connections.setdefault(room_id, {})[player_id] = websocket

    def unregister(self, room_id: str, player_id: str) -> None:
        """Forget a player's socket."""
        room = self.connections.get(room_id)
        if room is None:
            return
        room.pop(player_id, None)
        if not room:
            del self.connections[room_id]

    def is_connected(self, room_id: str, player_id: str) -> bool:
        return player_id in self.connections.get(room_id, {})

    async def send_to(self, room_id: str, player_id: str, message: dict[str, Any]) -> bool:
        """Send to one player; a failing socket is dropped."""
        websocket = self.connections.get(room_id, {}).get(player_id)
        if websocket is None:
            return False
        try:
            await websocket.send_json(message)
        except Exception as e:
            logger.warning(f"Dropping socket for {player_id} in {room_id}: {e}")
            self.unregister(room_id, player_id)
            return False
        return True

    async def broadcast(
        self, room_id: str, message: dict[str, Any], exclude: str | None = None
    ) -> None:
        """Send a message to every connected player in a room."""
        for player_id in list(self.connections.get(room_id, {})):
            if player_id != exclude:
                await self.send_to(room_id, player_id, message)
