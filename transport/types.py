"""Transport-agnostic callback contract."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from lastcard_engine.moves import Move
    from transport.schemas import PrivateHandPayload, PublicGameView, RoomInfo


class ConnectionStatus(str, Enum):
    """Connection state of a transport."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


@dataclass
class TransportCallbacks:
    """Event hooks a UI registers on a transport. All are optional."""

    on_state_update: Optional[Callable[[PublicGameView], None]] = None
    on_hand_update: Optional[Callable[[PrivateHandPayload], None]] = None
    on_room_updated: Optional[Callable[[RoomInfo], None]] = None
    on_game_start: Optional[Callable[[PublicGameView, PrivateHandPayload], None]] = None
    on_game_over: Optional[Callable[[Optional[str], str], None]] = None
    on_player_action: Optional[Callable[[str, Move], None]] = None
    on_error: Optional[Callable[[str], None]] = None
    on_connection_change: Optional[Callable[[ConnectionStatus], None]] = None

    def merged(self, other: TransportCallbacks) -> TransportCallbacks:
        """Return a copy where hooks set in ``other`` replace ours."""
        values = {}
        for f in fields(self):
            theirs = getattr(other, f.name)
            values[f.name] = theirs if theirs is not None else getattr(self, f.name)
        return TransportCallbacks(**values)
