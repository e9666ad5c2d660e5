"""Transport layer: wire models, views and the local single-player transport."""

from transport.local import LocalTransport
from transport.schemas import (
    CardModel,
    PlayerSummary,
    PrivateHandPayload,
    PublicGameView,
    RoomInfo,
)
from transport.types import ConnectionStatus, TransportCallbacks
from transport.views import to_hand_payload, to_public_view

__all__ = [
    "CardModel",
    "PlayerSummary",
    "PublicGameView",
    "PrivateHandPayload",
    "RoomInfo",
    "ConnectionStatus",
    "TransportCallbacks",
    "LocalTransport",
    "to_public_view",
    "to_hand_payload",
]
