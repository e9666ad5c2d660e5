"""Wire models shared by the local transport and the relay server."""

from __future__ import annotations

from pydantic import BaseModel, Field

from lastcard_engine.cards import Card


class CardModel(BaseModel):
    """A card as sent to clients."""

    id: str = Field(..., description="Rank symbol followed by suit symbol, e.g. '10♥'")
    rank: int
    rank_symbol: str
    suit: int
    suit_symbol: str
    is_red: bool

    @classmethod
    def from_card(cls, card: Card) -> CardModel:
        return cls(
            id=card.id,
            rank=card.rank.value,
            rank_symbol=card.rank.symbol,
            suit=card.suit.value,
            suit_symbol=card.suit.symbol,
            is_red=card.suit.is_red,
        )

    def to_card(self) -> Card:
        return Card.from_id(self.id)


class PlayerSummary(BaseModel):
    """What everyone may know about a seat."""

    player_id: str
    hand_count: int = 0
    connected: bool = True
    is_bot: bool = False


class PublicGameView(BaseModel):
    """Game state with every hand replaced by its size."""

    room_id: str
    deck_count: int
    discard_pile: list[CardModel]
    current_player: int
    direction: int
    message: str
    last_card_called: list[bool]
    draw_pressure: int
    has_played: list[bool]
    players: list[PlayerSummary]


class PrivateHandPayload(BaseModel):
    """One player's hand, sent only to that player."""

    room_id: str
    player_id: str
    hand: list[CardModel]


class RoomInfo(BaseModel):
    """Lobby state of a room."""

    room_id: str
    host_id: str
    players: list[PlayerSummary]
    max_players: int = Field(4, ge=2, le=4)
    is_started: bool = False
