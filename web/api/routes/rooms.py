"""Room API routes and the game WebSocket."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field, ValidationError

from transport.schemas import RoomInfo
from web.api.game_handler import error_message
from web.api.room_manager import RoomError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["rooms"])


class ClientMessage(BaseModel):
    """A message sent by a client over the WebSocket."""

    type: str = Field(..., description="Message type, e.g. 'join_room' or 'play_cards'")
    player_name: str | None = Field(None, description="Display name, used as player id")
    room_id: str | None = Field(None, description="Room code for join_room")
    max_players: int | None = Field(None, description="Seat limit for create_room")
    cards: list[str] | None = Field(None, description="Card ids for play_cards, in order")


# REST Endpoints


@router.get("/rooms", response_model=list[RoomInfo])
async def list_rooms(request: Request):
    """List open and running rooms."""
    return [room.info() for room in request.app.state.rooms.list_rooms()]


@router.get("/rooms/{room_id}", response_model=RoomInfo)
async def get_room(room_id: str, request: Request):
    """Get one room's lobby state."""
    room = request.app.state.rooms.get_room(room_id)
    if room is None:
        raise HTTPException(status_code=404, detail="Room not found")
    return room.info()


# WebSocket endpoint for real-time play


def _room_message(kind: str, room) -> dict:
    return {"type": kind, "room": room.info().model_dump(mode="json")}


async def _remove_after_grace(app, room_id: str, player_id: str) -> None:
    """Drop a player who has not come back in time.

    Lobby players lose their seat. A started game keeps its seats, but the
    room goes once nobody in it is connected.
    """
    await asyncio.sleep(app.state.settings.reconnect_grace)
    rooms = app.state.rooms
    room = rooms.get_room(room_id)
    if room is None:
        return
    if room.is_started:
        if not any(p.connected for p in room.players):
            rooms.delete_room(room_id)
        return
    seat = room.seat_of(player_id)
    if seat is None or room.players[seat].connected:
        return
    updated = rooms.leave_room(room_id, player_id)
    if updated is not None:
        await app.state.connections.broadcast(room_id, _room_message("room_updated", updated))


@router.websocket("/ws")
async def game_websocket(websocket: WebSocket):
    """WebSocket for lobby and game actions.

    Client messages are JSON objects with a ``type`` of ``create_room``,
    ``join_room``, ``leave_room``, ``start_game``, ``play_cards``,
    ``draw_card`` or ``declare_last_card``. Failures come back to the sender
    as ``{"type": "error", "message": ...}``.
    """
    app = websocket.app
    rooms = app.state.rooms
    connections = app.state.connections
    handler = app.state.game_handler

    await websocket.accept()
    room_id: str | None = None
    player_id: str | None = None

    async def leave() -> None:
        nonlocal room_id, player_id
        if room_id is None:
            return
        connections.unregister(room_id, player_id)
        room = rooms.leave_room(room_id, player_id)
        if room is not None:
            await connections.broadcast(room_id, _room_message("room_updated", room))
        room_id = None
        player_id = None

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = ClientMessage.model_validate_json(raw)
            except ValidationError:
                await websocket.send_json(error_message("Invalid message"))
                continue

            match message.type:
                case "create_room" | "join_room":
                    if room_id is not None:
                        await websocket.send_json(error_message("Already in a room"))
                        continue
                    try:
                        if message.type == "create_room":
                            room = rooms.create_room(message.player_name, message.max_players)
                        else:
                            room = rooms.join_room(message.room_id or "", message.player_name)
                    except RoomError as e:
                        await websocket.send_json(error_message(str(e)))
                        continue

                    room_id, player_id = room.room_id, message.player_name
                    connections.register(room_id, player_id, websocket)
                    if message.type == "create_room":
                        await websocket.send_json(_room_message("room_created", room))
                    else:
                        await websocket.send_json(_room_message("room_joined", room))
                        await connections.broadcast(
                            room_id, _room_message("room_updated", room), exclude=player_id
                        )

                case "leave_room":
                    await leave()

                case "start_game":
                    if room_id is None:
                        await websocket.send_json(error_message("Not in a room"))
                        continue
                    await handler.start_game(room_id, player_id)

                case "play_cards" | "draw_card" | "declare_last_card":
                    if room_id is None:
                        await websocket.send_json(error_message("Not in a room"))
                        continue
                    await handler.handle_action(room_id, player_id, message.type, message.cards)

                case _:
                    await websocket.send_json(
                        error_message(f"Unknown message type: {message.type}")
                    )

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: room={room_id}, player={player_id}")
        if room_id is None:
            return
        connections.unregister(room_id, player_id)
        rooms.set_connected(room_id, player_id, False)
        room = rooms.get_room(room_id)
        if room is None:
            return
        await connections.broadcast(room_id, _room_message("room_updated", room))
        task = asyncio.create_task(_remove_after_grace(app, room_id, player_id))
        app.state.pending_removals.add(task)
        task.add_done_callback(app.state.pending_removals.discard)
