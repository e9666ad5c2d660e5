"""FastAPI relay server for networked Last Card games."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from web.api.config import Settings
from web.api.connections import ConnectionManager
from web.api.game_handler import GameHandler
from web.api.room_manager import RoomManager
from web.api.routes import rooms

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - cancel pending lobby removals on shutdown."""
    logger.info("Relay server starting")
    yield
    pending = list(app.state.pending_removals)
    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    logger.info("Relay server stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the relay app with its own room and connection managers."""
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Last Card API",
        description="Room relay for multiplayer Last Card",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.rooms = RoomManager(max_players=settings.max_players)
    app.state.connections = ConnectionManager()
    app.state.game_handler = GameHandler(
        app.state.rooms, app.state.connections, hand_size=settings.hand_size
    )
    app.state.pending_removals = set()

    logger.info(f"CORS origins configured: {settings.cors_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(rooms.router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "rooms": len(app.state.rooms.list_rooms())}

    return app
