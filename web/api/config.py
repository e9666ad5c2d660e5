"""Server settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from lastcard_engine.state import DEFAULT_HAND_SIZE, MAX_PLAYERS

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:3000",
)


@dataclass
class Settings:
    """Runtime configuration for the relay server."""

    host: str = "0.0.0.0"
    port: int = 8000
    hand_size: int = DEFAULT_HAND_SIZE
    max_players: int = MAX_PLAYERS
    log_level: str = "info"
    reconnect_grace: float = 30.0  # Seconds before a dropped player is cleaned up
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``LASTCARD_*`` variables and ``FRONTEND_URL``."""
        settings = cls(
            host=os.environ.get("LASTCARD_HOST", cls.host),
            port=int(os.environ.get("LASTCARD_PORT", cls.port)),
            hand_size=int(os.environ.get("LASTCARD_HAND_SIZE", cls.hand_size)),
            max_players=int(os.environ.get("LASTCARD_MAX_PLAYERS", cls.max_players)),
            log_level=os.environ.get("LASTCARD_LOG_LEVEL", cls.log_level).lower(),
            reconnect_grace=float(
                os.environ.get("LASTCARD_RECONNECT_GRACE", cls.reconnect_grace)
            ),
        )

        # Add production frontend URL if set
        prod_url = os.environ.get("FRONTEND_URL")
        if prod_url:
            settings.cors_origins.append(prod_url)

        return settings
