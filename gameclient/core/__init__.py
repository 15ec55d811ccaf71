"""Core configuration and infrastructure helpers."""

from .config import (
    API_BASE_URL,
    DATA_DIR,
    FIRST_SCENE,
    HTTP_TIMEOUT,
    LANDING_SCENE,
    LEADERBOARD_ROWS,
    LOG_LEVEL,
    SAVE_KEY_PREFIX,
)
from .database import create_marker_engine, memory_engine, session_scope
from .errors import (
    ApplicationError,
    GameClientError,
    ParseError,
    TransportError,
    ValidationError,
)
from .logs import configure_logging
from .time import utcnow

__all__ = [
    "API_BASE_URL",
    "ApplicationError",
    "DATA_DIR",
    "FIRST_SCENE",
    "GameClientError",
    "HTTP_TIMEOUT",
    "LANDING_SCENE",
    "LEADERBOARD_ROWS",
    "LOG_LEVEL",
    "ParseError",
    "SAVE_KEY_PREFIX",
    "TransportError",
    "ValidationError",
    "configure_logging",
    "create_marker_engine",
    "memory_engine",
    "session_scope",
    "utcnow",
]
