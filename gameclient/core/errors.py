"""Error taxonomy shared by the client controllers.

Nothing here is fatal to the process: controllers catch these at their
boundary and degrade to a playable default.
"""

from __future__ import annotations

from typing import Optional


class GameClientError(Exception):
    """Base class for every error raised by the client core."""


class ValidationError(GameClientError):
    """Bad local input; raised before any request is issued."""


class TransportError(GameClientError):
    """No response reached the client (DNS, timeout, TLS, connection)."""


class ApplicationError(GameClientError):
    """A response arrived with a status outside 200-299."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class ParseError(GameClientError):
    """A 2xx response whose body does not match the expected schema."""

    def __init__(self, message: str, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.body = body


__all__ = [
    "ApplicationError",
    "GameClientError",
    "ParseError",
    "TransportError",
    "ValidationError",
]
