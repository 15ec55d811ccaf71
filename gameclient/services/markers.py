"""Advisory local save markers.

A marker is a bare key: stores answer whether it exists and nothing else,
so no progress data can be read back from local storage by accident.
"""

from __future__ import annotations

import logging
from typing import Protocol, Set

from sqlalchemy.engine import Engine

from ..core.config import SAVE_KEY_PREFIX
from ..core.database import session_scope
from ..models import SaveMarker

logger = logging.getLogger(__name__)


def marker_key(username: str, prefix: str = SAVE_KEY_PREFIX) -> str:
    """Local key for ``username``'s marker."""

    return f"{prefix}{username}"


class MarkerStore(Protocol):
    def has_marker(self, key: str) -> bool: ...

    def set_marker(self, key: str) -> None: ...

    def delete_marker(self, key: str) -> None: ...


class MemoryMarkerStore:
    """Markers that live only as long as the process."""

    def __init__(self) -> None:
        self._keys: Set[str] = set()

    def has_marker(self, key: str) -> bool:
        return key in self._keys

    def set_marker(self, key: str) -> None:
        self._keys.add(key)

    def delete_marker(self, key: str) -> None:
        self._keys.discard(key)


class SqlMarkerStore:
    """Markers persisted as rows of the ``save_marker`` table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def has_marker(self, key: str) -> bool:
        with session_scope(self.engine) as session:
            return session.get(SaveMarker, key) is not None

    def set_marker(self, key: str) -> None:
        with session_scope(self.engine) as session:
            if session.get(SaveMarker, key) is None:
                session.add(SaveMarker(key=key))
                session.commit()
                logger.debug("Marker %s created", key)

    def delete_marker(self, key: str) -> None:
        with session_scope(self.engine) as session:
            marker = session.get(SaveMarker, key)
            if marker is not None:
                session.delete(marker)
                session.commit()
                logger.debug("Marker %s deleted", key)


__all__ = ["MarkerStore", "MemoryMarkerStore", "SqlMarkerStore", "marker_key"]
