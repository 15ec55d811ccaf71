"""Process-wide holder of the authenticated session."""

from __future__ import annotations

import logging
from typing import Optional

from ..models import Session

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns at most one :class:`Session`.

    Writes swap a single immutable reference, so a reader sees either the
    previous session or the new one in full, including its credential.
    """

    def __init__(self) -> None:
        self._session: Optional[Session] = None

    def set_session(self, username: str, credential: Optional[str] = None) -> Session:
        username = (username or "").strip()
        if not username:
            raise ValueError("username is required")
        previous = self._session
        self._session = Session(username=username, credential=credential or None)
        if previous is not None and previous.username != username:
            logger.info("Session replaced: %s -> %s", previous.username, username)
        else:
            logger.info("Session established for %s", username)
        return self._session

    def current(self) -> Optional[Session]:
        return self._session

    def current_username(self) -> Optional[str]:
        session = self._session
        return session.username if session else None

    def current_credential(self) -> Optional[str]:
        session = self._session
        return session.credential if session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None


__all__ = ["SessionStore"]
