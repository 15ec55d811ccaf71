"""In-memory record of the authenticated player."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Session:
    """Authenticated username plus the optional opaque session credential."""

    username: str
    credential: Optional[str] = None


__all__ = ["Session"]
