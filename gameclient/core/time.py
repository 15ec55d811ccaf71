"""Timestamps for locally persisted client records."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware "now", used as the creation time of save markers."""

    return datetime.now(timezone.utc)


__all__ = ["utcnow"]
