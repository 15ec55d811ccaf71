"""Database model for advisory local save markers."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class SaveMarker(SQLModel, table=True):
    """Existence-only flag; the row carries no progress data."""

    __tablename__ = "save_marker"

    key: str = ORMField(primary_key=True)
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["SaveMarker"]
