"""Local database configuration for advisory save markers."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from .config import DATA_DIR

_DB_NAME = "client.db"


def _create_tables(engine: Engine) -> None:
    from ..models import marker  # noqa: F401 - ensure SaveMarker is registered with SQLModel

    SQLModel.metadata.create_all(engine)


def create_marker_engine(data_dir: Optional[Path] = None) -> Engine:
    """Create the SQLite engine backing local save markers and its tables."""

    target = Path(data_dir) if data_dir is not None else DATA_DIR
    target.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        f"sqlite:///{target / _DB_NAME}", connect_args={"check_same_thread": False}
    )
    _create_tables(engine)
    return engine


def memory_engine() -> Engine:
    """Engine for a throwaway in-memory database."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _create_tables(engine)
    return engine


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Yield a database session bound to ``engine``."""

    with Session(engine) as session:
        yield session


__all__ = ["create_marker_engine", "memory_engine", "session_scope"]
