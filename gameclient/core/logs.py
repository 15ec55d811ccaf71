"""Logging setup for the headless client."""

from __future__ import annotations

import logging
from typing import Optional

from .config import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a root handler at ``level`` (defaults to ``GAME_LOG_LEVEL``)."""

    resolved = (level or LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, resolved, logging.INFO), format=_FORMAT)
    # httpx logs every request at INFO; keep it quiet unless debugging.
    if resolved != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
