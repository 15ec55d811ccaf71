"""Client settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number") from exc


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


# Backend -------------------------------------------------------------------
API_BASE_URL = _env_str("GAME_API_BASE_URL", "http://localhost:4000").rstrip("/")
HTTP_TIMEOUT = _env_float("GAME_HTTP_TIMEOUT", 20.0)


# Scenes --------------------------------------------------------------------
FIRST_SCENE = _env_str("GAME_FIRST_SCENE", "1")
LANDING_SCENE = _env_str("GAME_LANDING_SCENE", "landingScene")


# Local persistence ---------------------------------------------------------
SAVE_KEY_PREFIX = _env_str("GAME_SAVE_KEY_PREFIX", "SaveData_")
DATA_DIR = Path(_env_str("GAME_DATA_DIR", "data"))


# Presentation and diagnostics ----------------------------------------------
LEADERBOARD_ROWS = _env_int("GAME_LEADERBOARD_ROWS", 5)
LOG_LEVEL = _env_str("GAME_LOG_LEVEL", "INFO").upper()


__all__ = [
    "API_BASE_URL",
    "DATA_DIR",
    "FIRST_SCENE",
    "HTTP_TIMEOUT",
    "LANDING_SCENE",
    "LEADERBOARD_ROWS",
    "LOG_LEVEL",
    "SAVE_KEY_PREFIX",
]
