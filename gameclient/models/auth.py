"""Wire models for the signup and login endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class AuthPayload(BaseModel):
    """Body of ``POST /api/auth/signup`` and ``POST /api/auth/login``."""

    username: str
    password: str


class AuthResponse(BaseModel):
    """Success body of the auth endpoints; every field is advisory."""

    message: Optional[str] = None
    username: Optional[str] = None
    error: Optional[str] = None


__all__ = ["AuthPayload", "AuthResponse"]
