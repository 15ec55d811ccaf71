"""Signup and login against the game backend."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..api_client import HttpJsonClient, HttpOutcome
from ..core.errors import GameClientError, ValidationError
from ..models import AuthPayload, AuthResponse
from .progress import ProgressSyncController, ResumeOptions
from .session_store import SessionStore

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/auth/login"
SIGNUP_PATH = "/api/auth/signup"

MISSING_FIELDS_MESSAGE = "Please enter username and password."
NETWORK_ERROR_MESSAGE = "Network error. Please try again."
LOGIN_FAILED_MESSAGE = "Login failed. Check username/password."
SIGNUP_FAILED_MESSAGE = "Signup failed. Check username/password."


class AuthState(str, enum.Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


@dataclass(frozen=True)
class AuthResult:
    """What the login screen needs to render after an attempt."""

    state: AuthState
    message: str = ""
    username: Optional[str] = None
    options: Optional[ResumeOptions] = None
    stale: bool = False
    rejected_locally: bool = False

    @property
    def ok(self) -> bool:
        return (
            self.state is AuthState.AUTHENTICATED
            and not self.stale
            and not self.rejected_locally
        )


def normalize_credentials(username: Optional[str], password: Optional[str]) -> Tuple[str, str]:
    """Trim both fields; raise ValidationError when either ends up empty."""

    username = (username or "").strip()
    password = (password or "").strip()
    if not username or not password:
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    return username, password


class AuthController:
    """Drives the Idle/AwaitingResponse/Authenticated/Failed state machine.

    Every call is a fresh attempt. When attempts overlap, only the most
    recently started one may touch the session; earlier ones finishing
    later come back marked ``stale``.
    """

    def __init__(
        self,
        http: HttpJsonClient,
        sessions: SessionStore,
        progress: ProgressSyncController,
    ) -> None:
        self.http = http
        self.sessions = sessions
        self.progress = progress
        self.state = AuthState.IDLE
        self.message = ""
        self._attempt = 0

    async def login(self, username: str, password: str) -> AuthResult:
        return await self._authenticate(LOGIN_PATH, username, password, LOGIN_FAILED_MESSAGE)

    async def signup(self, username: str, password: str) -> AuthResult:
        return await self._authenticate(SIGNUP_PATH, username, password, SIGNUP_FAILED_MESSAGE)

    async def _authenticate(
        self, path: str, username: str, password: str, rejected_message: str
    ) -> AuthResult:
        try:
            username, password = normalize_credentials(username, password)
        except ValidationError as exc:
            logger.warning("Username or password is empty.")
            self.message = str(exc)
            return AuthResult(self.state, self.message, rejected_locally=True)

        self._attempt += 1
        attempt = self._attempt
        self.state = AuthState.AWAITING_RESPONSE
        self.message = ""

        outcome = await self.http.post(path, AuthPayload(username=username, password=password))

        if attempt != self._attempt:
            logger.info("Discarding superseded %s response for %s", path, username)
            return AuthResult(AuthState.FAILED, "", username, stale=True)

        if not outcome.ok:
            return self._fail(path, outcome, rejected_message)

        self._log_body(path, username, outcome)
        self.sessions.set_session(username, outcome.session_credential())
        self.state = AuthState.AUTHENTICATED
        logger.info("%s successful for user: %s", path, username)

        options = await self.progress.on_authenticated(username)
        if attempt != self._attempt:
            # A newer attempt started while the state fetch was in flight.
            return AuthResult(AuthState.AUTHENTICATED, "", username, options, stale=True)
        return AuthResult(self.state, self.message, username, options)

    def _fail(self, path: str, outcome: HttpOutcome, rejected_message: str) -> AuthResult:
        if outcome.is_transport_failure:
            logger.error("%s network error: %s", path, outcome.transport_error)
            self.message = NETWORK_ERROR_MESSAGE
        else:
            logger.warning("%s failed with status %s: %s", path, outcome.status_code, outcome.text)
            self.message = rejected_message
        self.state = AuthState.FAILED
        return AuthResult(self.state, self.message)

    @staticmethod
    def _log_body(path: str, username: str, outcome: HttpOutcome) -> None:
        try:
            body = outcome.parse(AuthResponse)
        except GameClientError:
            logger.debug("%s response for %s is not an auth envelope: %s", path, username, outcome.text)
            return
        if body.error:
            logger.warning("%s for %s succeeded with error field: %s", path, username, body.error)
        else:
            logger.debug("%s response: %s", path, body.message)


__all__ = [
    "AuthController",
    "AuthResult",
    "AuthState",
    "LOGIN_FAILED_MESSAGE",
    "LOGIN_PATH",
    "MISSING_FIELDS_MESSAGE",
    "NETWORK_ERROR_MESSAGE",
    "SIGNUP_FAILED_MESSAGE",
    "SIGNUP_PATH",
    "normalize_credentials",
]
