"""
Game API Client
JSON-over-HTTP transport with uniform outcome classification.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from .core.config import API_BASE_URL, HTTP_TIMEOUT
from .core.errors import (
    ApplicationError,
    GameClientError,
    ParseError,
    TransportError,
    ValidationError,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


@dataclass
class HttpOutcome:
    """Result of one request: transport failure, application failure or success.

    ``status_code`` is None exactly when no response arrived. ``text`` keeps
    the raw body of any received response for diagnostics.
    """

    method: str
    url: str
    status_code: Optional[int] = None
    data: Any = None
    text: str = ""
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    transport_error: Optional[str] = None

    @property
    def is_transport_failure(self) -> bool:
        return self.status_code is None

    @property
    def ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code <= 299

    @property
    def is_application_failure(self) -> bool:
        return self.status_code is not None and not self.ok

    def error(self) -> Optional[GameClientError]:
        """Return the classified failure, or None for a 2xx response."""

        if self.is_transport_failure:
            return TransportError(self.transport_error or "no response")
        if not self.ok:
            return ApplicationError(self.status_code, self.text)
        return None

    def raise_for_outcome(self) -> None:
        exc = self.error()
        if exc is not None:
            raise exc

    def parse(self, model: Type[M]) -> M:
        """Validate a 2xx body against ``model``.

        Raises the classified failure for non-2xx outcomes and ParseError
        when the body does not match the schema.
        """

        self.raise_for_outcome()
        if not isinstance(self.data, dict):
            raise ParseError(f"{self.method} {self.url}: expected a JSON object", self.text)
        try:
            return model.model_validate(self.data)
        except SchemaError as exc:
            raise ParseError(f"{self.method} {self.url}: {exc.error_count()} schema error(s)", self.text) from exc

    def session_credential(self) -> Optional[str]:
        """Session token from ``Set-Cookie``, cut at the first ``;``."""

        for raw in self.headers.get_list("set-cookie"):
            token = raw.split(";", 1)[0].strip()
            if token:
                return token
        return None

    def describe(self) -> str:
        """One-line summary used in failure logs."""

        status = "no response" if self.status_code is None else f"HTTP {self.status_code}"
        return f"{self.method} {self.url}: {status} - {self.transport_error} - {self.text}"


class HttpJsonClient:
    """Issues JSON requests against the game backend.

    A fresh ``httpx.AsyncClient`` is opened per request so no cookie jar
    survives between calls; the session credential is only ever attached
    when the caller passes it. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        *,
        timeout: float = HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self, method: str, credential: Optional[str]) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if method == "POST":
            headers.update(JSON_HEADERS)
        if credential:
            headers["Cookie"] = credential
        return headers

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        credential: Optional[str] = None,
    ) -> HttpOutcome:
        """Send one request and classify what came back.

        The body is encoded before any I/O; a body that is not strict JSON
        (NaN, infinities, unsupported types) raises ValidationError and no
        request is issued.
        """

        method = method.upper()
        url = f"{self.base_url}{path}"
        if isinstance(body, BaseModel):
            body = body.model_dump(by_alias=True)
        content: Optional[bytes] = None
        if body is not None:
            try:
                content = json.dumps(body, allow_nan=False).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"{method} {url}: body is not valid JSON: {exc}") from exc
        headers = self._headers(method, credential)
        if content is not None:
            headers["Content-Type"] = "application/json"

        outcome = HttpOutcome(method=method, url=url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.request(
                    method,
                    url,
                    content=content,
                    params=params,
                    headers=headers,
                )
        except httpx.RequestError as exc:
            outcome.transport_error = f"{type(exc).__name__}: {exc}"
            logger.debug("%s %s failed before a response: %s", method, url, outcome.transport_error)
            return outcome

        outcome.status_code = r.status_code
        outcome.text = r.text
        outcome.headers = r.headers
        if r.content:
            try:
                outcome.data = r.json()
            except ValueError:
                outcome.data = None
        logger.debug("%s %s -> %s", method, url, r.status_code)
        return outcome

    async def get(
        self,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        credential: Optional[str] = None,
    ) -> HttpOutcome:
        return await self.request("GET", path, params=params, credential=credential)

    async def post(
        self, path: str, body: Any, *, credential: Optional[str] = None
    ) -> HttpOutcome:
        return await self.request("POST", path, body, credential=credential)


__all__ = ["HttpJsonClient", "HttpOutcome", "JSON_HEADERS"]
