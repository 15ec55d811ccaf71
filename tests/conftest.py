"""Shared fixtures: an in-process FastAPI backend speaking the game wire contract."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

import httpx
import pytest
from fastapi import APIRouter, FastAPI, HTTPException, Request, Response

from gameclient import build_context
from gameclient.services import MemoryMarkerStore, RecordingSceneLoader

BASE_URL = "http://testserver"
SESSION_COOKIE = "sid=abc123"


@dataclass
class BackendState:
    users: Dict[str, str] = field(default_factory=dict)
    progress: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    scores: Dict[int, List[Dict[str, Any]]] = field(default_factory=dict)
    bodies: List[tuple] = field(default_factory=list)
    cookies: List[tuple] = field(default_factory=list)
    set_cookie: bool = True
    raw_scores: Optional[Dict[int, Any]] = None


def create_backend(state: BackendState) -> FastAPI:
    router = APIRouter(prefix="/api")

    def _record(request: Request, body: Optional[Dict[str, Any]] = None) -> None:
        state.cookies.append((request.method, request.url.path, request.headers.get("cookie")))
        if body is not None:
            state.bodies.append((request.url.path, body))

    @router.post("/auth/signup")
    def signup(body: Dict[str, Any], request: Request):
        _record(request, body)
        username = body.get("username") or ""
        if username in state.users:
            raise HTTPException(409, "User already exists")
        state.users[username] = body.get("password") or ""
        return {"message": "User created", "username": username}

    @router.post("/auth/login")
    def login(body: Dict[str, Any], request: Request, response: Response):
        _record(request, body)
        username = body.get("username") or ""
        if state.users.get(username) != body.get("password"):
            raise HTTPException(401, "Invalid credentials")
        if state.set_cookie:
            name, value = SESSION_COOKIE.split("=", 1)
            response.set_cookie(name, value, httponly=True)
        return {"message": "Logged in", "username": username}

    @router.get("/game/state")
    def game_state(username: str, request: Request):
        _record(request)
        record = state.progress.get(username)
        if record is None:
            raise HTTPException(404, "No progress")
        return record

    @router.post("/game/checkpoint")
    def checkpoint(body: Dict[str, Any], request: Request):
        _record(request, body)
        username = body["username"]
        record = state.progress.setdefault(
            username, {"username": username, "level": 0, "coins": 0, "lastScene": None}
        )
        record["lastScene"] = body["lastScene"]
        return record

    @router.post("/leaderboard/{level_id}")
    def submit(level_id: int, body: Dict[str, Any], request: Request):
        _record(request, body)
        entries = state.scores.setdefault(level_id, [])
        entries.append(
            {
                "playerName": body["username"],
                "timeSec": body["timeSec"],
                "createdAt": "2026-10-19T12:00:00Z",
            }
        )
        entries.sort(key=lambda entry: entry["timeSec"])
        return {"ok": True}

    @router.get("/leaderboard/{level_id}")
    def leaderboard(level_id: int, request: Request):
        _record(request)
        if state.raw_scores is not None and level_id in state.raw_scores:
            return state.raw_scores[level_id]
        return {"levelId": level_id, "scores": state.scores.get(level_id, [])}

    app = FastAPI()
    app.include_router(router)
    return app


class ControlledTransport(httpx.AsyncBaseTransport):
    """Routes to the in-process app, with switches for outages and held requests."""

    def __init__(self, inner: httpx.AsyncBaseTransport) -> None:
        self.inner = inner
        self.down: Set[str] = set()
        self.hold: Dict[str, asyncio.Event] = {}

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if "*" in self.down or path in self.down:
            raise httpx.ConnectError("backend unreachable", request=request)
        for marker, event in list(self.hold.items()):
            if marker == path or marker.encode() in request.content:
                await event.wait()
        return await self.inner.handle_async_request(request)


@pytest.fixture
def backend() -> BackendState:
    return BackendState(users={"alice": "wonderland", "bob": "builder"})


@pytest.fixture
def transport(backend: BackendState) -> ControlledTransport:
    return ControlledTransport(httpx.ASGITransport(app=create_backend(backend)))


@pytest.fixture
def scene_loader() -> RecordingSceneLoader:
    return RecordingSceneLoader()


@pytest.fixture
def ctx(transport: ControlledTransport, scene_loader: RecordingSceneLoader):
    return build_context(
        base_url=BASE_URL,
        transport=transport,
        scene_loader=scene_loader,
        markers=MemoryMarkerStore(),
        first_scene="1",
        landing_scene="landingScene",
        leaderboard_rows=5,
    )


def run(coro):
    return asyncio.run(coro)
