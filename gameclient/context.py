"""Process-wide root context.

Built once at process start and handed to every screen that needs it.
Screens recreated on a scene reload receive the same context, so exactly
one session store, marker store and task set exist for the whole run.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from .api_client import HttpJsonClient
from .core.config import API_BASE_URL, FIRST_SCENE, HTTP_TIMEOUT, LANDING_SCENE, LEADERBOARD_ROWS
from .core.database import create_marker_engine
from .services import (
    AuthController,
    BackgroundTasks,
    LeaderboardController,
    LeaderboardView,
    MarkerStore,
    ProgressSyncController,
    RecordingSceneLoader,
    RunGate,
    RunTimer,
    SceneDirector,
    SceneLoader,
    SessionStore,
    SqlMarkerStore,
)

logger = logging.getLogger(__name__)


@dataclass
class GameContext:
    http: HttpJsonClient
    sessions: SessionStore
    markers: MarkerStore
    scenes: SceneDirector
    tasks: BackgroundTasks
    timer: RunTimer
    gate: RunGate
    progress: ProgressSyncController
    auth: AuthController
    leaderboard: LeaderboardController

    def rebind_scene_controllers(self) -> None:
        """Rebuild the per-scene controllers against the surviving stores.

        The previous controller objects are dropped; anything wired to the
        UI must read them from the context again.
        """

        first_scene = self.progress.first_scene
        key_prefix = self.progress.key_prefix
        rows = self.leaderboard.rows
        self.progress = ProgressSyncController(
            self.http,
            self.sessions,
            self.markers,
            self.scenes,
            self.tasks,
            first_scene=first_scene,
            key_prefix=key_prefix,
        )
        self.auth = AuthController(self.http, self.sessions, self.progress)
        self.leaderboard = LeaderboardController(
            self.http, self.sessions, self.scenes, self.tasks, rows=rows
        )
        logger.debug("Scene controllers rebound for %s", self.sessions.current_username())

    def scene_loaded(self, scene: str) -> Optional[asyncio.Task]:
        """Scene-entry hook: arm a new timed run and checkpoint the scene."""

        self.gate.reset()
        return self.progress.scene_entered(scene)

    async def finish_level(self, level_id: int) -> Optional[LeaderboardView]:
        """End-gate hook; None when this run was already finished or never started."""

        final_time = self.gate.enter_end()
        if final_time is None:
            return None
        return await self.leaderboard.complete_run(level_id, final_time)

    async def aclose(self) -> None:
        await self.tasks.drain()


def build_context(
    *,
    base_url: str = API_BASE_URL,
    timeout: float = HTTP_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    scene_loader: Optional[SceneLoader] = None,
    markers: Optional[MarkerStore] = None,
    data_dir: Optional[Path] = None,
    first_scene: str = FIRST_SCENE,
    landing_scene: str = LANDING_SCENE,
    leaderboard_rows: int = LEADERBOARD_ROWS,
) -> GameContext:
    """Wire every collaborator of the client core."""

    http = HttpJsonClient(base_url, timeout=timeout, transport=transport)
    sessions = SessionStore()
    if markers is None:
        markers = SqlMarkerStore(create_marker_engine(data_dir))
    scenes = SceneDirector(scene_loader or RecordingSceneLoader(), landing_scene=landing_scene)
    tasks = BackgroundTasks()
    timer = RunTimer()
    progress = ProgressSyncController(
        http, sessions, markers, scenes, tasks, first_scene=first_scene
    )
    return GameContext(
        http=http,
        sessions=sessions,
        markers=markers,
        scenes=scenes,
        tasks=tasks,
        timer=timer,
        gate=RunGate(timer),
        progress=progress,
        auth=AuthController(http, sessions, progress),
        leaderboard=LeaderboardController(
            http, sessions, scenes, tasks, rows=leaderboard_rows
        ),
    )


__all__ = ["GameContext", "build_context"]
