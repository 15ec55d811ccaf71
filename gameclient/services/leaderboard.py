"""Leaderboard submission and retrieval."""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from pydantic import ValidationError as SchemaError

from ..api_client import HttpJsonClient
from ..core.config import LEADERBOARD_ROWS
from ..core.errors import GameClientError
from ..models import LeaderboardEntry, LeaderboardResponse, ScoreSubmission
from .scenes import SceneDirector
from .session_store import SessionStore
from .tasks import BackgroundTasks

logger = logging.getLogger(__name__)

Row = Tuple[str, str, str]


def leaderboard_path(level_id: int) -> str:
    return f"/api/leaderboard/{int(level_id)}"


def top_rows(entries: Sequence[LeaderboardEntry], limit: int = LEADERBOARD_ROWS) -> List[Row]:
    """Rank, name and time text for the first ``limit`` entries.

    Works on a slice, so the caller's list keeps the backend order.
    """

    return [
        (f"{rank}.", entry.player_name, f"{entry.time_seconds:.3f}s")
        for rank, entry in enumerate(entries[: max(limit, 0)], start=1)
    ]


@dataclass
class LeaderboardView:
    """Plain data for the leaderboard panel."""

    level_id: int
    title: str
    entries: Optional[List[LeaderboardEntry]] = None
    rows: List[Row] = field(default_factory=list)
    stale: bool = False

    @property
    def warning(self) -> Optional[str]:
        if self.entries is None:
            return "No leaderboard data received"
        return None


class LeaderboardController:
    """Reads the username from the session store at call time, never caches it."""

    def __init__(
        self,
        http: HttpJsonClient,
        sessions: SessionStore,
        scenes: SceneDirector,
        tasks: BackgroundTasks,
        *,
        rows: int = LEADERBOARD_ROWS,
    ) -> None:
        self.http = http
        self.sessions = sessions
        self.scenes = scenes
        self.tasks = tasks
        self.rows = rows

    async def submit(self, level_id: int, time_seconds: float) -> bool:
        """Store a finished run; failures are logged and reported as False."""

        username = self.sessions.current_username()
        if not username:
            logger.warning("SubmitScore for level %s skipped: nobody is logged in", level_id)
            return False

        if not math.isfinite(time_seconds):
            logger.error("SubmitScore for level %s rejected: time %r is not finite", level_id, time_seconds)
            return False
        try:
            payload = ScoreSubmission(username=username, time_seconds=time_seconds)
            outcome = await self.http.post(
                leaderboard_path(level_id), payload, credential=self.sessions.current_credential()
            )
        except (SchemaError, GameClientError) as exc:
            logger.error("SubmitScore for level %s rejected locally: %s", level_id, exc)
            return False
        if not outcome.ok:
            logger.error("SubmitScore error: %s", outcome.describe())
            return False
        logger.info("Run stored for %s on level %s: %s", username, level_id, outcome.text)
        return True

    def submit_detached(self, level_id: int, time_seconds: float) -> asyncio.Task:
        return self.tasks.spawn(
            self.submit(level_id, time_seconds), name=f"leaderboard-submit:{level_id}"
        )

    async def fetch(self, level_id: int) -> Optional[List[LeaderboardEntry]]:
        """Ranked entries in backend order, ``[]`` when empty, None on failure."""

        credential = self.sessions.current_credential()
        if not credential:
            logger.warning("Leaderboard fetch for level %s without a session cookie", level_id)

        outcome = await self.http.get(leaderboard_path(level_id), credential=credential)
        try:
            response = outcome.parse(LeaderboardResponse)
        except GameClientError as exc:
            logger.error("Leaderboard error (%r): %s", exc, outcome.describe())
            return None
        if response.scores is None:
            logger.warning("No leaderboard data received for level %s", level_id)
            return None
        return [entry.model_copy(update={"level_id": response.level_id}) for entry in response.scores]

    async def show_board(
        self, level_id: int, final_time: float, limit: Optional[int] = None
    ) -> LeaderboardView:
        """Fetch the board for display; marked stale if the scene changed meanwhile."""

        generation = self.scenes.generation
        view = LeaderboardView(
            level_id=level_id,
            title=f"Level {level_id} - Leaderboard\nYour time: {final_time:.3f}s",
        )
        entries = await self.fetch(level_id)
        if not self.scenes.is_current(generation):
            logger.info("Leaderboard for level %s arrived after the scene changed", level_id)
            view.stale = True
            return view
        view.entries = entries
        if entries is not None:
            view.rows = top_rows(entries, self.rows if limit is None else limit)
        return view

    async def complete_run(self, level_id: int, final_time: float) -> LeaderboardView:
        """Submit in the background and show the current board."""

        self.submit_detached(level_id, final_time)
        return await self.show_board(level_id, final_time)


__all__ = [
    "LeaderboardController",
    "LeaderboardView",
    "leaderboard_path",
    "top_rows",
]
