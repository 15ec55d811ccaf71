"""Progress synchronisation: resumability, resume targets and checkpoints.

The backend's progress record is authoritative whenever it can be fetched.
The local save marker only says "this player has started a game on this
machine" and is consulted for the resume affordance, never for the resume
target, and never sent to the backend.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..api_client import HttpJsonClient
from ..core.config import FIRST_SCENE, SAVE_KEY_PREFIX
from ..core.errors import GameClientError
from ..models import CheckpointPayload, ProgressRecord
from .markers import MarkerStore, marker_key
from .scenes import SceneDirector
from .session_store import SessionStore
from .tasks import BackgroundTasks

logger = logging.getLogger(__name__)

STATE_PATH = "/api/game/state"
CHECKPOINT_PATH = "/api/game/checkpoint"


@dataclass(frozen=True)
class ResumeOptions:
    """Menu affordances computed right after authentication."""

    can_start: bool
    can_resume: bool
    has_local_marker: bool
    remote: Optional[ProgressRecord] = None

    @property
    def remote_scene(self) -> Optional[str]:
        return self.remote.last_checkpoint_scene if self.remote else None


class ProgressSyncController:
    def __init__(
        self,
        http: HttpJsonClient,
        sessions: SessionStore,
        markers: MarkerStore,
        scenes: SceneDirector,
        tasks: BackgroundTasks,
        *,
        first_scene: str = FIRST_SCENE,
        key_prefix: str = SAVE_KEY_PREFIX,
    ) -> None:
        self.http = http
        self.sessions = sessions
        self.markers = markers
        self.scenes = scenes
        self.tasks = tasks
        self.first_scene = first_scene
        self.key_prefix = key_prefix

    def _marker_key(self, username: str) -> str:
        return marker_key(username, self.key_prefix)

    async def fetch_state(self, username: str) -> Optional[ProgressRecord]:
        """Fetch ``username``'s progress; None means "no remote signal"."""

        outcome = await self.http.get(
            STATE_PATH,
            params={"username": username},
            credential=self.sessions.current_credential(),
        )
        try:
            record = outcome.parse(ProgressRecord)
        except GameClientError as exc:
            logger.warning("State fetch for %s failed (%r): %s", username, exc, outcome.describe())
            return None
        logger.debug(
            "State for %s: level=%s coins=%s lastScene=%s",
            username,
            record.level,
            record.coins,
            record.last_checkpoint_scene,
        )
        return record

    async def on_authenticated(self, username: str) -> ResumeOptions:
        """Combine the local marker and the remote checkpoint into menu options.

        A failed fetch only removes the remote signal; starting a new game
        stays available in every case.
        """

        has_local = self.markers.has_marker(self._marker_key(username))
        remote = await self.fetch_state(username)
        remote_has_checkpoint = bool(remote and remote.has_checkpoint)
        if has_local and remote is not None and not remote_has_checkpoint:
            logger.info(
                "Local marker for %s but the backend reports no checkpoint; resume will use %s",
                username,
                self.first_scene,
            )
        return ResumeOptions(
            can_start=True,
            can_resume=has_local or remote_has_checkpoint,
            has_local_marker=has_local,
            remote=remote,
        )

    async def start_new_game(self) -> Optional[str]:
        """Reset local progress, record the first scene remotely and load it.

        The transition happens whatever the checkpoint write returns.
        """

        username = self.sessions.current_username()
        if not username:
            logger.warning("Tried to start a game without login.")
            return None

        key = self._marker_key(username)
        self.markers.delete_marker(key)
        self.markers.set_marker(key)

        record = await self.write_checkpoint(self.first_scene)
        if record is None:
            logger.info("Starting %s without a confirmed remote checkpoint", username)
        return self.scenes.load(self.first_scene)

    async def resume(self) -> Optional[str]:
        """Load the scene of the freshest remote checkpoint, or the first scene."""

        username = self.sessions.current_username()
        if not username:
            logger.warning("Tried to resume a game without login.")
            return None

        record = await self.fetch_state(username)
        if record is not None and record.has_checkpoint:
            target = record.last_checkpoint_scene
        else:
            target = self.first_scene
            logger.info("No remote checkpoint for %s; resuming at %s", username, target)
        return self.scenes.load(target)

    async def write_checkpoint(self, scene: str) -> Optional[ProgressRecord]:
        """Record ``scene`` as the player's checkpoint; never raises."""

        username = self.sessions.current_username()
        if not username:
            logger.info("No logged-in user, skipping checkpoint for scene %s.", scene)
            return None

        payload = CheckpointPayload(username=username, last_scene=scene)
        outcome = await self.http.post(
            CHECKPOINT_PATH, payload, credential=self.sessions.current_credential()
        )
        try:
            record = outcome.parse(ProgressRecord)
        except GameClientError as exc:
            logger.warning(
                "Checkpoint %s for %s not confirmed (%r): %s", scene, username, exc, outcome.describe()
            )
            return None
        logger.info("Checkpoint %s saved for %s", scene, username)
        return record

    def scene_entered(self, scene: str) -> Optional[asyncio.Task]:
        """Scene-entry hook: note the active scene and save it in the background."""

        self.scenes.mark_entered(scene)
        if not self.sessions.is_authenticated:
            logger.info("No logged-in user, skipping checkpoint for scene %s.", scene)
            return None
        return self.tasks.spawn(self.write_checkpoint(scene), name=f"checkpoint:{scene}")


__all__ = ["CHECKPOINT_PATH", "ProgressSyncController", "ResumeOptions", "STATE_PATH"]
