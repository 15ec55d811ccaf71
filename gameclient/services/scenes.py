"""Scene-transition collaborator and active-scene bookkeeping."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from ..core.config import LANDING_SCENE

logger = logging.getLogger(__name__)


class SceneLoader(Protocol):
    def load_scene(self, identifier: str) -> None: ...


class CallbackSceneLoader:
    """Adapts a plain callable to :class:`SceneLoader`."""

    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def load_scene(self, identifier: str) -> None:
        self._callback(identifier)


class RecordingSceneLoader:
    """Keeps every requested scene; used by the headless CLI and tests."""

    def __init__(self) -> None:
        self.loaded: List[str] = []

    def load_scene(self, identifier: str) -> None:
        self.loaded.append(identifier)

    @property
    def last(self) -> Optional[str]:
        return self.loaded[-1] if self.loaded else None


class SceneDirector:
    """Front for the scene loader that tracks which scene is active.

    ``generation`` increases on every transition. An async flow that
    captured the generation before awaiting can compare it afterwards and
    drop results that belong to a scene the player already left.
    """

    def __init__(self, loader: SceneLoader, landing_scene: str = LANDING_SCENE) -> None:
        self.loader = loader
        self.landing_scene = landing_scene
        self.current_scene: Optional[str] = None
        self.generation = 0

    def load(self, identifier: str) -> str:
        """Transition to ``identifier``; a reload of the active scene counts too."""

        logger.info("Loading scene %s", identifier)
        self.current_scene = identifier
        self.generation += 1
        self.loader.load_scene(identifier)
        return identifier

    def mark_entered(self, identifier: str) -> None:
        """Scene-entry report; the scene this director just loaded is not a new transition."""

        if identifier != self.current_scene:
            self.current_scene = identifier
            self.generation += 1

    def return_to_menu(self) -> str:
        return self.load(self.landing_scene)

    def is_current(self, generation: int) -> bool:
        return generation == self.generation


__all__ = ["CallbackSceneLoader", "RecordingSceneLoader", "SceneDirector", "SceneLoader"]
