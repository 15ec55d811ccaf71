"""Service layer: session, progress, leaderboard and timing controllers."""

from .auth import AuthController, AuthResult, AuthState, normalize_credentials
from .leaderboard import LeaderboardController, LeaderboardView, leaderboard_path, top_rows
from .markers import MarkerStore, MemoryMarkerStore, SqlMarkerStore, marker_key
from .progress import ProgressSyncController, ResumeOptions
from .scenes import CallbackSceneLoader, RecordingSceneLoader, SceneDirector, SceneLoader
from .session_store import SessionStore
from .tasks import BackgroundTasks
from .timer import RunGate, RunTimer, format_elapsed

__all__ = [
    "AuthController",
    "AuthResult",
    "AuthState",
    "BackgroundTasks",
    "CallbackSceneLoader",
    "LeaderboardController",
    "LeaderboardView",
    "MarkerStore",
    "MemoryMarkerStore",
    "ProgressSyncController",
    "RecordingSceneLoader",
    "ResumeOptions",
    "RunGate",
    "RunTimer",
    "SceneDirector",
    "SceneLoader",
    "SessionStore",
    "SqlMarkerStore",
    "format_elapsed",
    "leaderboard_path",
    "marker_key",
    "normalize_credentials",
    "top_rows",
]
