"""Data model exports."""

from .auth import AuthPayload, AuthResponse
from .leaderboard import LeaderboardEntry, LeaderboardResponse, ScoreSubmission
from .marker import SaveMarker
from .progress import CheckpointPayload, ProgressRecord
from .session import Session

__all__ = [
    "AuthPayload",
    "AuthResponse",
    "CheckpointPayload",
    "LeaderboardEntry",
    "LeaderboardResponse",
    "ProgressRecord",
    "SaveMarker",
    "ScoreSubmission",
    "Session",
]
