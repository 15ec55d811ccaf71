"""Wire models for leaderboard submission and retrieval."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LeaderboardEntry(BaseModel):
    """One ranked row as returned by the backend."""

    model_config = ConfigDict(populate_by_name=True)

    level_id: int = Field(default=0, alias="levelId")
    player_name: str = Field(alias="playerName")
    time_seconds: float = Field(alias="timeSec", ge=0)
    created_at: Optional[str] = Field(default=None, alias="createdAt")


class LeaderboardResponse(BaseModel):
    """Body of ``GET /api/leaderboard/{levelId}``.

    ``scores`` keeps the backend's ranking order untouched.
    """

    model_config = ConfigDict(populate_by_name=True)

    level_id: int = Field(alias="levelId")
    scores: Optional[List[LeaderboardEntry]] = None


class ScoreSubmission(BaseModel):
    """Body of ``POST /api/leaderboard/{levelId}``."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    time_seconds: float = Field(alias="timeSec", ge=0)


__all__ = ["LeaderboardEntry", "LeaderboardResponse", "ScoreSubmission"]
