"""Wire models for remote game progress."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProgressRecord(BaseModel):
    """Authoritative server-side progress for one player.

    ``last_checkpoint_scene`` travels as ``lastScene``; an empty string on
    the wire means no checkpoint has been written yet.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: str
    level: int = Field(default=0, ge=0)
    coins: int = Field(default=0, ge=0)
    last_checkpoint_scene: Optional[str] = Field(default=None, alias="lastScene")

    @field_validator("last_checkpoint_scene", mode="before")
    @classmethod
    def _blank_scene_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_checkpoint(self) -> bool:
        return bool(self.last_checkpoint_scene)


class CheckpointPayload(BaseModel):
    """Body of ``POST /api/game/checkpoint``."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    last_scene: str = Field(alias="lastScene")


__all__ = ["CheckpointPayload", "ProgressRecord"]
