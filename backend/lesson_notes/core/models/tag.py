from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from lesson_notes.utils.ids import generate_tag_id

from .base import AppBaseModel, utc_now


class NoteTag(AppBaseModel):
    """User-scoped, color-coded label attachable to many notes."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=generate_tag_id)
    name: str = Field(..., min_length=1, max_length=50)
    color: str = Field(..., min_length=1, description="CSS color, e.g. #3b82f6")
    user_id: str
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("name", "color")
    @classmethod
    def strip_value(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Name and color are required")
        return stripped
