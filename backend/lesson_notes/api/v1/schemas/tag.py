from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import Field

from lesson_notes.core.models.base import AppBaseModel


class TagCreate(AppBaseModel):
    name: str = Field(..., max_length=50, description="Tag label")
    color: str = Field(..., description="CSS color used for the badge")


class TagRead(AppBaseModel):
    id: str
    name: str
    color: str
    user_id: str
    created_at: datetime
