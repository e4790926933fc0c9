from __future__ import annotations

from lesson_notes.core.models.base import AppBaseModel
from lesson_notes.core.schemas.note_sync import NoteSyncResult  # noqa: TCH001


class LessonSaveResponse(AppBaseModel):
    id: str
    success: bool = True
    notes_synced: int | None = None
    sync: NoteSyncResult | None = None
