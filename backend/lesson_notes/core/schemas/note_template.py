from __future__ import annotations

from pydantic import Field

from lesson_notes.core.models.base import AppBaseModel
from lesson_notes.core.models.note import VocabularyItem  # noqa: TCH001


class NoteTemplateData(AppBaseModel):
    """Lesson details used to pre-fill a new note. Every field is optional."""

    lesson_title: str | None = None
    lesson_date: str | None = None
    topic_name: str | None = None
    level: str | None = None
    series_info: str | None = None
    vocabulary: list[VocabularyItem] = Field(default_factory=list)
