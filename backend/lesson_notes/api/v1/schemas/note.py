from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import Field, field_validator

from lesson_notes.core.models.base import AppBaseModel
from lesson_notes.core.models.note import ClassInfo, VocabularyItem  # noqa: TCH001


def _normalize_tags(v: list[str] | None) -> list[str] | None:
    if v is None:
        return v
    normalized: list[str] = []
    for tag in v:
        if tag and tag.strip() and tag.strip() not in normalized:
            normalized.append(tag.strip())
    return normalized


class NoteCreate(AppBaseModel):
    lesson_id: str = Field(..., min_length=1, description="Lesson the note is taken for")
    topic_id: str = Field(default="", description="Topic the lesson belongs to")
    title: str = Field(default="", max_length=255, description="Note title")
    content: str | None = Field(
        default=None,
        description="Markdown content; the generated template is used when omitted",
    )
    tags: list[str] = Field(default_factory=list, description="Ids of tags to attach")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _normalize_tags(v) or []


class NoteUpdate(AppBaseModel):
    """Student-editable fields. Lesson-derived fields are not accepted."""

    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        return _normalize_tags(v)


class NoteRead(AppBaseModel):
    id: str
    user_id: str
    lesson_id: str
    topic_id: str
    title: str
    content: str
    tags: list[str]
    class_info: ClassInfo
    vocabulary: list[VocabularyItem]
    created_at: datetime
    updated_at: datetime | None
    last_edited_at: datetime


class NoteTemplateRead(AppBaseModel):
    lesson_id: str | None = None
    template: str
