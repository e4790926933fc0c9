from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from lesson_notes.utils.ids import generate_note_id

from .base import AppBaseModel, TimestampedModel, utc_now


class VocabularyItem(AppBaseModel):
    """Vocabulary item auto-extracted from a lesson."""

    model_config = ConfigDict(extra="ignore")

    word: str = ""
    translation: str = ""
    example_sentence: str | None = None
    audio_url: str | None = None


class ClassInfo(AppBaseModel):
    """Point-in-time copy of the metadata of the lesson a note belongs to."""

    model_config = ConfigDict(extra="ignore")

    lesson_title: str = ""
    lesson_date: str = ""
    topic_name: str = ""
    level: str = ""
    series_info: str | None = None


class Note(TimestampedModel):
    """Note domain model.

    ``content`` belongs to the student. ``class_info`` and ``vocabulary`` are
    denormalized from the lesson and replaced wholesale whenever the lesson is
    saved.
    """

    id: str = Field(default_factory=generate_note_id, description="Unique note identifier")
    user_id: str = Field(..., description="Owner of the note")
    lesson_id: str = Field(..., description="Lesson the note was taken for")
    topic_id: str = Field(default="", description="Topic the lesson belongs to")

    title: str = Field(default="")
    content: str = Field(default="", description="Markdown written by the student")
    tags: list[str] = Field(default_factory=list, description="Ids of the attached tags")

    class_info: ClassInfo = Field(default_factory=ClassInfo)
    vocabulary: list[VocabularyItem] = Field(default_factory=list)

    last_edited_at: datetime = Field(default_factory=utc_now)

    @field_validator("title", "content", "topic_id", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str]:
        """Drop blanks and duplicates while keeping the original order."""
        if not v:
            return []
        normalized: list[str] = []
        for tag in v:
            if isinstance(tag, str) and tag.strip() and tag.strip() not in normalized:
                normalized.append(tag.strip())
        return normalized

    # Keys written by other clients are kept through every save
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "examples": [
                {
                    "id": "note-1731060000000-k3j9x0a1b",
                    "userId": "5d2c2f9e-3c55-4b5e-9d6b-8f4f0e7f1a21",
                    "lessonId": "class:1731000000000",
                    "topicId": "greetings",
                    "title": "Greetings",
                    "content": "Remember: *goedemorgen* is only used before noon.",
                    "tags": ["tag-1731050000000-p0q1r2s3t"],
                    "classInfo": {
                        "lessonTitle": "Dutch Greetings",
                        "lessonDate": "2025-11-08T10:00:00+00:00",
                        "topicName": "Greetings",
                        "level": "A1",
                    },
                    "vocabulary": [{"word": "hallo", "translation": "hello"}],
                }
            ]
        },
    )
