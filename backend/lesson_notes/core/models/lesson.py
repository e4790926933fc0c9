from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from .base import AppBaseModel


class PageType(str, Enum):
    """Exercise page types a lesson can be composed of."""

    INTRO = "intro"
    VOCABULARY = "vocabulary"
    FLASHCARDS = "flashcards"
    MULTIPLE_CHOICE = "multipleChoice"
    FILL_IN_BLANK = "fillInBlank"
    MATCHING = "matching"
    WORD_SCRAMBLE = "wordScramble"
    LISTENING = "listening"
    DRAG_DROP = "dragDrop"
    SPEED_ROUND = "speedRound"


class VocabularyWord(AppBaseModel):
    """A word on a vocabulary page as written by the lesson author."""

    model_config = ConfigDict(extra="allow")

    dutch: str | None = None
    english: str | None = None
    example: str | None = None
    audio_url: str | None = None


class LessonPage(AppBaseModel):
    """A single page of a lesson.

    ``content`` is kept as the raw mapping; its shape depends on ``type``.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    type: str
    title: str | None = None
    content: Any = None

    def vocabulary_words(self) -> list[VocabularyWord]:
        """Return the words of a vocabulary page, or nothing for other pages."""
        if self.type != PageType.VOCABULARY.value or not isinstance(self.content, dict):
            return []
        words = self.content.get("words") or []
        if not isinstance(words, list):
            return []
        return [VocabularyWord.model_validate(w) for w in words if isinstance(w, dict)]


class Lesson(AppBaseModel):
    """Authored lesson (a "class" in the key space).

    Owned by the authoring UI; unknown keys are preserved verbatim.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    title: str | None = None
    description: str | None = None
    topic: str | None = None
    level: str | None = None
    series: str | None = None
    day_id: str | None = None
    pages: list[LessonPage] = Field(default_factory=list)

    created_by: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("pages", mode="before")
    @classmethod
    def none_to_empty(cls, v: list | None) -> list:
        return v or []


class VocabularyEntry(AppBaseModel):
    """Word in the shared vocabulary library, adopted from a lesson."""

    model_config = ConfigDict(extra="allow")

    id: str
    dutch: str = ""
    english: str = ""
    example: str = ""
    audio_url: str = ""
    lesson_id: str | None = None
    created_by: str | None = None
    created_at: str | None = None
