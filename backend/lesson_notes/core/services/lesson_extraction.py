from __future__ import annotations

from typing import TYPE_CHECKING

from lesson_notes.core.models.base import utc_now
from lesson_notes.core.models.note import ClassInfo, VocabularyItem

if TYPE_CHECKING:
    from lesson_notes.core.models.lesson import Lesson


def extract_class_info(lesson: Lesson) -> ClassInfo:
    """Copy the lesson metadata a note displays.

    A lesson without ``createdAt`` is dated now.
    """
    return ClassInfo(
        lesson_title=lesson.title or "",
        lesson_date=lesson.created_at or utc_now().isoformat(),
        topic_name=lesson.topic or "",
        level=lesson.level or "",
        series_info=lesson.series or None,
    )


def extract_vocabulary(lesson: Lesson) -> list[VocabularyItem]:
    """Flatten the words of every vocabulary page, in page then word order."""
    vocabulary: list[VocabularyItem] = []
    for page in lesson.pages:
        for word in page.vocabulary_words():
            vocabulary.append(
                VocabularyItem(
                    word=word.dutch or "",
                    translation=word.english or "",
                    example_sentence=word.example or None,
                    audio_url=word.audio_url or None,
                )
            )
    return vocabulary
