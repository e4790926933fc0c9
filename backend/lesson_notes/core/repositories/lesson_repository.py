from __future__ import annotations

from typing import TYPE_CHECKING

from lesson_notes.core.models.lesson import Lesson, VocabularyEntry
from lesson_notes.core.repositories import keys

if TYPE_CHECKING:
    from lesson_notes.core.repositories.kv_store import KVStore


class LessonRepository:
    """Lessons and the shared vocabulary library.

    Lesson ids already contain the ``class:`` prefix and are used as keys as-is.
    Ids outside that key space are never read, written or deleted.
    """

    def __init__(self, store: KVStore) -> None:
        self._store = store

    async def get(self, lesson_id: str) -> Lesson | None:
        if not keys.is_lesson_id(lesson_id):
            return None
        data = await self._store.get(lesson_id)
        if not data:
            return None
        return Lesson.model_validate(data)

    async def save(self, lesson: Lesson) -> Lesson:
        if not lesson.id or not keys.is_lesson_id(lesson.id):
            raise ValueError(f"Invalid lesson id: {lesson.id}")
        await self._store.set(lesson.id, lesson.to_document())
        return lesson

    async def delete(self, lesson_id: str) -> None:
        if not keys.is_lesson_id(lesson_id):
            return
        await self._store.delete(lesson_id)

    async def list(self) -> list[Lesson]:
        rows = await self._store.get_by_prefix(keys.LESSON_PREFIX)
        return [Lesson.model_validate(row) for row in rows if row]

    async def list_vocabulary(self) -> list[VocabularyEntry]:
        rows = await self._store.get_by_prefix(keys.VOCAB_PREFIX)
        return [VocabularyEntry.model_validate(row) for row in rows if isinstance(row, dict)]

    async def save_vocabulary(self, entry: VocabularyEntry) -> None:
        await self._store.set(entry.id, entry.to_document())
