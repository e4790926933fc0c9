from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lesson_notes.background import sync_notes_for_lesson
from lesson_notes.core.models.base import utc_now
from lesson_notes.core.models.lesson import Lesson, VocabularyEntry
from lesson_notes.core.repositories import keys
from lesson_notes.core.schemas.lesson_import import parse_lesson_import
from lesson_notes.core.schemas.note_sync import NoteSyncResult
from lesson_notes.utils.ids import generate_lesson_id, generate_vocabulary_id
from lesson_notes.utils.logging import get_logger

if TYPE_CHECKING:
    from uuid import UUID

    from lesson_notes.core.repositories.lesson_repository import LessonRepository
    from lesson_notes.core.repositories.note_repository import NoteRepository

logger = get_logger(__name__)


class LessonService:
    """Lesson persistence; every save of an existing lesson re-syncs its notes."""

    def __init__(self, lessons: LessonRepository, notes: NoteRepository) -> None:
        self._lessons = lessons
        self._notes = notes

    async def get_lesson(self, lesson_id: str) -> Lesson | None:
        return await self._lessons.get(lesson_id)

    async def list_lessons(self) -> list[Lesson]:
        return await self._lessons.list()

    async def delete_lesson(self, lesson_id: str) -> bool:
        """Delete a lesson. Notes taken for it are kept with their last copy."""
        if await self._lessons.get(lesson_id) is None:
            return False
        await self._lessons.delete(lesson_id)
        return True

    async def save_lesson(self, payload: dict[str, Any], user_id: str | UUID) -> tuple[Lesson, NoteSyncResult | None]:
        """Create a lesson, or replace it when the payload carries an id.

        Replacing a lesson runs the note sync before returning. Returns the
        stored lesson and the sync outcome (None for a new lesson). Raises
        ValueError for an id outside the ``class:`` key space.
        """
        is_update = bool(payload.get("id"))
        if is_update and not keys.is_lesson_id(str(payload["id"])):
            raise ValueError(f"Invalid lesson id: {payload['id']}")
        now = utc_now().isoformat()
        created_at = now
        if is_update:
            previous = await self._lessons.get(payload["id"])
            if previous is not None and previous.created_at:
                created_at = previous.created_at

        lesson = Lesson.model_validate(
            {
                **payload,
                "id": payload.get("id") or generate_lesson_id(),
                "createdBy": str(user_id),
                "createdAt": created_at,
                "updatedAt": now,
            }
        )
        await self._lessons.save(lesson)
        await self._adopt_vocabulary(lesson, str(user_id))

        if not is_update:
            logger.info("Created lesson %s", lesson.id)
            return lesson, None
        return lesson, await self.sync_notes(lesson)

    async def import_lesson(self, data: Any, user_id: str | UUID) -> tuple[Lesson, NoteSyncResult | None]:
        """Validate an imported lesson document and save it as a new lesson."""
        imported = parse_lesson_import(data).to_lesson()
        payload = imported.model_dump(mode="json", by_alias=True, exclude_none=True)
        payload.pop("id", None)
        return await self.save_lesson(payload, user_id)

    async def update_lesson(self, lesson_id: str, changes: dict[str, Any]) -> tuple[Lesson, NoteSyncResult] | None:
        """Merge changes into a stored lesson and re-sync its notes.

        Returns None when the lesson does not exist and raises ValueError for
        an id outside the ``class:`` key space.
        """
        if not keys.is_lesson_id(lesson_id):
            raise ValueError(f"Invalid lesson id: {lesson_id}")
        existing = await self._lessons.get(lesson_id)
        if existing is None:
            return None

        merged = {
            **existing.model_dump(mode="json", by_alias=True, exclude_none=True),
            **changes,
            "id": lesson_id,
            "updatedAt": utc_now().isoformat(),
        }
        lesson = Lesson.model_validate(merged)
        await self._lessons.save(lesson)
        return lesson, await self.sync_notes(lesson)

    async def sync_notes(self, lesson: Lesson) -> NoteSyncResult:
        """Run the note sync for a lesson and log its outcome."""
        result = await sync_notes_for_lesson(lesson_id=lesson.id or "", lesson=lesson, repo=self._notes)
        if result.success:
            logger.info("Note sync completed: %d notes updated", result.updated_count)
        else:
            logger.error("Note sync failed: %s", result.error)
        return result

    async def _adopt_vocabulary(self, lesson: Lesson, user_id: str) -> int:
        """Add the lesson's words to the shared library, skipping known pairs.

        A word is known when a library entry has the same Dutch and English
        text, ignoring case.
        """
        words = [w for page in lesson.pages for w in page.vocabulary_words() if w.dutch and w.english]
        if not words:
            return 0

        known = {(v.dutch.lower(), v.english.lower()) for v in await self._lessons.list_vocabulary()}
        adopted = 0
        for word in words:
            pair = (word.dutch.lower(), word.english.lower())
            if pair in known:
                continue
            entry = VocabularyEntry(
                id=generate_vocabulary_id(word.dutch),
                dutch=word.dutch,
                english=word.english,
                example=word.example or "",
                audio_url=word.audio_url or "",
                lesson_id=lesson.id,
                created_by=user_id,
                created_at=utc_now().isoformat(),
            )
            await self._lessons.save_vocabulary(entry)
            known.add(pair)
            adopted += 1

        if adopted:
            logger.info("Adopted %d vocabulary words from lesson %s", adopted, lesson.id)
        return adopted
