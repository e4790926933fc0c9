from __future__ import annotations

from typing import TYPE_CHECKING

from lesson_notes.core.models.base import utc_now
from lesson_notes.core.models.note import Note
from lesson_notes.core.schemas.note_template import NoteTemplateData
from lesson_notes.core.services.lesson_extraction import extract_class_info, extract_vocabulary
from lesson_notes.core.services.note_template import generate_note_template
from lesson_notes.core.services.search_service import filter_notes
from lesson_notes.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from lesson_notes.core.models.lesson import Lesson
    from lesson_notes.core.repositories.lesson_repository import LessonRepository
    from lesson_notes.core.repositories.note_repository import NoteRepository

logger = get_logger(__name__)


class LessonNotFoundError(LookupError):
    """Raised when a note is created for a lesson that does not exist."""


def template_data_for_lesson(lesson: Lesson) -> NoteTemplateData:
    class_info = extract_class_info(lesson)
    return NoteTemplateData(
        lesson_title=class_info.lesson_title,
        lesson_date=class_info.lesson_date,
        topic_name=class_info.topic_name,
        level=class_info.level,
        series_info=class_info.series_info,
        vocabulary=extract_vocabulary(lesson),
    )


class NoteService:
    """Service for managing a user's notes and keeping their indexes current."""

    def __init__(self, repo: NoteRepository, lessons: LessonRepository) -> None:
        self._repo = repo
        self._lessons = lessons

    async def create_note(self, create_dto, user_id: str | UUID) -> Note:
        """Create a note for a lesson, copying the lesson's details into it.

        Raises LessonNotFoundError when the lesson does not exist.
        """
        owner = str(user_id)
        lesson = await self._lessons.get(create_dto.lesson_id)
        if lesson is None:
            raise LessonNotFoundError(f"Lesson not found: {create_dto.lesson_id}")

        content = create_dto.content
        if content is None:
            content = generate_note_template(template_data_for_lesson(lesson))

        now = utc_now()
        note = Note(
            user_id=owner,
            lesson_id=create_dto.lesson_id,
            topic_id=create_dto.topic_id or "",
            title=create_dto.title or lesson.title or "",
            content=content,
            tags=list(create_dto.tags or []),
            class_info=extract_class_info(lesson),
            vocabulary=extract_vocabulary(lesson),
            created_at=now,
            updated_at=now,
            last_edited_at=now,
        )
        await self._repo.save(note)

        if note.topic_id:
            await self._repo.add_to_topic_index(owner, note.topic_id, note.id)
        await self._repo.set_lesson_index(owner, note.lesson_id, note.id)
        for tag in note.tags:
            await self._repo.add_to_tag_index(owner, tag, note.id)

        logger.info("Created note %s for lesson %s", note.id, note.lesson_id, extra={"user_id": owner})
        return note

    async def get_note(self, note_id: str, user_id: str | UUID) -> Note | None:
        """Return note if it exists and belongs to the user; otherwise None."""
        note = await self._repo.get(str(user_id), note_id)
        if note and note.user_id == str(user_id):
            return note
        return None

    async def list_notes(
        self,
        user_id: str | UUID,
        *,
        topic_id: str | None = None,
        lesson_id: str | None = None,
        tag_ids: Sequence[str] | None = None,
    ) -> list[Note]:
        """List the user's notes, newest first, narrowed by the optional filters."""
        notes = await self._repo.list_for_user(str(user_id))
        return filter_notes(notes, topic_id=topic_id, lesson_id=lesson_id, tag_ids=tag_ids)

    async def update_note(self, note_id: str, update_dto, user_id: str | UUID) -> Note | None:
        """Apply the student's edits (title, content, tags) to a note.

        Moves the note between tag indexes when its tags change.
        """
        owner = str(user_id)
        existing = await self.get_note(note_id, owner)
        if not existing:
            return None

        raw_changes = update_dto.model_dump(exclude_unset=True)
        allowed_fields = {"title", "content", "tags"}
        changes: dict = {k: v for k, v in raw_changes.items() if k in allowed_fields and v is not None}

        now = utc_now()
        updated = existing.model_copy(update={**changes, "updated_at": now, "last_edited_at": now})
        await self._repo.save(updated)

        old_tags = set(existing.tags)
        new_tags = set(updated.tags)
        for tag in sorted(old_tags - new_tags):
            await self._repo.remove_from_tag_index(owner, tag, note_id)
        for tag in sorted(new_tags - old_tags):
            await self._repo.add_to_tag_index(owner, tag, note_id)

        return updated

    async def delete_note(self, note_id: str, user_id: str | UUID) -> bool:
        """Delete a user's note and its index entries."""
        owner = str(user_id)
        note = await self.get_note(note_id, owner)
        if not note:
            return False

        await self._repo.delete(owner, note_id)
        if note.topic_id:
            await self._repo.remove_from_topic_index(owner, note.topic_id, note_id)
        await self._repo.clear_lesson_index(owner, note.lesson_id, note_id)
        for tag in note.tags:
            await self._repo.remove_from_tag_index(owner, tag, note_id)
        return True

    async def build_template(self, lesson_id: str | None = None) -> str | None:
        """Render the starter template, pre-filled from a lesson when given.

        Returns None when the lesson does not exist.
        """
        if not lesson_id:
            return generate_note_template()
        lesson = await self._lessons.get(lesson_id)
        if lesson is None:
            return None
        return generate_note_template(template_data_for_lesson(lesson))
