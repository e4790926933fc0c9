from __future__ import annotations

from typing import TYPE_CHECKING

from lesson_notes.core.models.base import utc_now
from lesson_notes.core.repositories import keys
from lesson_notes.core.schemas.note_sync import NoteSyncResult
from lesson_notes.core.services.lesson_extraction import extract_class_info, extract_vocabulary
from lesson_notes.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from lesson_notes.core.models.lesson import Lesson
    from lesson_notes.core.repositories.note_repository import NoteRepository


async def sync_notes_for_lesson(
    *,
    lesson_id: str,
    lesson: Lesson,
    repo: NoteRepository,
) -> NoteSyncResult:
    """Refresh ``classInfo`` and ``vocabulary`` on every note taken for a lesson.

    Notes are found through the by-lesson index of every user. Only the
    lesson-derived fields and ``updatedAt`` are written; ``content``, ``title``
    and ``tags`` are left as the student wrote them. Notes that are missing,
    unreadable or fail to save are logged and skipped. Never raises: errors
    are returned in the result and earlier writes are not rolled back.
    """
    logger.info("Starting note synchronization for lesson %s", lesson_id)

    try:
        entries = await repo.find_lesson_index_entries(lesson_id)
        logger.info("Found %d note indexes for lesson %s", len(entries), lesson_id)

        class_info = extract_class_info(lesson)
        vocabulary = extract_vocabulary(lesson)
        logger.debug("Extracted %d vocabulary items from lesson %s", len(vocabulary), lesson_id)

        updated = 0
        skipped = 0
        for entry in entries:
            if not entry.note_id:
                skipped += 1
                continue

            note_key = keys.note_key(entry.user_id, entry.note_id)
            try:
                note = await repo.get(entry.user_id, entry.note_id)
            except Exception as err:
                logger.error("Failed to load note %s: %s", note_key, err)
                skipped += 1
                continue
            if note is None:
                logger.warning("Note not found: %s", note_key)
                skipped += 1
                continue

            synced = note.model_copy(
                update={
                    "class_info": class_info.model_copy(),
                    "vocabulary": [item.model_copy() for item in vocabulary],
                    "updated_at": utc_now(),
                }
            )
            try:
                await repo.save(synced)
            except Exception as err:
                logger.error("Failed to update note %s: %s", note_key, err)
                skipped += 1
                continue

            updated += 1
            logger.debug("Updated note: %s", note_key)

        logger.info(
            "Successfully synchronized %d notes for lesson %s (%d skipped)",
            updated,
            lesson_id,
            skipped,
        )
        return NoteSyncResult(success=True, updated_count=updated, skipped_count=skipped)

    except Exception as err:
        logger.error("Error synchronizing notes for lesson %s: %s", lesson_id, err)
        return NoteSyncResult(success=False, error=str(err))
