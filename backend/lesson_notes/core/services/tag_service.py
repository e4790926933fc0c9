from __future__ import annotations

from typing import TYPE_CHECKING

from lesson_notes.core.models.base import utc_now
from lesson_notes.core.models.tag import NoteTag
from lesson_notes.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from lesson_notes.core.models.note import Note
    from lesson_notes.core.repositories.note_repository import NoteRepository
    from lesson_notes.core.repositories.tag_repository import TagRepository

logger = get_logger(__name__)


def resolve_note_tags(note: Note, tags: Sequence[NoteTag]) -> list[NoteTag]:
    """Return the tags a note should display, in the note's order.

    References to tags that no longer exist are dropped.
    """
    by_id = {tag.id: tag for tag in tags}
    return [by_id[tag_id] for tag_id in note.tags if tag_id in by_id]


class TagService:
    """Service for a user's note tags."""

    def __init__(self, tags: TagRepository, notes: NoteRepository) -> None:
        self._tags = tags
        self._notes = notes

    async def list_tags(self, user_id: str | UUID) -> list[NoteTag]:
        return await self._tags.list(str(user_id))

    async def create_tag(self, create_dto, user_id: str | UUID) -> NoteTag:
        """Create a tag; raises ValueError when name or color is blank."""
        owner = str(user_id)
        name = (create_dto.name or "").strip()
        color = (create_dto.color or "").strip()
        if not name or not color:
            raise ValueError("Name and color are required")

        tag = NoteTag(name=name, color=color, user_id=owner)
        existing = await self._tags.list(owner)
        await self._tags.replace_all(owner, [*existing, tag])
        return tag

    async def delete_tag(self, tag_id: str, user_id: str | UUID) -> bool:
        """Delete a tag and detach it from the user's notes.

        Notes themselves are kept. Returns False when the tag does not exist or
        belongs to someone else.
        """
        owner = str(user_id)
        existing = await self._tags.list(owner)
        tag = next((t for t in existing if t.id == tag_id), None)
        if tag is None or tag.user_id != owner:
            return False

        await self._tags.replace_all(owner, [t for t in existing if t.id != tag_id])

        # Older notes reference tags by name rather than id
        references = {tag.id, tag.name}
        detached = 0
        for note in await self._notes.list_for_user(owner):
            if not references.intersection(note.tags):
                continue
            remaining = [t for t in note.tags if t not in references]
            await self._notes.save(note.model_copy(update={"tags": remaining, "updated_at": utc_now()}))
            detached += 1

        for reference in references:
            await self._notes.drop_tag_index(owner, reference)

        logger.info("Deleted tag %s and detached it from %d notes", tag_id, detached, extra={"user_id": owner})
        return True
