from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple

from lesson_notes.core.models.note import Note
from lesson_notes.core.repositories import keys

if TYPE_CHECKING:
    from lesson_notes.core.repositories.kv_store import KVStore


class LessonIndexEntry(NamedTuple):
    """One ``note-index:{userId}:by-lesson:{lessonId} -> noteId`` record."""

    key: str
    user_id: str
    lesson_id: str
    note_id: str | None


class NoteRepository:
    """Notes and their secondary indexes on top of a KVStore.

    The indexes are plain documents maintained next to the notes; nothing
    keeps them consistent beyond the order of the writes issued here.
    """

    def __init__(self, store: KVStore) -> None:
        self._store = store

    async def get(self, user_id: str, note_id: str) -> Note | None:
        """Fetch a note by owner and id or return None if not found."""
        data = await self._store.get(keys.note_key(user_id, note_id))
        if not data:
            return None
        return Note.model_validate(data)

    async def save(self, note: Note) -> Note:
        """Persist a note under its owner's key and return it."""
        await self._store.set(keys.note_key(note.user_id, note.id), note.to_document())
        return note

    async def delete(self, user_id: str, note_id: str) -> None:
        await self._store.delete(keys.note_key(user_id, note_id))

    async def list_for_user(self, user_id: str) -> list[Note]:
        """Return every note owned by the user, newest first."""
        rows = await self._store.get_by_prefix(keys.user_notes_prefix(user_id))
        notes = [Note.model_validate(row) for row in rows if row]
        notes.sort(key=lambda n: n.created_at, reverse=True)
        return notes

    # Lesson index

    async def set_lesson_index(self, user_id: str, lesson_id: str, note_id: str) -> None:
        await self._store.set(keys.lesson_index_key(user_id, lesson_id), note_id)

    async def clear_lesson_index(self, user_id: str, lesson_id: str, note_id: str) -> None:
        """Drop the by-lesson entry if it still points at note_id."""
        key = keys.lesson_index_key(user_id, lesson_id)
        if await self._store.get(key) == note_id:
            await self._store.delete(key)

    async def find_lesson_index_entries(self, lesson_id: str) -> list[LessonIndexEntry]:
        """Return the by-lesson index entries of every user for lesson_id.

        Keys that do not parse are ignored. The lesson id must match exactly so
        that ``class:1`` does not pick up entries for ``class:12``.
        """
        entries = await self._store.get_entries_by_prefix(keys.NOTE_INDEX_PREFIX)
        found: list[LessonIndexEntry] = []
        for entry in entries:
            parsed = keys.parse_lesson_index_key(entry.key)
            if parsed is None:
                continue
            user_id, indexed_lesson = parsed
            if indexed_lesson != lesson_id:
                continue
            note_id = entry.value if isinstance(entry.value, str) else None
            found.append(LessonIndexEntry(entry.key, user_id, indexed_lesson, note_id))
        return found

    # Topic and tag indexes

    async def add_to_topic_index(self, user_id: str, topic_id: str, note_id: str) -> None:
        await self._append_to_index(keys.topic_index_key(user_id, topic_id), note_id)

    async def remove_from_topic_index(self, user_id: str, topic_id: str, note_id: str) -> None:
        await self._remove_from_index(keys.topic_index_key(user_id, topic_id), note_id)

    async def add_to_tag_index(self, user_id: str, tag: str, note_id: str) -> None:
        await self._append_to_index(keys.tag_index_key(user_id, tag), note_id)

    async def remove_from_tag_index(self, user_id: str, tag: str, note_id: str) -> None:
        await self._remove_from_index(keys.tag_index_key(user_id, tag), note_id)

    async def drop_tag_index(self, user_id: str, tag: str) -> None:
        await self._store.delete(keys.tag_index_key(user_id, tag))

    async def get_index(self, key: str) -> list[str]:
        value: Any = await self._store.get(key)
        if not isinstance(value, list):
            return []
        return [v for v in value if isinstance(v, str)]

    async def _append_to_index(self, key: str, note_id: str) -> None:
        index = await self.get_index(key)
        if note_id in index:
            return
        index.append(note_id)
        await self._store.set(key, index)

    async def _remove_from_index(self, key: str, note_id: str) -> None:
        index = await self.get_index(key)
        await self._store.set(key, [i for i in index if i != note_id])
