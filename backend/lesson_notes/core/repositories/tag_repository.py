from __future__ import annotations

from typing import TYPE_CHECKING

from lesson_notes.core.models.tag import NoteTag
from lesson_notes.core.repositories import keys

if TYPE_CHECKING:
    from lesson_notes.core.repositories.kv_store import KVStore


class TagRepository:
    """A user's tags, stored together as one list document."""

    def __init__(self, store: KVStore) -> None:
        self._store = store

    async def list(self, user_id: str) -> list[NoteTag]:
        rows = await self._store.get(keys.tags_key(user_id))
        if not isinstance(rows, list):
            return []
        return [NoteTag.model_validate(row) for row in rows if isinstance(row, dict)]

    async def replace_all(self, user_id: str, tags: list[NoteTag]) -> None:
        await self._store.set(keys.tags_key(user_id), [t.to_document() for t in tags])
