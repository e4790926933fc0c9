from __future__ import annotations

import re
from typing import TYPE_CHECKING

from lesson_notes.config import settings
from lesson_notes.core.schemas.note_search import NoteSearchResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from lesson_notes.core.models.note import Note
    from lesson_notes.core.repositories.note_repository import NoteRepository


def filter_notes(
    notes: Iterable[Note],
    *,
    topic_id: str | None = None,
    lesson_id: str | None = None,
    tag_ids: Sequence[str] | None = None,
) -> list[Note]:
    """Apply the optional topic, lesson and tag filters.

    The tag filter keeps a note carrying at least one of the selected tags.
    """
    selected = set(tag_ids or [])
    return [
        note
        for note in notes
        if (not topic_id or note.topic_id == topic_id)
        and (not lesson_id or note.lesson_id == lesson_id)
        and (not selected or selected.intersection(note.tags))
    ]


def highlight_matches(text: str, query: str) -> str:
    """Wrap every case-insensitive occurrence of query in ``<mark>`` tags."""
    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)
    return pattern.sub(r"<mark>\1</mark>", text)


def build_snippet(content: str, query: str, radius: int | None = None) -> str:
    """Cut a window around the first match, marking truncation with ``...``."""
    radius = settings.search_snippet_radius if radius is None else radius
    index = content.lower().find(query.lower())
    if index < 0:
        return ""
    start = max(0, index - radius)
    end = min(len(content), index + len(query) + radius)
    snippet = content[start:end]
    if start > 0:
        snippet = "..." + snippet
    if end < len(content):
        snippet = snippet + "..."
    return snippet


def search_notes(
    notes: Iterable[Note],
    query: str,
    *,
    topic_id: str | None = None,
    tag_ids: Sequence[str] | None = None,
) -> list[NoteSearchResult]:
    """Case-insensitive substring search over note titles and contents.

    A blank query matches nothing.
    """
    if not query or not query.strip():
        return []

    needle = query.lower()
    results: list[NoteSearchResult] = []
    for note in filter_notes(notes, topic_id=topic_id, tag_ids=tag_ids):
        if needle in note.title.lower():
            matched = note.title
        elif needle in note.content.lower():
            matched = build_snippet(note.content, query)
        else:
            continue
        results.append(
            NoteSearchResult(
                note=note,
                matched_content=matched,
                highlighted_snippet=highlight_matches(matched, query),
            )
        )
    return results


class SearchService:
    """Service for searching and filtering a user's notes.

    Keeps application logic (validation, defaults) outside transport layer.
    """

    def __init__(self, repo: NoteRepository) -> None:
        self._repo = repo

    async def search_notes(
        self,
        *,
        user_id: str,
        query: str,
        topic_id: str | None = None,
        tag_ids: Sequence[str] | None = None,
    ) -> list[NoteSearchResult]:
        if not query.strip():
            return []
        notes = await self._repo.list_for_user(str(user_id))
        return search_notes(notes, query, topic_id=topic_id, tag_ids=tag_ids)
