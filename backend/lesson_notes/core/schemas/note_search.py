from __future__ import annotations

from lesson_notes.core.models.base import AppBaseModel
from lesson_notes.core.models.note import Note  # noqa: TCH001


class NoteSearchResult(AppBaseModel):
    """A matching note with the text that matched and an HTML-highlighted copy."""

    note: Note
    matched_content: str
    highlighted_snippet: str
