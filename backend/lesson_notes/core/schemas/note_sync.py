from __future__ import annotations

from lesson_notes.core.models.base import AppBaseModel


class NoteSyncResult(AppBaseModel):
    """Outcome of propagating a lesson into its dependent notes."""

    success: bool
    updated_count: int = 0
    skipped_count: int = 0
    error: str | None = None
