from .note_sync import sync_notes_for_lesson

__all__ = [
    "sync_notes_for_lesson",
]
