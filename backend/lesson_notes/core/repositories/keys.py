"""Key layout of the key-value store.

    notes:{userId}:{noteId}                        -> Note
    note-index:{userId}:by-lesson:{lessonId}       -> noteId
    note-index:{userId}:by-topic:{topicId}         -> [noteId, ...]
    note-index:{userId}:by-tag:{tag}               -> [noteId, ...]
    note-tags:{userId}                             -> [NoteTag, ...]
    class:{...}                                    -> Lesson
    vocab:{slug}-{millis}-{suffix}                 -> vocabulary library entry

Lesson ids carry their own ``class:`` prefix and therefore contain colons.
"""

from __future__ import annotations

NOTE_PREFIX = "notes:"
NOTE_INDEX_PREFIX = "note-index:"
TAGS_PREFIX = "note-tags:"
LESSON_PREFIX = "class:"
VOCAB_PREFIX = "vocab:"

_BY_LESSON = ":by-lesson:"


def note_key(user_id: str, note_id: str) -> str:
    return f"{NOTE_PREFIX}{user_id}:{note_id}"


def user_notes_prefix(user_id: str) -> str:
    return f"{NOTE_PREFIX}{user_id}:"


def lesson_index_key(user_id: str, lesson_id: str) -> str:
    return f"{NOTE_INDEX_PREFIX}{user_id}{_BY_LESSON}{lesson_id}"


def topic_index_key(user_id: str, topic_id: str) -> str:
    return f"{NOTE_INDEX_PREFIX}{user_id}:by-topic:{topic_id}"


def tag_index_key(user_id: str, tag: str) -> str:
    return f"{NOTE_INDEX_PREFIX}{user_id}:by-tag:{tag}"


def tags_key(user_id: str) -> str:
    return f"{TAGS_PREFIX}{user_id}"


def parse_lesson_index_key(key: str) -> tuple[str, str] | None:
    """Split a by-lesson index key into ``(user_id, lesson_id)``.

    Returns None for keys of any other shape.
    """
    if not key.startswith(NOTE_INDEX_PREFIX) or _BY_LESSON not in key:
        return None
    owner, lesson_id = key[len(NOTE_INDEX_PREFIX):].split(_BY_LESSON, 1)
    if not owner or ":" in owner or not lesson_id:
        return None
    return owner, lesson_id


def is_lesson_id(value: str) -> bool:
    """True for ids inside the ``class:`` key space."""
    return value.startswith(LESSON_PREFIX) and len(value) > len(LESSON_PREFIX)
