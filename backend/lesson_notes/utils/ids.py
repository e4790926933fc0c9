from __future__ import annotations

import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def _millis() -> int:
    return int(time.time() * 1000)


def _random_suffix(length: int = 9) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_id(prefix: str) -> str:
    """Return an id shaped like ``{prefix}-{epoch millis}-{9 base36 chars}``."""
    return f"{prefix}-{_millis()}-{_random_suffix()}"


def generate_note_id() -> str:
    return generate_id("note")


def generate_tag_id() -> str:
    return generate_id("tag")


def generate_lesson_id() -> str:
    return f"class:{_millis()}"


def generate_vocabulary_id(word: str) -> str:
    """Library key for a word: ``vocab:{slug}-{millis}-{suffix}``.

    Two meanings of one word added in the same millisecond get distinct keys.
    """
    return f"vocab:{generate_id(slugify_word(word))}"


def slugify_word(word: str) -> str:
    """Lowercase a word and join whitespace-separated parts with hyphens."""
    return "-".join(word.lower().split())
