from __future__ import annotations

import copy
from typing import Any
from uuid import UUID

import pytest

from lesson_notes.core.repositories.kv_store import KVEntry, KVStore
from lesson_notes.core.repositories.lesson_repository import LessonRepository
from lesson_notes.core.repositories.note_repository import NoteRepository
from lesson_notes.core.repositories.tag_repository import TagRepository
from lesson_notes.core.schemas.auth import AuthUser

USER_ID = UUID("5d2c2f9e-3c55-4b5e-9d6b-8f4f0e7f1a21")
OTHER_USER_ID = UUID("0b7a1c44-8e0f-4f65-a0a7-2b4f1f3c9d10")


class InMemoryKVStore(KVStore):
    """Dict-backed store; values are deep-copied to mimic a JSON round trip."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.fail_on_set: set[str] = set()

    async def get(self, key: str) -> Any | None:
        return copy.deepcopy(self.data.get(key))

    async def set(self, key: str, value: Any) -> None:
        if key in self.fail_on_set:
            raise RuntimeError(f"write refused for {key}")
        self.data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    async def get_entries_by_prefix(self, prefix: str) -> list[KVEntry]:
        return [
            KVEntry(key, copy.deepcopy(value))
            for key, value in sorted(self.data.items())
            if key.startswith(prefix)
        ]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def store() -> InMemoryKVStore:
    return InMemoryKVStore()


@pytest.fixture
def note_repo(store: InMemoryKVStore) -> NoteRepository:
    return NoteRepository(store)


@pytest.fixture
def lesson_repo(store: InMemoryKVStore) -> LessonRepository:
    return LessonRepository(store)


@pytest.fixture
def tag_repo(store: InMemoryKVStore) -> TagRepository:
    return TagRepository(store)


@pytest.fixture
def user() -> AuthUser:
    return AuthUser(id=USER_ID, email="student@example.com")


def make_lesson(lesson_id: str = "class:1000", **overrides: Any) -> dict[str, Any]:
    lesson: dict[str, Any] = {
        "id": lesson_id,
        "title": "Dutch Greetings",
        "topic": "Greetings",
        "level": "A1",
        "createdAt": "2025-11-08T10:00:00+00:00",
        "pages": [
            {"id": "intro", "type": "intro", "title": "Welcome", "content": {"text": "Hallo!"}},
            {
                "id": "vocab",
                "type": "vocabulary",
                "title": "Words",
                "content": {
                    "words": [
                        {"dutch": "hallo", "english": "hello", "example": "Hallo, hoe gaat het?"},
                        {"dutch": "doei", "english": "bye", "audioUrl": "https://cdn.example.com/doei.mp3"},
                    ]
                },
            },
        ],
    }
    lesson.update(overrides)
    return lesson


@pytest.fixture
def client(store: InMemoryKVStore, user: AuthUser):
    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient

    from lesson_notes.dependencies import get_current_user, get_kv_store
    from lesson_notes.main import app

    app.dependency_overrides[get_kv_store] = lambda: store
    app.dependency_overrides[get_current_user] = lambda: user
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
