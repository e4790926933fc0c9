from __future__ import annotations

from fastapi import APIRouter

from .endpoints import health, lessons, notes, tags

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
# Tag routes first so /notes/tags is not captured by /notes/{note_id}
api_router.include_router(tags.router, prefix="/notes/tags", tags=["tags"])
api_router.include_router(notes.router, prefix="/notes", tags=["notes"])
api_router.include_router(lessons.router, prefix="/classes", tags=["classes"])
