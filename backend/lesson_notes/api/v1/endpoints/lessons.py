from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from lesson_notes.api.v1.schemas.lesson import LessonSaveResponse
from lesson_notes.core.models.lesson import Lesson
from lesson_notes.core.schemas.auth import AuthUser  # noqa: TCH001
from lesson_notes.core.schemas.note_sync import NoteSyncResult
from lesson_notes.core.services.lesson_service import LessonService  # noqa: TCH001
from lesson_notes.dependencies import get_current_user, get_lesson_service
from lesson_notes.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _save_response(lesson: Lesson, sync: NoteSyncResult | None) -> LessonSaveResponse:
    return LessonSaveResponse(
        id=lesson.id or "",
        notes_synced=sync.updated_count if sync else None,
        sync=sync,
    )


@router.get("/", response_model=list[Lesson], response_model_exclude_none=True)
async def list_lessons(service: LessonService = Depends(get_lesson_service)):
    return await service.list_lessons()


@router.post("/", response_model=LessonSaveResponse)
async def save_lesson(
    payload: dict[str, Any] = Body(...),
    current_user: AuthUser = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
):
    """Create a lesson, or replace it when the body carries an ``id``.

    Replacing a lesson refreshes every note taken for it before responding.
    """
    try:
        lesson, sync = await service.save_lesson(payload, user_id=current_user.id)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except Exception as err:
        logger.error("Unexpected error saving lesson", extra={"error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from err
    return _save_response(lesson, sync)


@router.post("/import", response_model=LessonSaveResponse)
async def import_lesson(
    payload: Any = Body(...),
    current_user: AuthUser = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
):
    """Validate a JSON lesson document and store it as a new lesson."""
    try:
        lesson, sync = await service.import_lesson(payload, user_id=current_user.id)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    return _save_response(lesson, sync)


@router.get("/{lesson_id}", response_model=Lesson, response_model_exclude_none=True)
async def get_lesson(lesson_id: str, service: LessonService = Depends(get_lesson_service)):
    lesson = await service.get_lesson(lesson_id)
    if not lesson:
        raise HTTPException(status_code=404, detail="Class not found")
    return lesson


@router.patch("/{lesson_id}", response_model=LessonSaveResponse)
async def update_lesson(
    lesson_id: str,
    changes: dict[str, Any] = Body(...),
    current_user: AuthUser = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
):
    try:
        updated = await service.update_lesson(lesson_id, changes)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    if updated is None:
        raise HTTPException(status_code=404, detail="Class not found")
    lesson, sync = updated
    return _save_response(lesson, sync)


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lesson(
    lesson_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
):
    deleted = await service.delete_lesson(lesson_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Class not found")
    return None


@router.post("/{lesson_id}/sync-notes", response_model=NoteSyncResult)
async def sync_lesson_notes(
    lesson_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: LessonService = Depends(get_lesson_service),
):
    """Re-run the note sync for a stored lesson."""
    lesson = await service.get_lesson(lesson_id)
    if not lesson:
        raise HTTPException(status_code=404, detail="Class not found")
    return await service.sync_notes(lesson)
