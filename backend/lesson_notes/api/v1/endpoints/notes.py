from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from lesson_notes.api.v1.schemas.note import NoteCreate, NoteRead, NoteTemplateRead, NoteUpdate
from lesson_notes.core.schemas.auth import AuthUser  # noqa: TCH001
from lesson_notes.core.schemas.note_search import NoteSearchResult
from lesson_notes.core.services.note_service import LessonNotFoundError, NoteService
from lesson_notes.core.services.search_service import SearchService  # noqa: TCH001
from lesson_notes.dependencies import (
    get_current_user,
    get_note_service,
    get_search_service,
)

router = APIRouter()


def _split_tags(tags: str | None) -> list[str]:
    return [t for t in (tags or "").split(",") if t]


@router.get("/", response_model=list[NoteRead])
async def list_notes(
    topic_id: str | None = Query(default=None, alias="topicId"),
    lesson_id: str | None = Query(default=None, alias="lessonId"),
    tags: str | None = Query(default=None, description="Comma separated tag ids"),
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    notes = await service.list_notes(
        current_user.id,
        topic_id=topic_id,
        lesson_id=lesson_id,
        tag_ids=_split_tags(tags),
    )
    return [NoteRead.model_validate(n) for n in notes]


@router.post("/", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    try:
        note = await service.create_note(payload, user_id=current_user.id)
    except LessonNotFoundError as err:
        raise HTTPException(status_code=404, detail="Lesson not found") from err
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    return NoteRead.model_validate(note)


# Fixed paths must be registered before /{note_id}


@router.get("/search", response_model=list[NoteSearchResult])
async def search_notes(
    query: str = "",
    topic_id: str | None = Query(default=None, alias="topicId"),
    tags: str | None = Query(default=None, description="Comma separated tag ids"),
    current_user: AuthUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    """Search the authenticated user's notes.

    Case-insensitive substring match on title and content, narrowed by topic
    and tags. A blank query returns no results.
    """
    return await service.search_notes(
        user_id=current_user.id,
        query=query,
        topic_id=topic_id,
        tag_ids=_split_tags(tags),
    )


@router.get("/template", response_model=NoteTemplateRead)
async def get_note_template(
    lesson_id: str | None = Query(default=None, alias="lessonId"),
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """Return the markdown starter document for a note on the given lesson."""
    template = await service.build_template(lesson_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return NoteTemplateRead(lesson_id=lesson_id, template=template)


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(
    note_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.get_note(note_id, user_id=current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteRead.model_validate(note)


@router.patch("/{note_id}", response_model=NoteRead)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.update_note(note_id, payload, user_id=current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteRead.model_validate(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    deleted = await service.delete_note(note_id, user_id=current_user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Note not found")
    return None
