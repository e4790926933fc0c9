from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from lesson_notes.api.v1.schemas.tag import TagCreate, TagRead
from lesson_notes.core.schemas.auth import AuthUser  # noqa: TCH001
from lesson_notes.core.services.tag_service import TagService  # noqa: TCH001
from lesson_notes.dependencies import get_current_user, get_tag_service

router = APIRouter()


@router.get("", response_model=list[TagRead])
async def list_tags(
    current_user: AuthUser = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    tags = await service.list_tags(current_user.id)
    return [TagRead.model_validate(t) for t in tags]


@router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    try:
        tag = await service.create_tag(payload, user_id=current_user.id)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    return TagRead.model_validate(tag)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    """Delete a tag. Notes carrying it are kept and simply lose the tag."""
    deleted = await service.delete_tag(tag_id, user_id=current_user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Tag not found")
    return None
