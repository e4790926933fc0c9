from __future__ import annotations

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lesson_notes.core.repositories.implementations.supabase.kv_store import SupabaseKVStore
from lesson_notes.core.repositories.kv_store import KVStore
from lesson_notes.core.repositories.lesson_repository import LessonRepository
from lesson_notes.core.repositories.note_repository import NoteRepository
from lesson_notes.core.repositories.tag_repository import TagRepository
from lesson_notes.core.schemas.auth import AuthUser
from lesson_notes.core.services.lesson_service import LessonService
from lesson_notes.core.services.note_service import NoteService
from lesson_notes.core.services.search_service import SearchService
from lesson_notes.core.services.tag_service import TagService
from lesson_notes.db.base import create_request_supabase_client, get_supabase_admin_client
from lesson_notes.utils.logging import get_logger

logger = get_logger(__name__)

# Use auto_error=False to handle missing tokens gracefully
http_bearer = HTTPBearer(auto_error=False)


async def _run_blocking(func):
    """Run blocking functions in a thread pool."""
    import asyncio
    return await asyncio.to_thread(func)


def get_kv_store() -> KVStore:
    """Key-value store backed by the Supabase table, using the admin client."""
    return SupabaseKVStore(get_supabase_admin_client())


def get_note_repository(store: KVStore = Depends(get_kv_store)) -> NoteRepository:
    return NoteRepository(store)


def get_lesson_repository(store: KVStore = Depends(get_kv_store)) -> LessonRepository:
    return LessonRepository(store)


def get_tag_repository(store: KVStore = Depends(get_kv_store)) -> TagRepository:
    return TagRepository(store)


def get_note_service(
    repo: NoteRepository = Depends(get_note_repository),
    lessons: LessonRepository = Depends(get_lesson_repository),
) -> NoteService:
    """Get a request-scoped note service instance."""
    return NoteService(repo, lessons)


def get_search_service(repo: NoteRepository = Depends(get_note_repository)) -> SearchService:
    """Get a request-scoped search service instance."""
    return SearchService(repo)


def get_tag_service(
    tags: TagRepository = Depends(get_tag_repository),
    notes: NoteRepository = Depends(get_note_repository),
) -> TagService:
    return TagService(tags, notes)


def get_lesson_service(
    lessons: LessonRepository = Depends(get_lesson_repository),
    notes: NoteRepository = Depends(get_note_repository),
) -> LessonService:
    return LessonService(lessons, notes)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
) -> AuthUser:
    """Validate JWT via Supabase and return authenticated user."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    jwt = credentials.credentials
    if not jwt or len(jwt.split(".")) != 3:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token format",
            headers={"WWW-Authenticate": "Bearer"},
        )
    supabase = create_request_supabase_client(jwt)
    try:
        resp = await _run_blocking(lambda: supabase.auth.get_user(jwt))
    except Exception as err:
        error_msg = str(err).lower()
        logger.warning(
            "JWT validation failed",
            extra={
                "error_type": type(err).__name__,
                "error_summary": error_msg[:100] if error_msg else "Unknown error",
                "jwt_length": len(jwt) if jwt else 0,
            }
        )
        if "invalid" in error_msg or "expired" in error_msg:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token is invalid or expired",
                headers={"WWW-Authenticate": "Bearer"},
            ) from err
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err
    user = getattr(resp, "user", None)
    user_id = getattr(user, "id", None)
    if not user or not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user data",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return AuthUser(
        id=user_id,
        email=getattr(user, "email", None) or "",
        role=getattr(user, "role", None),
    )
