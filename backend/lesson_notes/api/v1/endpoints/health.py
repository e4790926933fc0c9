from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from lesson_notes.config import settings
from lesson_notes.dependencies import get_kv_store

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "lesson-notes-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check():
    """Readiness check endpoint."""
    store_status = "connected"
    try:
        store = get_kv_store()
        await store.get("health-check")
    except Exception as e:
        store_status = f"error: {str(e)}"

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "database": store_status,
            "kv_table": settings.kv_table,
            "api_prefix": settings.api_prefix
        }
    )
