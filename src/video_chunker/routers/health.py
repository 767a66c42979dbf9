"""Liveness probe."""

import shutil

from fastapi import APIRouter, Depends

from ..config import ChunkerSettings
from ..deps import get_app_settings

router = APIRouter()


@router.get("/health")
async def health(settings: ChunkerSettings = Depends(get_app_settings)) -> dict:
    """Always 200 while the process is up; reports whether ffmpeg is on PATH."""
    return {
        "status": "healthy",
        "ffmpeg_available": shutil.which(settings.ffmpeg_binary) is not None,
    }
