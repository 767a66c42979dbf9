"""Dependencies and app state for FastAPI routes."""

from fastapi import Request

from .config import ChunkerSettings, get_settings
from .ffmpeg_chunk import FfmpegSegmenter
from .interfaces import Segmenter


def get_app_settings(request: Request) -> ChunkerSettings:
    """Return settings from app state (set by create_app) or build from env."""
    settings = getattr(request.app.state, "settings", None)
    if settings is not None:
        return settings
    return get_settings()


def get_segmenter(request: Request) -> Segmenter:
    """Return Segmenter from app state or an ffmpeg segmenter from settings."""
    segmenter = getattr(request.app.state, "segmenter", None)
    if segmenter is not None:
        return segmenter
    return FfmpegSegmenter(get_app_settings(request).ffmpeg_binary)


def get_public_base_url(request: Request) -> str:
    """Base URL for chunk links (PUBLIC_BASE_URL or request)."""
    base = get_app_settings(request).public_base_url
    if base:
        return base.rstrip("/")
    return str(request.base_url).rstrip("/")
