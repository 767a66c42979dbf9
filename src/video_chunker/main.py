"""FastAPI app: upload a video, split it with ffmpeg, serve the segments."""

import logging
import shutil

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import ChunkerSettings, bootstrap_env, get_settings
from .constants import CHUNKS_URL_PATH
from .errors import ChunkerError
from .ffmpeg_chunk import FfmpegSegmenter
from .logging_config import configure_logging
from .response import error_response
from .routers import health_router, upload_router
from .workspace import ensure_dir

logger = logging.getLogger(__name__)


async def _chunker_error_handler(request: Request, exc: ChunkerError) -> JSONResponse:
    """Map pipeline errors to {"error": <generic message>}; details stay in server logs."""
    return JSONResponse(status_code=exc.status_code, content=error_response(exc.public_message))


def create_app(settings: ChunkerSettings | None = None) -> FastAPI:
    """
    Build the app for the given settings (env when omitted).

    Creates the uploads and chunks roots; a StorageError here is fatal.
    """
    if settings is None:
        settings = get_settings()
    ensure_dir(settings.uploads_root)
    ensure_dir(settings.chunks_root)
    if shutil.which(settings.ffmpeg_binary) is None:
        logger.warning("ffmpeg not found (%s); uploads will fail until it is installed",
                       settings.ffmpeg_binary)

    app = FastAPI(title="Video Chunker", version=__version__)
    app.state.settings = settings
    app.state.segmenter = FfmpegSegmenter(settings.ffmpeg_binary)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ChunkerError, _chunker_error_handler)
    app.include_router(upload_router)
    app.include_router(health_router)
    app.mount(
        CHUNKS_URL_PATH,
        StaticFiles(directory=str(settings.chunks_root)),
        name="chunks",
    )
    return app


def main() -> None:
    bootstrap_env()
    settings = get_settings()
    configure_logging(settings.log_level.upper())
    app = create_app(settings)
    logger.info("video chunker listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
