"""Upload route: POST /api/upload splits the video and returns chunk URLs."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from ..config import ChunkerSettings
from ..constants import DURATION_FIELD, UPLOAD_FIELD
from ..deps import get_app_settings, get_public_base_url, get_segmenter
from ..interfaces import Segmenter
from ..job import JobLifecycle, finish_job, process_upload
from ..models import ChunkUploadResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/api/upload",
    response_model=ChunkUploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_video(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: ChunkerSettings = Depends(get_app_settings),
    segmenter: Segmenter = Depends(get_segmenter),
    base_url: str = Depends(get_public_base_url),
) -> ChunkUploadResponse:
    """
    Multipart upload: file field ``video`` and form field ``chunkDuration`` (seconds).

    Segments are written to chunks/<job dir>/ and served under /chunks. The
    uploaded source is deleted after the response is sent.
    """
    lifecycle = JobLifecycle()
    async with request.form() as form:
        response, job = await process_upload(
            form.get(UPLOAD_FIELD),
            form.get(DURATION_FIELD),
            settings=settings,
            segmenter=segmenter,
            base_url=base_url,
            lifecycle=lifecycle,
        )
    background_tasks.add_task(finish_job, lifecycle, job.source_path)
    return response
