"""
Upload-to-segments job: validate, stage, run ffmpeg, list and order segments, respond.

Lifecycle per request:
    received -> validating -> rejected | processing
    processing -> storage_failed | segmented | segmentation_failed
    segmented -> listing -> list_failed | responded
    responded -> cleaning_up -> done
No state is re-entered and nothing is retried; a failed job needs a new request.
"""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

# request.form() yields Starlette UploadFile objects (fastapi.UploadFile subclasses it)
from starlette.datastructures import UploadFile

from .artifacts import list_artifacts
from .cleanup import delete_source
from .config import ChunkerSettings
from .constants import MSG_INVALID_DURATION, MSG_NO_VIDEO
from .errors import ListError, SegmentationError, StorageError, ValidationError
from .interfaces import Segmenter
from .models import (
    ChunkUploadResponse,
    JobState,
    SegmentationFailure,
    SegmentationJob,
    SegmentationResult,
)
from .response import build_chunk_urls, success_response
from .workspace import ensure_dir, job_output_dir, save_upload

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"[0-9]+")

_TRANSITIONS: dict[JobState, set[JobState]] = {
    JobState.RECEIVED: {JobState.VALIDATING},
    JobState.VALIDATING: {JobState.REJECTED, JobState.PROCESSING},
    JobState.PROCESSING: {
        JobState.STORAGE_FAILED,
        JobState.SEGMENTED,
        JobState.SEGMENTATION_FAILED,
    },
    JobState.SEGMENTED: {JobState.LISTING},
    JobState.LISTING: {JobState.LIST_FAILED, JobState.RESPONDED},
    JobState.RESPONDED: {JobState.CLEANING_UP},
    JobState.CLEANING_UP: {JobState.DONE},
}


class JobLifecycle:
    """Tracks the state of one request; job_id is known once the upload is stored."""

    def __init__(self) -> None:
        self.job_id: str | None = None
        self.state = JobState.RECEIVED

    def advance(self, target: JobState) -> None:
        if target not in _TRANSITIONS.get(self.state, set()):
            raise RuntimeError(f"illegal job transition {self.state.value} -> {target.value}")
        self.state = target
        logger.info("job_id=%s state=%s", self.job_id or "?", target.value)


def parse_chunk_duration(raw: str | None) -> int:
    """Parse chunkDuration as a positive integer of seconds. Raises ValidationError otherwise."""
    if raw is None or not _DURATION_RE.fullmatch(raw.strip()):
        raise ValidationError(MSG_INVALID_DURATION)
    value = int(raw.strip())
    if value <= 0:
        raise ValidationError(MSG_INVALID_DURATION)
    return value


def _validate(upload: object, raw_duration: object) -> tuple[UploadFile, int]:
    if not isinstance(upload, UploadFile) or not upload.filename:
        raise ValidationError(MSG_NO_VIDEO)
    if raw_duration is not None and not isinstance(raw_duration, str):
        raise ValidationError(MSG_INVALID_DURATION)
    return upload, parse_chunk_duration(raw_duration)


async def run_segmentation(
    job: SegmentationJob,
    segmenter: Segmenter,
    *,
    timeout_sec: float | None = None,
) -> SegmentationResult:
    """
    Start segmentation and suspend until it resolves.

    A segmenter that cannot be launched, or that outlives timeout_sec (then
    cancelled), yields a failure result rather than raising.
    """
    try:
        handle = await segmenter.start(job)
    except OSError as e:
        return SegmentationFailure(reason=f"could not launch segmenter: {e}")
    try:
        return await asyncio.wait_for(handle.wait(), timeout=timeout_sec)
    except asyncio.TimeoutError:
        await handle.cancel()
        return SegmentationFailure(reason=f"timed out after {timeout_sec}s")


async def process_upload(
    upload: object,
    raw_duration: object,
    *,
    settings: ChunkerSettings,
    segmenter: Segmenter,
    base_url: str,
    lifecycle: JobLifecycle,
) -> tuple[ChunkUploadResponse, SegmentationJob]:
    """
    Run one job up to the response. Returns (response, job); the caller sends the
    response and then calls finish_job for cleanup.

    Raises ValidationError before anything touches disk or spawns a process,
    StorageError if the upload or output dir cannot be created,
    SegmentationError if ffmpeg fails (source kept, output dir not listed),
    ListError if the produced segments cannot be listed.
    """
    lifecycle.advance(JobState.VALIDATING)
    try:
        video, duration = _validate(upload, raw_duration)
    except ValidationError as e:
        lifecycle.advance(JobState.REJECTED)
        logger.info("upload rejected: %s", e.public_message)
        raise
    lifecycle.advance(JobState.PROCESSING)

    try:
        uploaded = await save_upload(video, settings.uploads_root)
        lifecycle.job_id = uploaded.generated_id
        output_dir = ensure_dir(job_output_dir(settings.chunks_root, uploaded.stored_name))
    except StorageError as e:
        lifecycle.advance(JobState.STORAGE_FAILED)
        logger.error("job_id=%s storage failed: %s", lifecycle.job_id or "?", e)
        raise

    job = SegmentationJob(
        job_id=uploaded.generated_id,
        source_path=uploaded.stored_path,
        output_dir=output_dir,
        segment_duration_seconds=duration,
    )
    result = await run_segmentation(job, segmenter, timeout_sec=settings.segment_timeout_sec)
    if isinstance(result, SegmentationFailure):
        lifecycle.advance(JobState.SEGMENTATION_FAILED)
        logger.error("job_id=%s error during chunking: %s", job.job_id, result.reason)
        raise SegmentationError(result.reason)
    lifecycle.advance(JobState.SEGMENTED)
    logger.info("job_id=%s video has been chunked successfully", job.job_id)

    lifecycle.advance(JobState.LISTING)
    try:
        artifacts = list_artifacts(job.output_dir)
    except ListError as e:
        lifecycle.advance(JobState.LIST_FAILED)
        logger.error("job_id=%s could not list chunks: %s", job.job_id, e)
        raise
    urls = build_chunk_urls(base_url, job.output_dir, artifacts)
    lifecycle.advance(JobState.RESPONDED)
    logger.info("job_id=%s responding with %s chunk(s)", job.job_id, len(urls))
    return success_response(urls), job


def finish_job(lifecycle: JobLifecycle, source_path: Path) -> None:
    """Post-response step: remove the source upload. Failures are logged by delete_source."""
    lifecycle.advance(JobState.CLEANING_UP)
    delete_source(source_path)
    lifecycle.advance(JobState.DONE)
