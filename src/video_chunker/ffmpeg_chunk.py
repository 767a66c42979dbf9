"""
FFmpeg-based video chunking: time-sliced segments by duration.

Uses -f segment -segment_time with -c copy for keyframe-aligned splits without
re-encoding, and -reset_timestamps 1 so each segment starts at t=0 and plays on
its own. ffmpeg runs as a child process awaited on the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .artifacts import chunk_output_pattern
from .constants import STDERR_TAIL_CHARS
from .models import (
    SegmentationFailure,
    SegmentationJob,
    SegmentationResult,
    SegmentationSuccess,
)

logger = logging.getLogger(__name__)


def build_segment_command(
    input_path: str | Path,
    output_dir: str | Path,
    segment_duration_sec: int,
    *,
    ffmpeg_binary: str = "ffmpeg",
) -> list[str]:
    """
    Build the ffmpeg argv for splitting input_path into output_dir.

    Output pattern: chunk-000.mp4, chunk-001.mp4, ... (see artifacts.CHUNK_FILENAME_TEMPLATE).
    """
    return [
        ffmpeg_binary,
        "-y",
        "-i",
        str(input_path),
        "-c",
        "copy",
        "-f",
        "segment",
        "-segment_time",
        str(segment_duration_sec),
        "-reset_timestamps",
        "1",
        str(chunk_output_pattern(Path(output_dir))),
    ]


def _stderr_tail(stderr: bytes | None) -> str:
    if not stderr:
        return ""
    return stderr.decode(errors="replace").strip()[-STDERR_TAIL_CHARS:]


class FfmpegProcessHandle:
    """Handle for one running ffmpeg child process."""

    def __init__(self, process: asyncio.subprocess.Process, job_id: str) -> None:
        self._process = process
        self._job_id = job_id

    async def wait(self) -> SegmentationResult:
        _, stderr = await self._process.communicate()
        code = self._process.returncode
        if code == 0:
            logger.debug("ffmpeg: job_id=%s exited 0", self._job_id)
            return SegmentationSuccess()
        tail = _stderr_tail(stderr)
        return SegmentationFailure(reason=f"ffmpeg exited with code {code}: {tail}")

    async def cancel(self) -> None:
        if self._process.returncode is not None:
            return
        logger.warning("ffmpeg: job_id=%s terminating pid=%s", self._job_id, self._process.pid)
        try:
            self._process.terminate()
        except ProcessLookupError:
            return
        await self._process.wait()


class FfmpegSegmenter:
    """Segmenter that shells out to ffmpeg (must be on PATH or given as ffmpeg_binary)."""

    def __init__(self, ffmpeg_binary: str = "ffmpeg") -> None:
        self.ffmpeg_binary = ffmpeg_binary

    async def start(self, job: SegmentationJob) -> FfmpegProcessHandle:
        cmd = build_segment_command(
            job.source_path,
            job.output_dir,
            job.segment_duration_seconds,
            ffmpeg_binary=self.ffmpeg_binary,
        )
        logger.info(
            "ffmpeg: job_id=%s start segment_time=%s",
            job.job_id,
            job.segment_duration_seconds,
        )
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
        return FfmpegProcessHandle(process, job.job_id)
