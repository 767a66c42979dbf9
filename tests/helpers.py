"""Test helpers: fake segmenter and handle used instead of ffmpeg."""

import asyncio

from video_chunker.models import (
    SegmentationFailure,
    SegmentationJob,
    SegmentationResult,
    SegmentationSuccess,
)

PUBLIC_BASE_URL = "http://chunks.example.test"


class FakeHandle:
    """Handle that writes the configured segment files on success, or hangs."""

    def __init__(
        self,
        job: SegmentationJob,
        filenames: list[str],
        result: SegmentationResult,
        *,
        hang: bool = False,
    ) -> None:
        self.job = job
        self.filenames = filenames
        self.result = result
        self.hang = hang
        self.cancelled = False

    async def wait(self) -> SegmentationResult:
        if self.hang:
            await asyncio.sleep(3600)
        if isinstance(self.result, SegmentationSuccess):
            for name in self.filenames:
                (self.job.output_dir / name).write_bytes(name.encode())
        return self.result

    async def cancel(self) -> None:
        self.cancelled = True


class FakeSegmenter:
    """Segmenter for tests: records started jobs, returns FakeHandle."""

    def __init__(self) -> None:
        self.filenames = ["chunk-000.mp4", "chunk-001.mp4", "chunk-002.mp4"]
        self.result: SegmentationResult = SegmentationSuccess()
        self.hang = False
        self.started: list[SegmentationJob] = []
        self.handles: list[FakeHandle] = []

    def fail_with(self, reason: str) -> None:
        self.result = SegmentationFailure(reason=reason)

    async def start(self, job: SegmentationJob) -> FakeHandle:
        self.started.append(job)
        handle = FakeHandle(job, self.filenames, self.result, hang=self.hang)
        self.handles.append(handle)
        return handle
