"""
Interfaces for the external segmentation engine.

Pipeline logic depends on these protocols; the ffmpeg implementation lives in
ffmpeg_chunk and tests inject fakes through app.state.
"""

from typing import Protocol, runtime_checkable

from .models import SegmentationJob, SegmentationResult


@runtime_checkable
class SegmentationHandle(Protocol):
    """A running segmentation task. wait() resolves exactly once with one outcome."""

    async def wait(self) -> SegmentationResult:
        """Suspend until the task finishes; return success or failure(reason)."""
        ...

    async def cancel(self) -> None:
        """Stop the task if it is still running. No-op once it has finished."""
        ...


@runtime_checkable
class Segmenter(Protocol):
    """Starts segmentation tasks: split job.source_path into job.output_dir."""

    async def start(self, job: SegmentationJob) -> SegmentationHandle:
        """Launch the task. Raises OSError if the engine cannot be launched."""
        ...
