"""Pydantic models for uploads, segmentation jobs, segment artifacts, and API DTOs."""

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .constants import MSG_CHUNKED


class JobState(str, Enum):
    """Lifecycle state of one upload-to-segments job."""

    RECEIVED = "received"
    VALIDATING = "validating"
    REJECTED = "rejected"
    PROCESSING = "processing"
    STORAGE_FAILED = "storage_failed"
    SEGMENTED = "segmented"
    SEGMENTATION_FAILED = "segmentation_failed"
    LISTING = "listing"
    LIST_FAILED = "list_failed"
    RESPONDED = "responded"
    CLEANING_UP = "cleaning_up"
    DONE = "done"


class UploadedFile(BaseModel):
    """Upload staged on local disk under a generated, collision-resistant name."""

    stored_path: Path = Field(..., description="uploads/<generated_id><original_extension>")
    generated_id: str = Field(..., description="<epoch millis>-<random>")
    original_extension: str = Field("", description="Extension of the client filename, e.g. .mp4")

    @property
    def stored_name(self) -> str:
        return self.stored_path.name


class SegmentationJob(BaseModel):
    """One segmentation run: source file, dedicated output dir, segment duration."""

    job_id: str
    source_path: Path
    output_dir: Path
    segment_duration_seconds: int = Field(..., gt=0)


class SegmentArtifact(BaseModel):
    """Segment file written by ffmpeg; sequence_index is parsed from its filename."""

    filename: str
    sequence_index: int = Field(..., ge=0)


# --- Segmentation outcome (discriminated by outcome) ---

class SegmentationSuccess(BaseModel):
    outcome: Literal["success"] = "success"


class SegmentationFailure(BaseModel):
    outcome: Literal["failure"] = "failure"
    reason: str = Field(..., description="Server-side diagnostic (exit code, stderr tail)")


SegmentationResult = Annotated[
    SegmentationSuccess | SegmentationFailure,
    Field(discriminator="outcome"),
]


# --- API DTOs ---

class ChunkUploadResponse(BaseModel):
    """Response for POST /api/upload on success."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    message: str = MSG_CHUNKED
    chunk_urls: list[str] = Field(
        ..., alias="chunkUrls", description="Segment URLs in ascending sequence order"
    )


class ErrorResponse(BaseModel):
    """Error body for every non-2xx response of POST /api/upload."""

    error: str
