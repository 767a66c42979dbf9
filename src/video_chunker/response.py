"""Map ordered segment artifacts to public URLs and build response payloads."""

from pathlib import Path
from urllib.parse import quote

from .constants import CHUNKS_URL_PATH
from .models import ChunkUploadResponse, ErrorResponse, SegmentArtifact


def build_chunk_urls(
    base_url: str,
    output_dir: Path,
    artifacts: list[SegmentArtifact],
) -> list[str]:
    """One URL per artifact, same order: {base_url}/chunks/{output_dir name}/{filename}."""
    base = base_url.rstrip("/")
    dir_name = quote(Path(output_dir).name)
    return [f"{base}{CHUNKS_URL_PATH}/{dir_name}/{quote(a.filename)}" for a in artifacts]


def success_response(chunk_urls: list[str]) -> ChunkUploadResponse:
    return ChunkUploadResponse(chunk_urls=chunk_urls)


def error_response(message: str) -> dict:
    """Error body as sent to clients: {"error": message}."""
    return ErrorResponse(error=message).model_dump()
