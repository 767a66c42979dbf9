"""Tests for chunk URL building, response payloads, and source cleanup."""

from pathlib import Path

from video_chunker.cleanup import delete_source
from video_chunker.models import SegmentArtifact
from video_chunker.response import build_chunk_urls, error_response, success_response


def test_build_chunk_urls_preserves_order_and_strips_slash() -> None:
    artifacts = [
        SegmentArtifact(filename="chunk-000.mp4", sequence_index=0),
        SegmentArtifact(filename="chunk-001.mp4", sequence_index=1),
    ]
    urls = build_chunk_urls("http://localhost:5001/", Path("/srv/chunks/123-4_mp4"), artifacts)
    assert urls == [
        "http://localhost:5001/chunks/123-4_mp4/chunk-000.mp4",
        "http://localhost:5001/chunks/123-4_mp4/chunk-001.mp4",
    ]


def test_build_chunk_urls_empty() -> None:
    assert build_chunk_urls("http://h", Path("d"), []) == []


def test_success_response_serializes_camel_case() -> None:
    body = success_response(["http://h/chunks/d/chunk-000.mp4"]).model_dump(by_alias=True)
    assert body == {
        "success": True,
        "message": "Video chunked successfully!",
        "chunkUrls": ["http://h/chunks/d/chunk-000.mp4"],
    }


def test_error_response_shape() -> None:
    assert error_response("Failed to chunk video.") == {"error": "Failed to chunk video."}


def test_delete_source_removes_file(tmp_path: Path) -> None:
    source = tmp_path / "upload.mp4"
    source.write_bytes(b"x")
    assert delete_source(source) is True
    assert not source.exists()


def test_delete_source_missing_file_is_logged_not_raised(tmp_path: Path, caplog) -> None:
    assert delete_source(tmp_path / "gone.mp4") is False
    assert "could not delete upload gone.mp4" in caplog.text


def test_build_chunk_urls_percent_encodes_path_segments() -> None:
    artifacts = [SegmentArtifact(filename="chunk #1.mp4", sequence_index=1)]
    urls = build_chunk_urls("http://h", Path("/srv/chunks/12-3_m%p4"), artifacts)
    assert urls == ["http://h/chunks/12-3_m%25p4/chunk%20%231.mp4"]
