"""Tests for env-driven settings and startup directory bootstrap."""

from pathlib import Path

import pytest

from video_chunker.config import ChunkerSettings, bootstrap_env, get_settings
from video_chunker.errors import StorageError
from video_chunker.main import create_app


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "UPLOADS_ROOT", "CHUNKS_ROOT", "PUBLIC_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.port == 5001
    assert settings.uploads_root == Path("uploads")
    assert settings.chunks_root == Path("chunks")
    assert settings.public_base_url is None
    assert settings.segment_timeout_sec is None


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CHUNKS_ROOT", str(tmp_path / "c"))
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://cdn.example.test")
    monkeypatch.setenv("SEGMENT_TIMEOUT_SEC", "120")
    settings = get_settings()
    assert settings.port == 8080
    assert settings.chunks_root == tmp_path / "c"
    assert settings.public_base_url == "https://cdn.example.test"
    assert settings.segment_timeout_sec == 120


def test_bootstrap_env_loads_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / "chunker.env"
    env_file.write_text("PORT=6123\n")
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.setenv("VIDEO_CHUNKER_ENV_FILE", str(env_file))

    bootstrap_env()
    try:
        assert get_settings().port == 6123
    finally:
        monkeypatch.delenv("PORT", raising=False)


def test_create_app_creates_both_roots(tmp_path: Path) -> None:
    settings = ChunkerSettings(uploads_root=tmp_path / "u", chunks_root=tmp_path / "x" / "c")
    create_app(settings)
    assert (tmp_path / "u").is_dir()
    assert (tmp_path / "x" / "c").is_dir()


def test_create_app_fails_when_root_is_a_file(tmp_path: Path) -> None:
    (tmp_path / "u").write_text("file")
    settings = ChunkerSettings(uploads_root=tmp_path / "u", chunks_root=tmp_path / "c")
    with pytest.raises(StorageError):
        create_app(settings)


def test_bootstrap_env_does_not_override_existing_vars(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    env_file = tmp_path / "chunker.env"
    env_file.write_text("PORT=6123\n")
    monkeypatch.setenv("PORT", "7000")
    monkeypatch.setenv("VIDEO_CHUNKER_ENV_FILE", str(env_file))

    bootstrap_env()

    assert get_settings().port == 7000
