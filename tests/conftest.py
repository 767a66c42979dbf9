"""Pytest fixtures: app built on tmp_path roots with a fake segmenter in app.state."""

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.helpers import PUBLIC_BASE_URL, FakeSegmenter
from video_chunker.config import ChunkerSettings
from video_chunker.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> ChunkerSettings:
    return ChunkerSettings(
        uploads_root=tmp_path / "uploads",
        chunks_root=tmp_path / "chunks",
        public_base_url=PUBLIC_BASE_URL,
    )


@pytest.fixture
def fake_segmenter() -> FakeSegmenter:
    return FakeSegmenter()


@pytest.fixture
def app(settings: ChunkerSettings, fake_segmenter: FakeSegmenter) -> FastAPI:
    """App on tmp_path roots; routes use the fake segmenter."""
    app = create_app(settings)
    app.state.segmenter = fake_segmenter
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
