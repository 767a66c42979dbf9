"""
Service config from environment with defaults.
Single place for env-derived values: listen address, storage roots, public URL, ffmpeg.
Uses pydantic-settings so all env vars are validated and documented in one model.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChunkerSettings(BaseSettings):
    """
    All environment variables used by the chunker.
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).
    """

    model_config = SettingsConfigDict(
        env_file=None,  # .env is loaded via bootstrap_env() before settings are read
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = Field(5001, ge=1, le=65535)

    # Upload staging area and segment output root, created at startup
    uploads_root: Path = Path("uploads")
    chunks_root: Path = Path("chunks")

    # Prefix for returned chunk URLs; request base URL when unset
    public_base_url: str | None = None

    ffmpeg_binary: str = "ffmpeg"
    # No timeout when unset: a hung ffmpeg keeps the request pending
    segment_timeout_sec: float | None = Field(None, gt=0)

    cors_allow_origins: list[str] = ["*"]
    log_level: str = "INFO"


def get_settings() -> ChunkerSettings:
    """Return validated settings from current environment."""
    return ChunkerSettings()


def bootstrap_env() -> None:
    """
    Merge a local env file (PORT, CHUNKS_ROOT, PUBLIC_BASE_URL, ...) into os.environ.

    The file is named by VIDEO_CHUNKER_ENV_FILE; nothing is loaded when it is unset.
    Variables already in the environment win over the file.
    """
    import os

    import dotenv

    path = os.environ.get("VIDEO_CHUNKER_ENV_FILE")
    if path:
        dotenv.load_dotenv(Path(path).resolve())
