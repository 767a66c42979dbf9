"""
Local workspace: upload staging area, segment output root, per-job output dirs.

Process-wide state is only the two root paths from settings. Every upload gets a
generated id (epoch millis + random) and every job a directory derived from it,
so concurrent jobs never share a path.
"""

from __future__ import annotations

import logging
import re
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from .constants import UPLOAD_READ_CHUNK_BYTES
from .errors import StorageError
from .models import UploadedFile

logger = logging.getLogger(__name__)

# Stored extension becomes part of the job dir name and the ffmpeg output path
_SAFE_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]+")


def ensure_dir(path: str | Path) -> Path:
    """Create path (and parents) if missing. Raises StorageError if it cannot be a directory."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"cannot create directory {path}: {e}") from e
    return path


def generate_upload_id() -> str:
    """Time-based id with a random suffix, e.g. 1718040000123-482913377."""
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"


def safe_extension(filename: str | None) -> str:
    """Extension of the client filename if it is plain alphanumeric, else empty."""
    suffix = Path(filename or "").suffix
    if _SAFE_EXTENSION_RE.fullmatch(suffix):
        return suffix
    return ""


def job_output_dir(chunks_root: Path, stored_name: str) -> Path:
    """Output dir for a job: stored upload name with its extension dot replaced."""
    return Path(chunks_root) / stored_name.replace(".", "_", 1)


async def save_upload(upload: UploadFile, uploads_root: Path) -> UploadedFile:
    """
    Stream an uploaded file into uploads_root under a new generated name.

    Opens with exclusive create so an id collision fails instead of overwriting
    another job's source. Raises StorageError on any filesystem error; a
    partially written file is removed.
    """
    extension = safe_extension(upload.filename)
    generated_id = generate_upload_id()
    stored_path = Path(uploads_root) / f"{generated_id}{extension}"
    total = 0
    try:
        with open(stored_path, "xb") as f:
            while chunk := await upload.read(UPLOAD_READ_CHUNK_BYTES):
                f.write(chunk)
                total += len(chunk)
    except OSError as e:
        if not isinstance(e, FileExistsError):
            stored_path.unlink(missing_ok=True)
        raise StorageError(f"cannot store upload at {stored_path}: {e}") from e
    logger.info("upload stored name=%s bytes=%s", stored_path.name, total)
    return UploadedFile(
        stored_path=stored_path,
        generated_id=generated_id,
        original_extension=extension,
    )
