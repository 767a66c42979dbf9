"""
Segment file naming and ordering.

Single source of truth for the segment filename template handed to ffmpeg and
for parsing the sequence index back out of produced filenames.

Template: chunk-%03d.mp4 -> chunk-000.mp4, chunk-001.mp4, ...
Ordering is by the integer value of the first digit run in each filename, so
chunk-1000.mp4 sorts after chunk-999.mp4 even though the padding is exceeded.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from .errors import ListError
from .models import SegmentArtifact

logger = logging.getLogger(__name__)

CHUNK_FILENAME_TEMPLATE = "chunk-%03d.mp4"

_FIRST_DIGIT_RUN_RE = re.compile(r"\d+")


def chunk_output_pattern(output_dir: Path) -> Path:
    """Output path template passed to the ffmpeg segment muxer."""
    return Path(output_dir) / CHUNK_FILENAME_TEMPLATE


def parse_sequence_index(filename: str) -> int | None:
    """Return the integer value of the first digit run in filename, or None if there is none."""
    match = _FIRST_DIGIT_RUN_RE.search(filename)
    if not match:
        return None
    return int(match.group(0))


def order_artifacts(filenames: list[str]) -> list[SegmentArtifact]:
    """
    Build artifacts from filenames and sort them by ascending sequence index.

    Raises ListError if any filename has no digit run, since the listing must
    be totally ordered.
    """
    artifacts: list[SegmentArtifact] = []
    for name in filenames:
        index = parse_sequence_index(name)
        if index is None:
            raise ListError(f"no sequence index in segment filename {name!r}")
        artifacts.append(SegmentArtifact(filename=name, sequence_index=index))
    artifacts.sort(key=lambda a: a.sequence_index)
    return artifacts


def list_artifacts(output_dir: Path) -> list[SegmentArtifact]:
    """
    Enumerate output_dir and return its segment files in sequence order.

    Raises ListError if the directory cannot be read or an entry cannot be ordered.
    """
    try:
        filenames = os.listdir(output_dir)
    except OSError as e:
        raise ListError(f"cannot read segment directory {output_dir}: {e}") from e
    artifacts = order_artifacts(filenames)
    expected = list(range(len(artifacts)))
    if [a.sequence_index for a in artifacts] != expected:
        logger.warning(
            "segments in %s are not numbered 0..%s contiguously",
            Path(output_dir).name,
            len(artifacts) - 1,
        )
    return artifacts
