"""Log setup for the chunker process (API handlers, ffmpeg runner, cleanup)."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Route video_chunker.* records through one root handler.

    main() calls this with LOG_LEVEL before uvicorn starts; uvicorn keeps its own
    access/error loggers.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
