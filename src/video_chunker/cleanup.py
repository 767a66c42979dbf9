"""Best-effort removal of the uploaded source once its segments exist."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def delete_source(source_path: Path) -> bool:
    """
    Delete the uploaded source file. Never raises and never retries.

    Returns True if the file was removed. Runs after the response has been sent,
    so a failure here is only logged.
    """
    try:
        Path(source_path).unlink()
    except OSError as e:
        logger.error("cleanup: could not delete upload %s: %s", Path(source_path).name, e)
        return False
    logger.info("cleanup: deleted upload %s", Path(source_path).name)
    return True
