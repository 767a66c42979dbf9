"""
Error taxonomy for the upload-to-segments pipeline.

Each error carries the HTTP status and the generic message shown to clients.
The constructor argument is the server-side diagnostic and is only logged.
"""


class ChunkerError(Exception):
    """Base class; mapped to an ``{"error": public_message}`` JSON response."""

    status_code = 500
    public_message = "Internal server error."


class ValidationError(ChunkerError):
    """Bad or missing request parameter (user-correctable)."""

    status_code = 400

    def __init__(self, public_message: str) -> None:
        super().__init__(public_message)
        self.public_message = public_message


class SegmentationError(ChunkerError):
    """ffmpeg failed, could not be launched, or timed out. Source file is kept."""

    public_message = "Failed to chunk video."


class ListError(ChunkerError):
    """Segment directory could not be enumerated or ordered after a successful run."""

    public_message = "Failed to list video chunks."


class StorageError(ChunkerError):
    """Directory or upload file could not be provisioned."""

    public_message = "Failed to prepare storage."
