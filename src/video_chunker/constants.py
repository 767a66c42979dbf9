"""Shared constants (URL paths, client-facing messages, I/O sizes)."""

# Static mount for produced segments: /chunks/{job_dir}/{filename}
CHUNKS_URL_PATH = "/chunks"

UPLOAD_FIELD = "video"
DURATION_FIELD = "chunkDuration"

MSG_NO_VIDEO = "No video file uploaded."
MSG_INVALID_DURATION = "Invalid chunk duration."
MSG_CHUNKED = "Video chunked successfully!"

UPLOAD_READ_CHUNK_BYTES = 1024 * 1024  # 1 MB

# Keep the last part of ffmpeg stderr in failure logs
STDERR_TAIL_CHARS = 2000
