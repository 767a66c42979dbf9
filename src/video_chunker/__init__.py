"""Upload a video, split it into fixed-duration segments, return segment URLs."""

__version__ = "0.1.0"
