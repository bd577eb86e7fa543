"""Exception hierarchy for the upload announcer bot.

Fetch, pagination and watermark errors propagate up to the polling loop,
which logs them and tries again on the next cycle. Announcement errors are
handled per video inside the announcer.
"""

from pathlib import Path
from typing import Any


class UploadWatchError(Exception):
    """Base class for all upload announcer errors."""


class RemoteFetchError(UploadWatchError):
    """The YouTube API request failed or returned a non-success status."""

    def __init__(
        self, message: str, status_code: int | None = None, payload: Any = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class MalformedResponseError(UploadWatchError):
    """The YouTube API response did not match the expected schema."""


class PaginationLimitExceededError(UploadWatchError):
    """Too many pages were fetched without reaching the watermark."""

    def __init__(self, limit: int):
        super().__init__(f"Fetched {limit} pages without reaching the watermark")
        self.limit = limit


class WatermarkStoreError(UploadWatchError):
    """The watermark file could not be read, parsed or written."""

    def __init__(self, message: str, path: Path):
        super().__init__(f"{message}: {path}")
        self.path = path


class AnnouncementError(UploadWatchError):
    """A single announcement could not be delivered."""

    def __init__(self, message: str, video_id: str):
        super().__init__(message)
        self.video_id = video_id
