"""Watermark persistence: the timestamp up to which uploads were announced."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from uploadwatch.errors import WatermarkStoreError

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """Normalize a timestamp to UTC, treating naive values as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO 8601 timestamp, treating naive values as UTC.

    Raises:
        ValueError: If the text is not a valid timestamp
    """
    # Convert Z to +00:00 for proper parsing
    return as_utc(datetime.fromisoformat(text.strip().replace("Z", "+00:00")))


def format_timestamp(value: datetime) -> str:
    """Encode a timestamp as UTC with millisecond precision, e.g. 2025-08-01T12:00:00.000Z."""
    value = as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class WatermarkStore:
    """Single-file store for the last checked timestamp."""

    def __init__(self, path: Path, bootstrap: datetime):
        """Initialize the store.

        Args:
            path: File holding the watermark
            bootstrap: Value returned while the file does not exist yet
        """
        self.path = path
        self.bootstrap = as_utc(bootstrap)

    async def load(self) -> datetime:
        """Read the watermark.

        Returns:
            The stored timestamp, or the bootstrap value if no file exists

        Raises:
            WatermarkStoreError: If the file cannot be read or parsed
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"No watermark at {self.path}, starting from {self.bootstrap}")
            return self.bootstrap
        except (OSError, UnicodeDecodeError) as e:
            raise WatermarkStoreError("Cannot read watermark file", self.path) from e

        try:
            return parse_timestamp(text)
        except ValueError as e:
            raise WatermarkStoreError("Corrupt watermark file", self.path) from e

    async def save(self, when: datetime | None = None) -> None:
        """Overwrite the watermark.

        Args:
            when: New watermark; defaults to the current time

        Raises:
            WatermarkStoreError: If the file cannot be written
        """
        value = format_timestamp(when or datetime.now(timezone.utc))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(value, encoding="utf-8")
        except OSError as e:
            raise WatermarkStoreError("Cannot write watermark file", self.path) from e

        logger.info(f"Watermark advanced to {value}")
