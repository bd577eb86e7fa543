"""Logging configuration for the upload announcer bot."""

import json
import logging
import sys

from uploadwatch.config import Settings, get_settings


class JsonFormatter(logging.Formatter):
    """JSON formatter for production logging.

    Context passed through ``extra`` (the cycle number, the announced video)
    is copied into the record so failed announcements can be searched by id.
    """

    CONTEXT_FIELDS = ("cycle", "video_id")

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON, including any context fields."""
        base = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        for name in self.CONTEXT_FIELDS:
            if hasattr(record, name):
                base[name] = getattr(record, name)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base)


def setup_logging(settings: Settings | None = None) -> None:
    """Configure logging based on environment."""
    settings = settings or get_settings()
    handler = logging.StreamHandler(sys.stdout)

    if settings.env == "prod":
        handler.setFormatter(JsonFormatter())
    else:
        # Pretty format for development
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())

    # discord.py logs every gateway event at INFO
    logging.getLogger("discord").setLevel(logging.WARNING)
