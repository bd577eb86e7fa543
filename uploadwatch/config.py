"""Configuration management for the upload announcer bot."""

from datetime import datetime, timezone
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

WATERMARK_FILENAME = "last_checked.txt"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Discord bot
    discord_bot_token: str = Field(min_length=1)
    discord_channel_id: int
    discord_user_id: str = Field(min_length=1)

    # YouTube Data API
    youtube_api_key: str = Field(min_length=1)
    youtube_channel_id: str = Field(min_length=1)
    youtube_max_results: int | None = Field(default=None, ge=0, le=50)

    # Watermark storage (defaults to the working directory)
    data_dir: Path | None = None
    watermark_bootstrap: datetime = datetime(2025, 8, 1, tzinfo=timezone.utc)

    # Polling
    poll_interval_seconds: float = Field(default=1800, gt=0)  # 30 minutes
    max_page_fetches: int = Field(default=100, gt=0)

    # Environment
    env: str = Field(default="dev", pattern="^(dev|prod)$")
    log_level: str = Field(default="INFO")

    @property
    def watermark_path(self) -> Path:
        """Location of the watermark file."""
        return (self.data_dir or Path.cwd()) / WATERMARK_FILENAME


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore[call-arg]
    return _settings
