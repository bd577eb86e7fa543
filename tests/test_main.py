"""Tests for the process entry point."""

import asyncio
import os
import signal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic_settings import SettingsConfigDict

import main
import uploadwatch.config
from uploadwatch.config import Settings

REQUIRED_ENV = {
    "DISCORD_BOT_TOKEN": "test-bot-token",
    "DISCORD_CHANNEL_ID": "1234",
    "DISCORD_USER_ID": "42",
    "YOUTUBE_API_KEY": "test-api-key",
    "YOUTUBE_CHANNEL_ID": "UC_test",
}


@pytest.fixture
def fresh_settings():
    """Reset the settings singleton and ignore any local .env file."""
    original_config = Settings.model_config
    Settings.model_config = SettingsConfigDict(extra="ignore")
    uploadwatch.config._settings = None
    try:
        yield
    finally:
        Settings.model_config = original_config
        uploadwatch.config._settings = None


def make_bot(failed: bool = False):
    """A mock UploadWatchBot usable as an async context manager."""
    bot = MagicMock()
    bot.__aenter__ = AsyncMock(return_value=bot)
    bot.__aexit__ = AsyncMock(return_value=None)
    bot.start = AsyncMock()
    bot.settings.discord_bot_token = "test-bot-token"
    bot.failed = failed
    return bot


def test_main_invalid_config_exits_1(fresh_settings):
    """Missing configuration is fatal before the bot starts."""
    with (
        patch.dict(os.environ, {}, clear=True),
        patch("main.asyncio.run") as mock_run,
    ):
        with pytest.raises(SystemExit) as exc_info:
            main.main()

    assert exc_info.value.code == 1
    mock_run.assert_not_called()


def test_main_exits_with_run_status(fresh_settings):
    with (
        patch.dict(os.environ, REQUIRED_ENV, clear=True),
        patch("main.setup_logging") as mock_setup_logging,
        patch("main.run", new=MagicMock(return_value="run-coro")),
        patch("main.asyncio.run", return_value=0) as mock_run,
    ):
        with pytest.raises(SystemExit) as exc_info:
            main.main()

    assert exc_info.value.code == 0
    mock_setup_logging.assert_called_once()
    mock_run.assert_called_once_with("run-coro")


@pytest.mark.asyncio
async def test_run_clean_stop_returns_0():
    bot = make_bot()
    loop = asyncio.get_running_loop()

    with (
        patch("main.get_settings"),
        patch("main.UploadWatchBot", return_value=bot),
        patch.object(loop, "add_signal_handler") as mock_add_handler,
    ):
        status = await main.run()

    assert status == 0
    bot.start.assert_awaited_once_with("test-bot-token")
    installed = {c.args[0]: c.args[1] for c in mock_add_handler.call_args_list}
    assert set(installed) == {signal.SIGINT, signal.SIGTERM}

    # The handler asks the bot to shut down
    installed[signal.SIGINT]()
    bot.request_shutdown.assert_called_once_with()


@pytest.mark.asyncio
async def test_run_failed_bot_returns_1():
    """A bot that could not resolve its channel exits non-zero."""
    bot = make_bot(failed=True)
    loop = asyncio.get_running_loop()

    with (
        patch("main.get_settings"),
        patch("main.UploadWatchBot", return_value=bot),
        patch.object(loop, "add_signal_handler"),
    ):
        assert await main.run() == 1
