"""Upload announcer bot - process entry point."""

import asyncio
import logging
import signal
import sys

from pydantic import ValidationError

from uploadwatch.bot import UploadWatchBot
from uploadwatch.config import get_settings
from uploadwatch.logging import setup_logging

logger = logging.getLogger(__name__)


async def run() -> int:
    """Run the bot until SIGINT or SIGTERM and return the exit status."""
    bot = UploadWatchBot(get_settings())

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, bot.request_shutdown)

    async with bot:
        await bot.start(bot.settings.discord_bot_token)

    return 1 if bot.failed else 0


def main() -> None:
    """Entry point for running the bot."""
    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Invalid configuration:\n{e}")
        sys.exit(1)

    setup_logging(settings)
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
