"""Discord client session that hosts the polling loop."""

import asyncio
import logging

import discord

from uploadwatch.announcer import Announcer
from uploadwatch.config import Settings
from uploadwatch.runner import BotContext, run_forever
from uploadwatch.watermark import WatermarkStore
from uploadwatch.youtube.client import YouTubeSearchClient

logger = logging.getLogger(__name__)


class UploadWatchBot(discord.Client):
    """Bot account that announces uploads once the gateway session is ready."""

    def __init__(self, settings: Settings):
        intents = discord.Intents.none()
        intents.guilds = True
        intents.guild_messages = True
        super().__init__(intents=intents)

        self.settings = settings
        self.context: BotContext | None = None
        self._poll_task: asyncio.Task | None = None
        self._shutdown_task: asyncio.Task | None = None
        self.failed = False

    async def build_context(self) -> BotContext:
        """Resolve the destination channel and wire up the cycle collaborators."""
        channel = await self.fetch_channel(self.settings.discord_channel_id)
        if not isinstance(channel, discord.abc.Messageable):
            raise TypeError(
                f"Channel {self.settings.discord_channel_id} cannot receive messages"
            )

        return BotContext(
            settings=self.settings,
            youtube=YouTubeSearchClient(
                self.settings.youtube_api_key,
                self.settings.youtube_channel_id,
                max_results=self.settings.youtube_max_results,
            ),
            store=WatermarkStore(
                self.settings.watermark_path, self.settings.watermark_bootstrap
            ),
            announcer=Announcer(channel, self.settings.discord_user_id),
        )

    async def on_ready(self) -> None:
        logger.info(f"Bot is ready! Logged in as {self.user}")

        # on_ready fires again after every gateway reconnect
        if self._poll_task is not None:
            return

        try:
            self.context = await self.build_context()
        except (discord.DiscordException, TypeError) as e:
            logger.error(f"Cannot resolve announcement channel: {e}", exc_info=True)
            self.failed = True
            await self.close()
            return

        self._poll_task = asyncio.create_task(run_forever(self.context))

    async def shutdown(self) -> None:
        """Stop polling without waiting for the current cycle and close the session."""
        logger.info("Shutting down...")
        if self.context is not None:
            self.context.stop.set()
        if self._poll_task is not None:
            self._poll_task.cancel()
        await self.close()

    def request_shutdown(self) -> None:
        """Signal handler entry point; schedules shutdown() once."""
        if self._shutdown_task is None:
            self._shutdown_task = asyncio.create_task(self.shutdown())
