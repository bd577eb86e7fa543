"""Discord announcements for newly discovered uploads."""

import logging

import discord

from uploadwatch.errors import AnnouncementError
from uploadwatch.youtube.models import Video

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "🎥 **<@{user_id}> uploaded a new video!**\n**{title}**\n{url}"


class Announcer:
    """Posts one message per new video to a resolved Discord channel."""

    def __init__(
        self,
        channel: discord.abc.Messageable,
        mention_user_id: str,
        template: str = DEFAULT_TEMPLATE,
    ):
        self.channel = channel
        self.mention_user_id = mention_user_id
        self.template = template

    def format_message(self, video: Video) -> str:
        """Render the announcement text for a video."""
        return self.template.format(
            user_id=self.mention_user_id,
            title=video.title,
            url=video.watch_url,
        )

    async def _deliver(self, video: Video, content: str) -> None:
        try:
            # Silent messages skip push and desktop notifications
            await self.channel.send(content, silent=True)
        except discord.DiscordException as e:
            raise AnnouncementError(
                f"Discord rejected announcement: {e}", video.video_id
            ) from e

    async def announce(self, video: Video) -> bool:
        """
        Send the announcement for a video.

        Args:
            video: The video to announce

        Returns:
            True if the message was sent, False otherwise
        """
        try:
            content = self.format_message(video)
            await self._deliver(video, content)
        except Exception as e:
            logger.error(
                f"Error sending announcement for video {video.video_id}: {e}",
                exc_info=True,
                extra={"video_id": video.video_id},
            )
            return False

        logger.info(
            f"Sent announcement for video {video.video_id}: {video.title}",
            extra={"video_id": video.video_id},
        )
        return True
