"""Polling loop: fetch, reconcile, announce, advance the watermark."""

import asyncio
import logging
from dataclasses import dataclass, field

from uploadwatch.announcer import Announcer
from uploadwatch.config import Settings
from uploadwatch.watermark import WatermarkStore
from uploadwatch.youtube.client import YouTubeSearchClient
from uploadwatch.youtube.models import Video
from uploadwatch.youtube.pager import DEFAULT_MAX_FETCHES, VideoPager

logger = logging.getLogger(__name__)


@dataclass
class BotContext:
    """Long-lived state shared by every polling cycle."""

    settings: Settings
    youtube: YouTubeSearchClient
    store: WatermarkStore
    announcer: Announcer
    cycles: int = 0
    stop: asyncio.Event = field(default_factory=asyncio.Event)


async def check_for_new_videos(
    youtube: YouTubeSearchClient,
    store: WatermarkStore,
    max_fetches: int = DEFAULT_MAX_FETCHES,
) -> list[Video]:
    """Return the channel's uploads published after the stored watermark, oldest first."""
    first_page = await youtube.fetch_page()
    pager = VideoPager(first_page, youtube.fetch_page, max_fetches=max_fetches)
    since = await store.load()
    return await pager.newer_than(since)


async def run_cycle(ctx: BotContext) -> bool:
    """
    Run one polling cycle.

    The watermark only moves when every announcement succeeded, so a partial
    failure re-announces the whole batch next cycle instead of losing videos.

    Returns:
        True if the watermark was advanced, False otherwise

    Raises:
        UploadWatchError: If fetching, paging or the watermark file fails
    """
    ctx.cycles += 1
    logger.info(
        f"Checking for new videos (cycle {ctx.cycles})...", extra={"cycle": ctx.cycles}
    )

    videos = await check_for_new_videos(
        ctx.youtube, ctx.store, ctx.settings.max_page_fetches
    )
    if videos:
        logger.info(f"Found {len(videos)} new video(s)")

    results = await asyncio.gather(*(ctx.announcer.announce(v) for v in videos))

    if not all(results):
        failed = results.count(False)
        logger.error(
            f"{failed} of {len(results)} messages failed to send",
            extra={"cycle": ctx.cycles},
        )
        return False

    await ctx.store.save()
    return True


async def run_forever(ctx: BotContext) -> None:
    """Run polling cycles until the context is told to stop."""
    interval = ctx.settings.poll_interval_seconds
    logger.info(f"Polling every {interval:g}s")

    while not ctx.stop.is_set():
        try:
            await run_cycle(ctx)
        except Exception as e:
            logger.error(f"Polling cycle failed: {e}", exc_info=True)

        try:
            await asyncio.wait_for(ctx.stop.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass

    logger.info("Polling stopped")
