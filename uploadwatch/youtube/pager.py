"""Paged lookup of uploads newer than a watermark."""

import logging
from datetime import datetime
from typing import Awaitable, Callable

from uploadwatch.errors import PaginationLimitExceededError

from .models import SearchListResponse, SearchResult, Video

logger = logging.getLogger(__name__)

FetchPage = Callable[[str | None], Awaitable[SearchListResponse]]

DEFAULT_MAX_FETCHES = 100


class VideoPager:
    """Fetch-ahead buffer over the date-descending search results.

    The buffer only grows, and only as far as needed to find the first
    result at or before the requested watermark. One pager is used per
    polling cycle.
    """

    def __init__(
        self,
        first_page: SearchListResponse,
        fetch_page: FetchPage,
        max_fetches: int = DEFAULT_MAX_FETCHES,
    ):
        """Initialize the pager from the first page of results.

        Args:
            first_page: Page already fetched without a continuation token
            fetch_page: Coroutine function fetching the page for a token
            max_fetches: Page fetches allowed per newer_than() call
        """
        self._results: list[SearchResult] = list(first_page.items)
        self._total_results = first_page.page_info.total_results
        self._next_page_token = first_page.next_page_token
        self._fetch_page = fetch_page
        self._max_fetches = max_fetches

    @property
    def has_more(self) -> bool:
        """Whether another page can still be fetched."""
        return (
            self._next_page_token is not None
            and len(self._results) < self._total_results
        )

    @property
    def loaded(self) -> int:
        return len(self._results)

    async def fetch_more(self) -> None:
        """Append the next page of results to the buffer."""
        if not self._next_page_token:
            return

        page = await self._fetch_page(self._next_page_token)
        self._next_page_token = page.next_page_token
        self._results.extend(page.items)

    def _count_newer(self, since: datetime, start: int = 0) -> int:
        """Length of the leading run of results published after ``since``.

        Scans backwards from the end of the buffer down to ``start``; the
        first match is the oldest result that is still newer. Returns
        ``start`` when nothing in the scanned range is newer.
        """
        for index in range(len(self._results) - 1, start - 1, -1):
            if self._results[index].snippet.published_at > since:
                return index + 1
        return start

    async def newer_than(self, since: datetime) -> list[Video]:
        """Return every video published strictly after ``since``, oldest first.

        Fetches more pages while every loaded result is newer than ``since``.

        Raises:
            PaginationLimitExceededError: If max_fetches pages were fetched
                without reaching a result at or before ``since``
        """
        count = self._count_newer(since)
        fetches = 0

        while count == len(self._results) and self.has_more:
            if fetches >= self._max_fetches:
                logger.error(f"Stopped after fetching {fetches} pages")
                raise PaginationLimitExceededError(self._max_fetches)
            logger.info("Fetching more videos...")
            await self.fetch_more()
            fetches += 1
            # Everything before the previous end is already known to be newer
            count = self._count_newer(since, start=count)

        videos = [Video.from_search_result(result) for result in self._results[:count]]
        return [video for video in reversed(videos) if video is not None]
