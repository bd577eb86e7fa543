"""YouTube Data API v3 client for searching a channel's uploads."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from uploadwatch.errors import MalformedResponseError, RemoteFetchError

from .models import SearchListResponse

logger = logging.getLogger(__name__)


class YouTubeSearchClient:
    """Client for the search.list endpoint, scoped to a single channel.

    Fetches one page per call, newest uploads first. Errors are never retried
    here; the caller decides when to try again.
    """

    BASE = "https://www.googleapis.com/youtube/v3"

    def __init__(self, api_key: str, channel_id: str, max_results: int | None = None):
        """Initialize the search client.

        Args:
            api_key: YouTube Data API key
            channel_id: Channel whose uploads are searched
            max_results: Page size; the API default (5) is used when None
        """
        self.api_key = api_key
        self.channel_id = channel_id
        self.max_results = max_results

    async def fetch_page(self, page_token: str | None = None) -> SearchListResponse:
        """Fetch one page of the channel's videos ordered by publish date.

        Args:
            page_token: Continuation token from a previous page

        Returns:
            The validated search response

        Raises:
            RemoteFetchError: On transport errors or a non-2xx response
            MalformedResponseError: If the body does not match the schema
        """
        params: dict[str, Any] = {
            "key": self.api_key,
            "channelId": self.channel_id,
            "part": "snippet",
            "order": "date",
            "type": "video",
        }
        if self.max_results is not None:
            params["maxResults"] = self.max_results
        if page_token:
            params["pageToken"] = page_token

        try:
            async with httpx.AsyncClient(timeout=15) as client:
                r = await client.get(f"{self.BASE}/search", params=params)
        except httpx.HTTPError as e:
            raise RemoteFetchError(f"Request to YouTube failed: {e}") from e

        if not 200 <= r.status_code < 300:
            payload = _error_payload(r)
            logger.error(f"Error fetching YouTube videos ({r.status_code}): {payload}")
            raise RemoteFetchError(
                f"Failed to fetch YouTube videos: HTTP {r.status_code}",
                status_code=r.status_code,
                payload=payload,
            )

        try:
            data = r.json()
        except ValueError as e:
            raise MalformedResponseError("YouTube response is not valid JSON") from e

        try:
            return SearchListResponse.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected YouTube response: {e}") from e


def _error_payload(response: httpx.Response) -> Any:
    """Best-effort decoding of an API error body for diagnostics."""
    try:
        return response.json()
    except ValueError:
        return response.text
