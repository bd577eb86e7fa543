"""Pydantic models for YouTube Data API search responses."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel

Count = Annotated[int, Field(ge=0, strict=True)]


class ApiModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Thumbnail(ApiModel):
    url: StrictStr
    width: Count
    height: Count


class ResourceId(ApiModel):
    """Identifier of a search result; only one of the ids is set."""

    kind: StrictStr
    video_id: StrictStr | None = None
    channel_id: StrictStr | None = None
    playlist_id: StrictStr | None = None


class Snippet(ApiModel):
    published_at: AwareDatetime
    channel_id: StrictStr
    title: StrictStr
    description: StrictStr
    thumbnails: dict[str, Thumbnail]
    channel_title: StrictStr
    live_broadcast_content: StrictStr


class SearchResult(ApiModel):
    kind: Literal["youtube#searchResult"]
    etag: StrictStr
    id: ResourceId
    snippet: Snippet


class PageInfo(ApiModel):
    total_results: Count
    results_per_page: Count


class SearchListResponse(ApiModel):
    """One page of results from the search.list endpoint."""

    kind: Literal["youtube#searchListResponse"]
    etag: StrictStr
    next_page_token: StrictStr | None = None
    region_code: StrictStr
    page_info: PageInfo
    items: list[SearchResult]


class Video(BaseModel):
    """A newly discovered upload."""

    model_config = ConfigDict(frozen=True)

    video_id: str
    published_at: datetime
    title: str
    description: str
    channel_id: str

    @property
    def watch_url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"

    @classmethod
    def from_search_result(cls, result: SearchResult) -> "Video | None":
        """Build a Video from a search result.

        Returns None for results that are not videos (channels, playlists),
        which the API may return despite the type filter.
        """
        if not result.id.video_id:
            return None
        return cls(
            video_id=result.id.video_id,
            published_at=result.snippet.published_at,
            title=result.snippet.title,
            description=result.snippet.description,
            channel_id=result.snippet.channel_id,
        )
