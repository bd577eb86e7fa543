"""YouTube Data API search and paging."""

from .client import YouTubeSearchClient
from .models import SearchListResponse, Video
from .pager import VideoPager

__all__ = ["SearchListResponse", "Video", "VideoPager", "YouTubeSearchClient"]
