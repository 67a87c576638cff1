"""Video API adapter (YouTube Data API v3 search).

Search mode uses the user query; topical mode searches "<category> news".
YouTube API 需要 API Key，未配置时跳过。
"""

import logging

import httpx

from ..cancellation import CancelToken
from ..models import NO_LINK, Item, Platform
from ..normalize import clean_description, clean_image, parse_iso
from .base import BaseAdapter, UpstreamError

logger = logging.getLogger(__name__)

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="

# 缩略图优先级：清晰度从高到低
_THUMBNAIL_SIZES = ("high", "medium", "default")


def _pick_thumbnail(thumbnails: dict) -> str | None:
    for size in _THUMBNAIL_SIZES:
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return clean_image(url)
    return None


def normalize_video(entry: dict) -> Item | None:
    """Map one search result onto an Item; None for non-video entries."""
    snippet = entry.get("snippet") or {}
    title = clean_description(snippet.get("title"), markup=True)
    if not title:
        return None

    video_id = (entry.get("id") or {}).get("videoId")
    return Item(
        title=title,
        url=f"{YOUTUBE_WATCH_URL}{video_id}" if video_id else NO_LINK,
        source_name=snippet.get("channelTitle") or "YouTube",
        source_platform=Platform.VIDEO_API,
        description=clean_description(snippet.get("description"), markup=True),
        published_at=parse_iso(snippet.get("publishedAt")),
        image_url=_pick_thumbnail(snippet.get("thumbnails") or {}),
    )


class VideoAdapter(BaseAdapter):
    """Video API adapter (news clips)."""

    name = "videos"
    platform = Platform.VIDEO_API

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://www.googleapis.com/youtube/v3",
        region: str = "US",
        max_results: int = 15,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.region = region
        self.max_results = max_results

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _collect(self, query: str, category: str, cancel: CancelToken) -> list[Item]:
        params = {
            "part": "snippet",
            "type": "video",
            "order": "date",
            "q": query or f"{category} news",
            "maxResults": self.max_results,
            "regionCode": self.region,
            "key": self.api_key,
        }
        logger.info("Fetching videos: q=%r", params["q"])

        with self._client() as client:
            payload = self._get(client, f"{self.base_url}/search", cancel, params=params).json()

        if "error" in payload:
            error = payload["error"] or {}
            raise UpstreamError(f"{error.get('code', 'unknown')}: {error.get('message', '')}")

        items: list[Item] = []
        for entry in payload.get("items") or []:
            item = normalize_video(entry)
            if item is not None:
                items.append(item)
        return items
