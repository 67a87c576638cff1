"""Headline API adapter (NewsAPI-style JSON envelope).

Topical mode reads ``/top-headlines?category=``, search mode reads
``/everything?q=``. 需要 API Key，未配置时跳过。

Envelope: {"status": "ok"|"error", "message": ..., "articles": [
    {"title", "description", "url", "urlToImage", "publishedAt",
     "source": {"name"}}]}
"""

import logging

import httpx

from ..cancellation import CancelToken
from ..models import Item, Platform
from ..normalize import clean_description, clean_image, clean_url, parse_iso
from .base import BaseAdapter, UpstreamError

logger = logging.getLogger(__name__)

# NewsAPI 对已下架文章返回的占位标题
_REMOVED = "[Removed]"


def normalize_article(article: dict) -> Item | None:
    """Map one NewsAPI article onto an Item; None for unusable entries."""
    title = (article.get("title") or "").strip()
    if not title or title == _REMOVED:
        return None

    source = article.get("source") or {}
    return Item(
        title=title,
        url=clean_url(article.get("url")),
        source_name=source.get("name") or "Headlines",
        source_platform=Platform.HEADLINE_API,
        description=clean_description(article.get("description"), markup=True),
        published_at=parse_iso(article.get("publishedAt")),
        image_url=clean_image(article.get("urlToImage")),
    )


class HeadlineAdapter(BaseAdapter):
    """Headline API adapter (primary news source)."""

    name = "headlines"
    platform = Platform.HEADLINE_API

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://newsapi.org/v2",
        country: str = "us",
        language: str = "en",
        page_size: int = 30,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.country = country
        self.language = language
        self.page_size = page_size

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _request(self, query: str, category: str) -> tuple[str, dict]:
        if query:
            return f"{self.base_url}/everything", {
                "q": query,
                "language": self.language,
                "sortBy": "publishedAt",
                "pageSize": self.page_size,
            }
        return f"{self.base_url}/top-headlines", {
            "country": self.country,
            "category": category,
            "pageSize": self.page_size,
        }

    def _collect(self, query: str, category: str, cancel: CancelToken) -> list[Item]:
        url, params = self._request(query, category)
        logger.info("Fetching headlines: %s (q=%r, category=%s)", url, query, category)

        with self._client(headers={"X-Api-Key": self.api_key}) as client:
            payload = self._get(client, url, cancel, params=params).json()

        if payload.get("status") == "error":
            raise UpstreamError(
                f"{payload.get('code', 'unknown')}: {payload.get('message', '')}"
            )

        items: list[Item] = []
        for article in payload.get("articles") or []:
            item = normalize_article(article)
            if item is not None:
                items.append(item)
        return items
