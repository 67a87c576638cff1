"""Syndication feed adapter (RSS / Atom).

Fetches a set of feeds per category via httpx and parses them with
feedparser. 单个 feed 失败不影响其它 feed；至少一个 feed 有结果才算成功。
"""

import logging

import feedparser
import httpx

from ..cancellation import CancelToken, FetchCancelled
from ..config import FeedSource
from ..models import Item, Platform
from ..normalize import (
    clean_description,
    clean_image,
    clean_url,
    matches_all_terms,
    parse_struct_time,
    strip_html,
)
from .base import BaseAdapter, ConfigGap, UpstreamError

logger = logging.getLogger(__name__)

_ACCEPT = "application/rss+xml, application/atom+xml, application/xml, text/xml, */*"


def _entry_image(entry: dict) -> str | None:
    """First usable image reference of a feed entry."""
    for key in ("media_thumbnail", "media_content"):
        for media in entry.get(key) or []:
            medium = media.get("medium") or media.get("type") or "image"
            if medium.startswith("image") and clean_image(media.get("url")):
                return clean_image(media.get("url"))
    for link in entry.get("links") or []:
        if link.get("rel") == "enclosure" and (link.get("type") or "").startswith("image/"):
            return clean_image(link.get("href"))
    return None


def normalize_entry(entry: dict, feed_name: str, description_limit: int) -> Item | None:
    """Map one feedparser entry onto an Item."""
    title = strip_html(entry.get("title"))
    if not title:
        return None

    raw = entry.get("summary") or ""
    if not raw and entry.get("content"):
        raw = entry["content"][0].get("value", "")

    return Item(
        title=title,
        url=clean_url(entry.get("link")),
        source_name=feed_name,
        source_platform=Platform.SYNDICATION,
        description=clean_description(raw, limit=description_limit, markup=True),
        published_at=parse_struct_time(entry),
        image_url=_entry_image(entry),
    )


class SyndicationAdapter(BaseAdapter):
    """RSS/Atom adapter aggregating several feeds."""

    name = "feeds"
    platform = Platform.SYNDICATION

    def __init__(
        self,
        feeds: dict[str, list[FeedSource]] | None = None,
        per_feed_limit: int = 15,
        description_limit: int = 200,
        default_category: str = "general",
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.feeds = feeds or {}
        self.per_feed_limit = per_feed_limit
        self.description_limit = description_limit
        self.default_category = default_category

    @property
    def configured(self) -> bool:
        return any(self.feeds.values())

    def _feed_set(self, query: str, category: str) -> list[FeedSource]:
        if not query:
            return self.feeds.get(category) or self.feeds.get(self.default_category) or []
        # 搜索模式：所有分类的 feed 去重合并
        seen: set[str] = set()
        result: list[FeedSource] = []
        for sources in self.feeds.values():
            for source in sources:
                if source.url not in seen:
                    seen.add(source.url)
                    result.append(source)
        return result

    def _fetch_feed(
        self,
        source: FeedSource,
        client: httpx.Client,
        cancel: CancelToken,
        query: str,
    ) -> list[Item]:
        resp = self._get(client, source.url, cancel)
        feed = feedparser.parse(resp.content)
        if feed.bozo and not feed.entries:
            raise UpstreamError(f"unparseable feed: {feed.bozo_exception}")

        items: list[Item] = []
        for entry in feed.entries[: self.per_feed_limit]:
            item = normalize_entry(entry, source.name, self.description_limit)
            if item is None:
                continue
            if query and not matches_all_terms(f"{item.title} {item.description or ''}", query):
                continue
            items.append(item)
        return items

    def _collect(self, query: str, category: str, cancel: CancelToken) -> list[Item]:
        sources = self._feed_set(query, category)
        if not sources:
            raise ConfigGap(f"no feeds for category {category!r}")
        items: list[Item] = []
        yielded = 0

        with self._client(headers={"Accept": _ACCEPT}) as client:
            for source in sources:
                logger.info("Fetching feed: %s (%s)", source.name, source.url)
                try:
                    feed_items = self._fetch_feed(source, client, cancel, query)
                except FetchCancelled:
                    raise
                except Exception:
                    logger.exception("Failed to fetch feed %s", source.name)
                    continue
                if feed_items:
                    yielded += 1
                items.extend(feed_items)

        if not yielded:
            raise UpstreamError(f"none of {len(sources)} feeds yielded items")
        logger.debug("Feeds: %d/%d feeds yielded items", yielded, len(sources))
        return items
