"""Forum adapter via PRAW (Reddit).

Topical mode reads ``hot`` from the category's subreddits (joined into one
multireddit); search mode runs a search on ``search_subreddit``.
Reddit API 免费 100 QPM，需要 client id / secret。
"""

import logging

import praw

from ..cancellation import CancelToken
from ..models import Item, Platform
from ..normalize import clean_description, clean_image, clean_url, parse_epoch
from .base import BaseAdapter

logger = logging.getLogger(__name__)

REDDIT_BASE = "https://www.reddit.com"

_SELFTEXT_LIMIT = 300


def normalize_post(post) -> Item | None:
    """Map one PRAW submission onto an Item."""
    title = (getattr(post, "title", "") or "").strip()
    if not title:
        return None

    permalink = getattr(post, "permalink", "") or ""
    if getattr(post, "is_self", False) or not getattr(post, "url", ""):
        url = clean_url(f"{REDDIT_BASE}{permalink}" if permalink else "")
    else:
        url = clean_url(post.url)

    return Item(
        title=title,
        url=url,
        source_name=getattr(post, "subreddit_name_prefixed", "") or "Reddit",
        source_platform=Platform.FORUM,
        description=clean_description(
            getattr(post, "selftext", ""), limit=_SELFTEXT_LIMIT
        ),
        published_at=parse_epoch(getattr(post, "created_utc", None)),
        # "self" / "default" / "nsfw" 不是真实缩略图
        image_url=clean_image(getattr(post, "thumbnail", "")),
    )


class ForumAdapter(BaseAdapter):
    """Reddit adapter (community signal source)."""

    name = "forum"
    platform = Platform.FORUM

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        subreddits: dict[str, list[str]] | None = None,
        search_subreddit: str = "all",
        limit: int = 20,
        user_agent: str = "news-pulse/0.1.0",
        timeout: float = 15.0,
    ) -> None:
        super().__init__(timeout=timeout)
        self.client_id = client_id
        self.client_secret = client_secret
        self.subreddits = subreddits or {"general": ["news", "worldnews"]}
        self.search_subreddit = search_subreddit
        self.limit = limit
        self.user_agent = user_agent

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _listing(self, reddit: praw.Reddit, query: str, category: str):
        if query:
            logger.info("Searching Reddit: r/%s q=%r", self.search_subreddit, query)
            return reddit.subreddit(self.search_subreddit).search(
                query, sort="new", time_filter="week", limit=self.limit
            )
        # 未知分类原样当作 subreddit 名
        names = self.subreddits.get(category) or [category]
        multi = "+".join(names)
        logger.info("Fetching Reddit: r/%s (hot, limit=%d)", multi, self.limit)
        return reddit.subreddit(multi).hot(limit=self.limit)

    def _collect(self, query: str, category: str, cancel: CancelToken) -> list[Item]:
        reddit = praw.Reddit(
            client_id=self.client_id,
            client_secret=self.client_secret,
            user_agent=self.user_agent,
            timeout=self.timeout,
        )
        reddit.read_only = True

        items: list[Item] = []
        # PRAW pages lazily, so each step of the listing can hit the network
        for post in self._listing(reddit, query, category):
            cancel.raise_if_cancelled()
            if getattr(post, "stickied", False):
                continue
            item = normalize_post(post)
            if item is not None:
                items.append(item)
        return items
