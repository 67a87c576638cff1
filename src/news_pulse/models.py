"""Data models for News Pulse."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Placeholder URL for items that have no real link.
# 无真实链接时使用的占位 URL，去重时改用 (title, published_at) 作为 key。
NO_LINK = "#"

CATEGORIES: tuple[str, ...] = (
    "general",
    "technology",
    "business",
    "science",
    "health",
    "sports",
    "entertainment",
)


class Platform(str, Enum):
    HEADLINE_API = "HeadlineAPI"
    VIDEO_API = "VideoAPI"
    FORUM = "Forum"
    SYNDICATION = "Syndication"
    FALLBACK = "Fallback"


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


class Item(BaseModel):
    """A single normalized item from any source.

    Frozen: adapters build it once, the classifier returns a tagged copy.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    url: str = NO_LINK
    source_name: str
    source_platform: Platform
    description: str | None = None
    published_at: datetime | None = None
    image_url: str | None = None
    sentiment: Sentiment | None = None  # set by classifier after merge

    @property
    def has_link(self) -> bool:
        return bool(self.url) and self.url != NO_LINK

    @property
    def identity_key(self) -> str | tuple[str, datetime | None]:
        """URL for linked items, else the (title, published_at) pair."""
        if self.has_link:
            return self.url
        return (self.title, self.published_at)


class SourceStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"  # attempted and failed (transport / upstream rejection)
    SKIPPED = "skipped"  # no credential or config, nothing attempted
    CANCELLED = "cancelled"  # superseded by a newer generation


class SourceResult(BaseModel):
    """Outcome of one adapter call."""

    source: str
    status: SourceStatus
    items: list[Item] = []

    @property
    def ok(self) -> bool:
        return self.status is SourceStatus.OK


class FeedResult(BaseModel):
    """What one orchestration cycle hands back to the caller."""

    generation: int
    items: list[Item] = []
    health: dict[str, bool] = {}
    last_success_at: datetime | None = None
    superseded: bool = False
    completed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def is_fallback(self) -> bool:
        return bool(self.items) and all(
            item.source_platform is Platform.FALLBACK for item in self.items
        )
