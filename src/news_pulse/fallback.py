"""Static items shown when no source yields anything."""

from datetime import datetime, timezone

from .models import NO_LINK, Item, Platform

FALLBACK_SOURCE = "News Pulse"

FALLBACK_ITEMS: tuple[Item, ...] = (
    Item(
        title="Live sources are unavailable right now",
        description="None of the configured sources returned stories. "
        "Check your API keys and network connection, then refresh.",
        source_name=FALLBACK_SOURCE,
        source_platform=Platform.FALLBACK,
        url=NO_LINK,
        published_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    ),
    Item(
        title="Add an API key to enable headlines and videos",
        description="Set NEWS_API_KEY and YOUTUBE_API_KEY in your environment or .env file.",
        source_name=FALLBACK_SOURCE,
        source_platform=Platform.FALLBACK,
        url=NO_LINK,
        published_at=datetime(2024, 1, 1, 11, 0, tzinfo=timezone.utc),
    ),
    Item(
        title="Reddit and feeds can be configured in config.yaml",
        description="Reddit needs REDDIT_CLIENT_ID and REDDIT_CLIENT_SECRET; "
        "feed lists live under sources.syndication.feeds.",
        source_name=FALLBACK_SOURCE,
        source_platform=Platform.FALLBACK,
        url=NO_LINK,
        published_at=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
    ),
)


def fallback_items() -> list[Item]:
    return list(FALLBACK_ITEMS)
