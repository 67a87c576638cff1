"""Deduplication and ordering of one cycle's items.

去重规则：真实链接按 URL，无链接按 (title, published_at)。
重复时保留先出现的条目（adapter 声明顺序，而不是返回顺序）。
"""

import logging
from datetime import datetime, timezone

from .models import Item

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _sort_key(item: Item) -> datetime:
    published = item.published_at or _EPOCH
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return published


def deduplicate(items: list[Item]) -> list[Item]:
    """Drop later items whose identity key was already seen."""
    seen: set = set()
    result: list[Item] = []
    for item in items:
        key = item.identity_key
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result


def merge(per_source: list[list[Item]]) -> list[Item]:
    """Flatten, deduplicate and sort newest first.

    Args:
        per_source: Item lists in adapter declaration order.

    Returns:
        Deduplicated items, descending by ``published_at``. Items without
        a timestamp count as epoch and keep their input order at the end.
    """
    flat = [item for items in per_source for item in items]
    unique = deduplicate(flat)
    # sorted() is stable, so ties keep declaration order
    result = sorted(unique, key=_sort_key, reverse=True)
    logger.info("Merge: %d → %d items (-%d duplicates)", len(flat), len(result), len(flat) - len(result))
    return result
