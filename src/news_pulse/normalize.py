"""Shared helpers that map upstream fields onto the canonical Item.

所有 helper 都是纯函数，缺失的可选字段一律退化为 None，不抛异常。
"""

import html
import re
from calendar import timegm
from datetime import datetime, timezone

from .models import NO_LINK

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def normalize_whitespace(value: str | None) -> str:
    return _WS_RE.sub(" ", value or "").strip()


def strip_html(value: str | None) -> str:
    """Drop markup tags and unescape entities."""
    text = _TAG_RE.sub(" ", value or "")
    text = html.unescape(text)
    return normalize_whitespace(text)


def truncate(text: str, limit: int) -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    return text[: limit - 3].rstrip() + "..."


def clean_description(
    value: str | None,
    limit: int | None = None,
    markup: bool = False,
) -> str | None:
    """Return a display-ready description, or None when nothing is left."""
    text = strip_html(value) if markup else normalize_whitespace(value)
    if limit is not None:
        text = truncate(text, limit)
    return text or None


def clean_url(value: str | None) -> str:
    """Real http(s) link, or the NO_LINK sentinel."""
    value = (value or "").strip()
    if value.startswith(("http://", "https://")):
        return value
    return NO_LINK


def clean_image(value: str | None) -> str | None:
    """Usable image URL, or None instead of a broken reference."""
    value = (value or "").strip()
    if value.startswith(("http://", "https://")):
        return value
    return None


def parse_iso(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp ("Z" suffix accepted)."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_epoch(value: float | int | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def parse_struct_time(entry: dict) -> datetime | None:
    """Published date from a feedparser entry."""
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            try:
                return datetime.fromtimestamp(timegm(parsed), tz=timezone.utc)
            except (TypeError, ValueError, OverflowError):
                continue
    return None


def matches_keywords(text: str, keywords: list[str]) -> bool:
    """Check if text contains any of the keywords (case-insensitive)."""
    text_lower = text.lower()
    return any(kw.lower() in text_lower for kw in keywords)


def matches_all_terms(text: str, query: str) -> bool:
    """Check that every whitespace-separated term of query occurs in text."""
    text_lower = text.lower()
    return all(term in text_lower for term in query.lower().split())
