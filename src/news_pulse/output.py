"""Local output module.

Renders a FeedResult as Markdown and saves it with the raw items as JSON.
"""

import json
import logging
from pathlib import Path

from .models import FeedResult, Sentiment

logger = logging.getLogger(__name__)

_SENTIMENT_MARK = {
    Sentiment.POSITIVE: "+",
    Sentiment.NEGATIVE: "-",
    Sentiment.NEUTRAL: "·",
}


def render_markdown(result: FeedResult, query: str = "", category: str = "") -> str:
    """Generate a Markdown view of one feed."""
    lines: list[str] = []

    heading = f"# News Pulse - {category or 'feed'}"
    if query:
        heading += f" / \"{query}\""
    lines.append(heading)
    lines.append("")
    if result.is_fallback:
        lines.append("> No live sources returned stories; showing fallback content.")
    else:
        lines.append(f"> {len(result.items)} items, generation {result.generation}.")
    if result.last_success_at:
        lines.append(f"> Last successful update: {result.last_success_at.strftime('%Y-%m-%d %H:%M UTC')}")
    lines.append("")

    lines.append("| Source | Status |")
    lines.append("| --- | --- |")
    for name, ok in result.health.items():
        lines.append(f"| {name} | {'up' if ok else 'down'} |")
    lines.append("")
    lines.append("---")
    lines.append("")

    for i, item in enumerate(result.items, 1):
        mark = _SENTIMENT_MARK.get(item.sentiment, " ")
        lines.append(f"## {i}. [{mark}] {item.title}")
        lines.append("")
        lines.append(f"**Source**: `{item.source_platform.value}` / {item.source_name}  ")
        if item.published_at:
            lines.append(f"**Published**: {item.published_at.strftime('%Y-%m-%d %H:%M UTC')}  ")
        if item.has_link:
            lines.append(f"**Link**: [{item.url}]({item.url})")
        lines.append("")
        if item.description:
            lines.append(f"> {item.description}")
            lines.append("")
        lines.append("---")
        lines.append("")

    return "\n".join(lines)


def save_feed(
    result: FeedResult,
    output_dir: str = "output",
    query: str = "",
    category: str = "",
) -> Path:
    """Save a feed to local files.

    Creates:
        <output_dir>/feed.md    - Markdown view
        <output_dir>/feed.json  - Raw FeedResult

    Returns:
        Path to the output directory.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    md_path = out / "feed.md"
    md_path.write_text(render_markdown(result, query, category), encoding="utf-8")
    logger.info("Saved Markdown feed: %s", md_path)

    json_path = out / "feed.json"
    json_path.write_text(
        json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("Saved raw feed: %s", json_path)
    return out
