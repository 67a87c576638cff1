"""Main entry point for News Pulse.

Builds the adapters from config, runs one aggregation cycle and prints
(or saves) the resulting feed.
"""

import json
import logging
import sys

from .adapters import REGISTRY, BaseAdapter
from .config import AppConfig, Settings, load_config
from .models import FeedResult
from .orchestrator import Aggregator
from .output import render_markdown, save_feed
from .trigger import SearchTrigger

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging to stderr so stdout stays clean for the feed."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_adapters(config: AppConfig, settings: Settings) -> list[BaseAdapter]:
    """Instantiate all enabled adapters from config, in fan-out order.

    根据 config 实例化所有启用的 adapter；缺少凭证的 adapter 仍然创建，
    在 fetch 时跳过。
    """
    src = config.sources

    adapter_configs: dict[str, dict] = {
        "headline": {
            "enabled": src.headline.enabled,
            "kwargs": {
                "api_key": settings.news_api_key,
                "base_url": src.headline.base_url,
                "country": src.headline.country,
                "language": src.headline.language,
                "page_size": src.headline.page_size,
                "timeout": src.headline.timeout,
            },
        },
        "video": {
            "enabled": src.video.enabled,
            "kwargs": {
                "api_key": settings.youtube_api_key,
                "base_url": src.video.base_url,
                "region": src.video.region,
                "max_results": src.video.max_results,
                "timeout": src.video.timeout,
            },
        },
        "forum": {
            "enabled": src.forum.enabled,
            "kwargs": {
                "client_id": settings.reddit_client_id,
                "client_secret": settings.reddit_client_secret,
                "subreddits": src.forum.subreddits,
                "search_subreddit": src.forum.search_subreddit,
                "limit": src.forum.limit,
                "user_agent": src.forum.user_agent,
            },
        },
        "syndication": {
            "enabled": src.syndication.enabled,
            "kwargs": {
                "feeds": src.syndication.feeds,
                "per_feed_limit": src.syndication.per_feed_limit,
                "description_limit": src.syndication.description_limit,
                "default_category": config.default_category,
                "timeout": src.syndication.timeout,
            },
        },
    }

    adapters: list[BaseAdapter] = []
    for name, cls in REGISTRY.items():
        cfg = adapter_configs[name]
        if not cfg["enabled"]:
            logger.info("Adapter %s is disabled, skipping", name)
            continue
        adapter = cls(**cfg["kwargs"])
        adapters.append(adapter)
        logger.debug("Initialized adapter: %s", adapter)

    return adapters


def interactive(aggregator: Aggregator, config: AppConfig, category: str) -> int:
    """Read search text from stdin and drive the feed through SearchTrigger.

    Plain lines are typed-and-submitted queries; ``:cat <name>`` switches
    category, ``:refresh`` refetches, ``:quit`` exits.
    """
    def show(result: FeedResult) -> None:
        print(render_markdown(result, trigger.query, trigger.category), flush=True)

    trigger = SearchTrigger(
        aggregator,
        on_result=show,
        category=category,
        delay=config.trigger.debounce_seconds,
    )
    trigger.refresh()

    for line in sys.stdin:
        line = line.strip()
        if line in (":q", ":quit"):
            break
        if line.startswith(":cat "):
            trigger.select_category(line[5:].strip())
        elif line == ":refresh":
            trigger.refresh()
        else:
            trigger.text_changed(line)
            trigger.submit()

    trigger.wait()
    return 0


def run(
    config_path: str = "config.yaml",
    query: str = "",
    category: str | None = None,
    as_json: bool = False,
    output_dir: str | None = None,
    verbose: bool = False,
    watch: bool = False,
    save: bool = False,
) -> int:
    """Run one aggregation cycle (or an interactive session) and emit the feed."""
    _setup_logging(verbose)

    config, settings = load_config(config_path)
    category = category or config.default_category

    adapters = build_adapters(config, settings)
    if not adapters:
        logger.warning("No adapters enabled, only fallback content will be shown")

    aggregator = Aggregator(adapters)
    if watch:
        return interactive(aggregator, config, category)

    result = aggregator.fetch(query, category)

    healthy = sum(result.health.values())
    logger.info("Sources up: %d/%d", healthy, len(result.health))

    if save or output_dir:
        save_feed(result, output_dir=output_dir or config.output.dir, query=query, category=category)

    if as_json:
        print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        print(render_markdown(result, query, category))

    return 0


def cli() -> None:
    """CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="News Pulse - multi-source news feed")
    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to config.yaml (default: config.yaml)",
    )
    parser.add_argument("-q", "--query", default="", help="Search text (empty = top stories)")
    parser.add_argument("-k", "--category", default=None, help="Category, e.g. technology")
    parser.add_argument("--json", action="store_true", help="Print the raw feed as JSON")
    parser.add_argument("-s", "--save", action="store_true",
                        help="Save feed.md / feed.json to output.dir from config.yaml")
    parser.add_argument("-o", "--output-dir", default=None, help="Save feed.md / feed.json here (overrides output.dir)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-w", "--watch", action="store_true", help="Read queries from stdin interactively")
    args = parser.parse_args()
    sys.exit(run(
        config_path=args.config,
        query=args.query,
        category=args.category,
        as_json=args.json,
        output_dir=args.output_dir,
        verbose=args.verbose,
        watch=args.watch,
        save=args.save,
    ))


if __name__ == "__main__":
    cli()
