"""Configuration loading from config.yaml + .env."""

from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings


# ---------------------------------------------------------------------------
# Config sub-models (loaded from config.yaml)
# ---------------------------------------------------------------------------

class HeadlineConfig(BaseModel):
    enabled: bool = True
    base_url: str = "https://newsapi.org/v2"
    country: str = "us"
    language: str = "en"
    page_size: int = 30
    timeout: float = 15.0


class VideoConfig(BaseModel):
    enabled: bool = True
    base_url: str = "https://www.googleapis.com/youtube/v3"
    region: str = "US"
    max_results: int = 15
    timeout: float = 15.0


class ForumConfig(BaseModel):
    enabled: bool = True
    # category -> subreddits read in topical mode
    subreddits: dict[str, list[str]] = {
        "general": ["news", "worldnews"],
        "technology": ["technology", "tech"],
        "business": ["business", "economics"],
        "science": ["science"],
        "health": ["health"],
        "sports": ["sports"],
        "entertainment": ["entertainment", "movies"],
    }
    search_subreddit: str = "all"
    limit: int = 20
    user_agent: str = "news-pulse/0.1.0"


class FeedSource(BaseModel):
    name: str
    url: str


class SyndicationConfig(BaseModel):
    enabled: bool = True
    # category -> feeds read for that category
    feeds: dict[str, list[FeedSource]] = {
        "general": [
            FeedSource(name="BBC News", url="https://feeds.bbci.co.uk/news/rss.xml"),
            FeedSource(name="NPR", url="https://feeds.npr.org/1001/rss.xml"),
        ],
        "technology": [
            FeedSource(name="The Verge", url="https://www.theverge.com/rss/index.xml"),
            FeedSource(name="Wired", url="https://www.wired.com/feed/rss"),
        ],
        "business": [
            FeedSource(name="BBC Business", url="https://feeds.bbci.co.uk/news/business/rss.xml"),
        ],
        "science": [
            FeedSource(name="New Scientist", url="https://www.newscientist.com/feed/home"),
        ],
        "health": [
            FeedSource(name="BBC Health", url="https://feeds.bbci.co.uk/news/health/rss.xml"),
        ],
        "sports": [
            FeedSource(name="BBC Sport", url="https://feeds.bbci.co.uk/sport/rss.xml"),
        ],
        "entertainment": [
            FeedSource(name="Variety", url="https://variety.com/feed"),
        ],
    }
    per_feed_limit: int = 15
    description_limit: int = 200
    timeout: float = 15.0


class SourcesConfig(BaseModel):
    headline: HeadlineConfig = HeadlineConfig()
    video: VideoConfig = VideoConfig()
    forum: ForumConfig = ForumConfig()
    syndication: SyndicationConfig = SyndicationConfig()


class TriggerConfig(BaseModel):
    debounce_seconds: float = 0.45


class OutputConfig(BaseModel):
    dir: str = "output"


class AppConfig(BaseModel):
    """Application config loaded from config.yaml."""

    sources: SourcesConfig = SourcesConfig()
    trigger: TriggerConfig = TriggerConfig()
    output: OutputConfig = OutputConfig()
    default_category: str = "general"


# ---------------------------------------------------------------------------
# Secrets (loaded from .env / environment variables)
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Per-source credentials loaded from environment / .env file.

    空值表示未配置，对应的数据源会被跳过（不算失败）。
    """

    news_api_key: str = ""
    youtube_api_key: str = ""
    reddit_client_id: str = ""
    reddit_client_secret: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load_config(config_path: str = "config.yaml") -> tuple[AppConfig, Settings]:
    """Load app config from YAML and secrets from .env."""
    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        app_config = AppConfig(**data)
    else:
        app_config = AppConfig()

    settings = Settings()
    return app_config, settings
