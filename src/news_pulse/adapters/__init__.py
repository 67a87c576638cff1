"""Source adapters for the four upstreams.

Adapter registry: maps adapter names to their classes, in fan-out order.
新增 adapter 只需：1) 写 adapter 文件  2) 在此注册  3) 在 config.yaml 启用。
"""

from .base import BaseAdapter, ConfigGap, UpstreamError
from .forum_adapter import ForumAdapter
from .headline_adapter import HeadlineAdapter
from .syndication_adapter import SyndicationAdapter
from .video_adapter import VideoAdapter

# Declaration order is the dedup precedence order.
# 声明顺序即去重时的优先顺序。
REGISTRY: dict[str, type[BaseAdapter]] = {
    "headline": HeadlineAdapter,
    "video": VideoAdapter,
    "forum": ForumAdapter,
    "syndication": SyndicationAdapter,
}

__all__ = [
    "BaseAdapter",
    "ConfigGap",
    "REGISTRY",
    "UpstreamError",
    "ForumAdapter",
    "HeadlineAdapter",
    "SyndicationAdapter",
    "VideoAdapter",
]
