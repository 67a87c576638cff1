"""Base adapter abstract class.

所有数据源 adapter 的统一基类：配置通过 __init__ 注入，
统一接口：fetch(query, category, cancel) -> SourceResult。
Subclasses only implement ``_collect``; the outcome mapping
(skip / fail / cancel / ok) lives here so no adapter can leak an
exception into the orchestrator.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from ..cancellation import CancelToken, FetchCancelled
from ..models import Item, Platform, SourceResult, SourceStatus

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; news-pulse/0.1)"


class UpstreamError(Exception):
    """Upstream answered, but rejected the request or returned nothing usable."""


class ConfigGap(Exception):
    """Nothing to query for this request; raised before any network I/O."""


class BaseAdapter(ABC):
    """Abstract base class for all source adapters."""

    name: str = ""  # adapter 标识，也是 SourceHealth 的 key
    platform: Platform

    def __init__(
        self,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport

    @property
    @abstractmethod
    def configured(self) -> bool:
        """False when the credential or config needed to query is missing."""

    @abstractmethod
    def _collect(self, query: str, category: str, cancel: CancelToken) -> list[Item]:
        """Fetch and normalize items; raise on transport or upstream errors."""

    def fetch(self, query: str, category: str, cancel: CancelToken) -> SourceResult:
        """Fetch items from the source, never raising.

        Args:
            query: Search text; empty means topical (category) mode.
            category: Category name, passed through as-is.
            cancel: Token of the generation this call belongs to.

        Returns:
            SourceResult with status OK / FAILED / SKIPPED / CANCELLED.
        """
        if not self.configured:
            logger.info("%s: credentials not configured, skipping", self.name)
            return SourceResult(source=self.name, status=SourceStatus.SKIPPED)

        try:
            cancel.raise_if_cancelled()
            items = self._collect((query or "").strip(), category, cancel)
            cancel.raise_if_cancelled()
        except FetchCancelled:
            return self._cancelled(cancel)
        except ConfigGap as e:
            logger.info("%s: not configured for this request, skipping: %s", self.name, e)
            return SourceResult(source=self.name, status=SourceStatus.SKIPPED)
        except UpstreamError as e:
            if cancel.cancelled:
                return self._cancelled(cancel)
            logger.warning("%s: upstream error: %s", self.name, e)
            return SourceResult(source=self.name, status=SourceStatus.FAILED)
        except Exception:
            # errors surfacing after supersession are cancellation, not failure
            if cancel.cancelled:
                return self._cancelled(cancel)
            logger.exception("%s: fetch failed", self.name)
            return SourceResult(source=self.name, status=SourceStatus.FAILED)

        logger.info("%s: collected %d items", self.name, len(items))
        return SourceResult(source=self.name, status=SourceStatus.OK, items=items)

    def _cancelled(self, cancel: CancelToken) -> SourceResult:
        logger.debug("%s: cancelled (generation %d)", self.name, cancel.generation)
        return SourceResult(source=self.name, status=SourceStatus.CANCELLED)

    def _client(self, **kwargs: Any) -> httpx.Client:
        headers = {"User-Agent": USER_AGENT, **kwargs.pop("headers", {})}
        return httpx.Client(
            timeout=self.timeout,
            headers=headers,
            follow_redirects=True,
            transport=self.transport,
            **kwargs,
        )

    @staticmethod
    def _get(
        client: httpx.Client,
        url: str,
        cancel: CancelToken,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """GET with cancellation checks on both sides of the request."""
        cancel.raise_if_cancelled()
        resp = client.get(url, params=params)
        cancel.raise_if_cancelled()
        resp.raise_for_status()
        return resp

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} configured={self.configured}>"
