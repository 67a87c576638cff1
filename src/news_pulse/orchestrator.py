"""Aggregation orchestrator.

Owns the request lifecycle of the feed:

  IDLE → FETCHING → SETTLED   (all adapters returned, results committed)
                  → SUPERSEDED (a newer fetch() started, results discarded)

Each fetch() is one generation. Adapters of a generation run in parallel
threads and share one CancelToken; a newer fetch() cancels that token.
Results are committed only if the generation is still current at commit
time, under the same lock that guards SourceHealth.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from enum import Enum

from .adapters import BaseAdapter
from .cancellation import CancelToken
from .classifier import classify_all
from .fallback import fallback_items
from .merge import merge
from .models import FeedResult, SourceResult, SourceStatus

logger = logging.getLogger(__name__)


class State(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SETTLED = "settled"
    SUPERSEDED = "superseded"


class Aggregator:
    """Fan-out / fan-in engine over a fixed, ordered list of adapters.

    fetch() may be called from several threads; only the latest call's
    results are ever committed. fetch() never raises.
    """

    def __init__(self, adapters: list[BaseAdapter], max_workers: int | None = None) -> None:
        self.adapters = list(adapters)
        self.max_workers = max_workers or max(len(self.adapters), 1)

        self._lock = threading.Lock()
        self._generation = 0
        self._token: CancelToken | None = None
        self._state = State.IDLE
        # 各数据源最近一次已知状态，跨周期保留
        self._health: dict[str, bool] = {a.name: False for a in self.adapters}
        self._last_success_at: datetime | None = None

    # ── Read-only views ──────────────────────────────────────────────────

    @property
    def state(self) -> State:
        with self._lock:
            return self._state

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def health(self) -> dict[str, bool]:
        with self._lock:
            return dict(self._health)

    @property
    def last_success_at(self) -> datetime | None:
        with self._lock:
            return self._last_success_at

    # ── Lifecycle ────────────────────────────────────────────────────────

    def _begin(self) -> CancelToken:
        """Start a new generation, cancelling the one in flight."""
        with self._lock:
            if self._token is not None:
                logger.info(
                    "Generation %d superseded by %d, cancelling",
                    self._token.generation, self._generation + 1,
                )
                self._token.cancel()
            self._generation += 1
            token = CancelToken(self._generation)
            self._token = token
            self._state = State.FETCHING
            return token

    def _fan_out(self, query: str, category: str, token: CancelToken) -> list[SourceResult]:
        """Run every adapter in parallel and wait for all of them.

        Results come back in adapter declaration order, not arrival order.
        """
        results: list[SourceResult | None] = [None] * len(self.adapters)
        if not self.adapters:
            return []

        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix=f"gen{token.generation}",
        ) as executor:
            futures = {
                executor.submit(adapter.fetch, query, category, token): idx
                for idx, adapter in enumerate(self.adapters)
            }
            for future in as_completed(futures):
                idx = futures[future]
                name = self.adapters[idx].name
                try:
                    result = future.result()
                except Exception:
                    # BaseAdapter.fetch already catches; this covers foreign adapters
                    logger.exception("✗ %s: adapter raised", name)
                    result = SourceResult(source=name, status=SourceStatus.FAILED)
                if not isinstance(result, SourceResult):
                    logger.error("✗ %s: adapter returned %r, not a SourceResult", name, result)
                    result = SourceResult(source=name, status=SourceStatus.FAILED)
                results[idx] = result
                logger.info("%s %s: %s, %d items",
                            "✓" if result.ok else "✗", name, result.status.value, len(result.items))

        return [r for r in results if r is not None]

    def _commit(self, token: CancelToken, outcomes: list[SourceResult], live: bool) -> bool:
        """Fold outcomes into shared state if token is still current.

        Caller must hold the lock.
        """
        if token is not self._token:
            return False

        for outcome in outcomes:
            if outcome.status is SourceStatus.OK:
                self._health[outcome.source] = True
            elif outcome.status is SourceStatus.FAILED:
                self._health[outcome.source] = False
            # SKIPPED / CANCELLED keep the last known value

        if live:
            now = datetime.now(timezone.utc)
            if self._last_success_at is None or now > self._last_success_at:
                self._last_success_at = now

        self._token = None
        self._state = State.IDLE
        return True

    def _discarded(self, token: CancelToken) -> FeedResult:
        logger.info("Generation %d: %s, discarding results",
                    token.generation, State.SUPERSEDED.value)
        return FeedResult(
            generation=token.generation,
            health=dict(self._health),
            last_success_at=self._last_success_at,
            superseded=True,
        )

    def _run(self, query: str, category: str, token: CancelToken) -> FeedResult:
        logger.info("Generation %d: fetching (q=%r, category=%s)", token.generation, query, category)

        outcomes = self._fan_out(query, category, token)

        if token.cancelled:
            with self._lock:
                return self._discarded(token)

        items = merge([o.items for o in outcomes if o.ok])
        live = bool(items)
        if not live:
            logger.warning("Generation %d: no items from any source, using fallback set",
                           token.generation)
            items = fallback_items()
        items = classify_all(items)

        with self._lock:
            if not self._commit(token, outcomes, live):
                return self._discarded(token)
            logger.info("Generation %d: %s with %d items",
                        token.generation, State.SETTLED.value, len(items))
            return FeedResult(
                generation=token.generation,
                items=items,
                health=dict(self._health),
                last_success_at=self._last_success_at,
            )

    def fetch(self, query: str = "", category: str = "general") -> FeedResult:
        """Run one aggregation cycle.

        Args:
            query: Search text; empty means topical mode.
            category: One of models.CATEGORIES, or any string (passed through).

        Returns:
            FeedResult. ``superseded`` is set when a newer fetch() started
            before this one settled; its items are then empty.
        """
        token = self._begin()
        try:
            return self._run(query or "", category, token)
        except Exception:
            logger.exception("Generation %d: aggregation cycle failed", token.generation)
            with self._lock:
                if token is self._token:
                    self._token = None
                    self._state = State.IDLE
                return FeedResult(
                    generation=token.generation,
                    items=classify_all(fallback_items()),
                    health=dict(self._health),
                    last_success_at=self._last_success_at,
                )
