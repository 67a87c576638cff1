"""Request trigger: debounced search input in front of the Aggregator.

Text edits wait for a quiet period before fetching; submit, blur,
category changes and refresh fetch at once. 防抖只是触发策略，
正确性由 Aggregator 的 generation 机制保证。
"""

import logging
import threading
from typing import Callable

from .models import FeedResult
from .orchestrator import Aggregator

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.45


class SearchTrigger:
    """Turns UI events into Aggregator.fetch() calls.

    Each fetch runs on its own worker thread so a newer event can supersede
    an older cycle. ``on_result`` only sees results that were not superseded.
    """

    def __init__(
        self,
        aggregator: Aggregator,
        on_result: Callable[[FeedResult], None],
        category: str = "general",
        delay: float = DEBOUNCE_SECONDS,
    ) -> None:
        self.aggregator = aggregator
        self.on_result = on_result
        self.category = category
        self.delay = delay
        self.query = ""
        self._timer: threading.Timer | None = None
        self._lock = threading.RLock()  # on_result may trigger again
        self._workers: list[threading.Thread] = []
        self._delivered_generation = 0

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _deliver(self, query: str, category: str) -> None:
        result = self.aggregator.fetch(query, category)
        if result.superseded:
            logger.debug("Dropping superseded generation %d", result.generation)
            return
        with self._lock:
            # a newer generation may already have been shown
            if result.generation <= self._delivered_generation:
                logger.debug("Dropping stale generation %d (shown: %d)",
                             result.generation, self._delivered_generation)
                return
            self._delivered_generation = result.generation
            self.on_result(result)

    def _fire(self) -> None:
        with self._lock:
            self._cancel_timer()
            query, category = self.query, self.category
            worker = threading.Thread(
                target=self._deliver, args=(query, category), daemon=True
            )
            self._workers = [w for w in self._workers if w.is_alive()]
            self._workers.append(worker)
            worker.start()

    # ── UI events ────────────────────────────────────────────────────────

    def text_changed(self, query: str) -> None:
        """Restart the quiet-period timer."""
        with self._lock:
            self.query = query
            self._cancel_timer()
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def submit(self) -> None:
        self._fire()

    def blur(self) -> None:
        with self._lock:
            pending = self._timer is not None
        if pending:
            self._fire()

    def select_category(self, category: str) -> None:
        with self._lock:
            self.category = category
        self._fire()

    def refresh(self) -> None:
        self._fire()

    def wait(self, timeout: float | None = None) -> None:
        """Block until every started fetch has returned (for CLI and tests)."""
        with self._lock:
            timer = self._timer
        if timer is not None:
            timer.join(timeout)
        with self._lock:
            workers = list(self._workers)
        for worker in workers:
            worker.join(timeout)
