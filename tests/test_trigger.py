"""Tests for the debounced search trigger."""

import threading

from news_pulse.models import FeedResult
from news_pulse.trigger import DEBOUNCE_SECONDS, SearchTrigger


class RecordingAggregator:
    """Stands in for Aggregator; records every fetch() call."""

    def __init__(self, superseded: bool = False) -> None:
        self.calls: list[tuple[str, str]] = []
        self.superseded = superseded
        self._lock = threading.Lock()

    def fetch(self, query: str = "", category: str = "general") -> FeedResult:
        with self._lock:
            self.calls.append((query, category))
            generation = len(self.calls)
        return FeedResult(generation=generation, superseded=self.superseded)


def _trigger(aggregator, delivered, delay=0.05, category="general"):
    return SearchTrigger(aggregator, on_result=delivered.append, category=category, delay=delay)


class TestDebounce:
    """输入防抖"""

    def test_default_delay(self):
        assert DEBOUNCE_SECONDS == 0.45

    def test_keystrokes_collapse_into_one_fetch(self):
        aggregator = RecordingAggregator()
        delivered: list = []
        trigger = _trigger(aggregator, delivered)
        for text in ("m", "ma", "mar", "mars"):
            trigger.text_changed(text)
        trigger.wait(timeout=5)
        assert aggregator.calls == [("mars", "general")]
        assert len(delivered) == 1

    def test_submit_fires_immediately(self):
        aggregator = RecordingAggregator()
        trigger = _trigger(aggregator, [], delay=10)
        trigger.text_changed("rover")
        trigger.submit()
        trigger.wait(timeout=5)
        assert aggregator.calls == [("rover", "general")]

    def test_blur_flushes_pending_text(self):
        aggregator = RecordingAggregator()
        trigger = _trigger(aggregator, [], delay=10)
        trigger.text_changed("rover")
        trigger.blur()
        trigger.wait(timeout=5)
        assert aggregator.calls == [("rover", "general")]

    def test_blur_without_edit_does_nothing(self):
        aggregator = RecordingAggregator()
        trigger = _trigger(aggregator, [])
        trigger.blur()
        trigger.wait(timeout=5)
        assert aggregator.calls == []


class TestImmediateTriggers:
    """分类切换和刷新不经过防抖"""

    def test_select_category(self):
        aggregator = RecordingAggregator()
        trigger = _trigger(aggregator, [], delay=10)
        trigger.select_category("sports")
        trigger.wait(timeout=5)
        assert aggregator.calls == [("", "sports")]

    def test_category_switch_cancels_pending_search_timer(self):
        aggregator = RecordingAggregator()
        trigger = _trigger(aggregator, [], delay=10)
        trigger.text_changed("goal")
        trigger.select_category("sports")
        trigger.wait(timeout=5)
        assert aggregator.calls == [("goal", "sports")]

    def test_refresh(self):
        aggregator = RecordingAggregator()
        trigger = _trigger(aggregator, [], category="science")
        trigger.refresh()
        trigger.refresh()
        trigger.wait(timeout=5)
        assert aggregator.calls == [("", "science"), ("", "science")]


class TestDelivery:
    def test_superseded_results_not_delivered(self):
        aggregator = RecordingAggregator(superseded=True)
        delivered: list = []
        trigger = _trigger(aggregator, delivered)
        trigger.refresh()
        trigger.wait(timeout=5)
        assert len(aggregator.calls) == 1
        assert delivered == []

    def test_older_generation_never_overwrites_newer(self):
        """旧 generation 晚到时不再覆盖已显示的新结果"""
        newer_shown = threading.Event()

        class OutOfOrderAggregator:
            def fetch(self, query="", category="general"):
                if query == "first":
                    # committed as generation 1, but slow to reach the callback
                    newer_shown.wait(5)
                    return FeedResult(generation=1)
                return FeedResult(generation=2)

        delivered: list = []

        def on_result(result):
            delivered.append(result.generation)
            newer_shown.set()

        trigger = SearchTrigger(OutOfOrderAggregator(), on_result=on_result, delay=10)
        trigger.text_changed("first")
        trigger.submit()
        trigger.text_changed("second")
        trigger.submit()
        trigger.wait(timeout=5)
        assert delivered == [2]
