"""Tests for the lexical sentiment tagger."""

from news_pulse.classifier import (
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
    classify,
    classify_all,
)
from news_pulse.models import Item, Platform, Sentiment


def _make_item(title: str, description: str | None = None) -> Item:
    return Item(
        title=title,
        description=description,
        source_name="Test",
        source_platform=Platform.HEADLINE_API,
        url="https://example.com/" + title.replace(" ", "-"),
    )


class TestClassify:
    """固定样例"""

    def test_negative(self):
        item = _make_item("Global Markets Crash Amid Economic Crisis Fears", "...")
        assert classify(item) is Sentiment.NEGATIVE

    def test_positive(self):
        item = _make_item("Breakthrough Achievement", "record milestone")
        assert classify(item) is Sentiment.POSITIVE

    def test_neutral(self):
        item = _make_item("Meeting scheduled Tuesday", "")
        assert classify(item) is Sentiment.NEUTRAL

    def test_tie_is_neutral(self):
        item = _make_item("Great win despite crash and crisis")
        # great, win vs crash, crisis
        assert classify(item) is Sentiment.NEUTRAL

    def test_missing_description(self):
        assert classify(_make_item("Record growth", None)) is Sentiment.POSITIVE

    def test_case_insensitive(self):
        assert classify(_make_item("DISASTER STRIKES")) is Sentiment.NEGATIVE

    def test_substring_match_is_approximate(self):
        """子串匹配：warning 也会命中 war（已知近似行为）"""
        assert classify(_make_item("Weather warning issued")) is Sentiment.NEGATIVE

    def test_each_word_counts_once(self):
        item = _make_item("crash crash crash", "good great")
        # one negative word vs two positive words
        assert classify(item) is Sentiment.POSITIVE


class TestLexicons:
    def test_no_overlap(self):
        assert not set(POSITIVE_WORDS) & set(NEGATIVE_WORDS)

    def test_lowercase(self):
        assert all(w == w.lower() for w in POSITIVE_WORDS + NEGATIVE_WORDS)


class TestClassifyAll:
    def test_tags_copies_in_order(self):
        items = [_make_item("Record win"), _make_item("Market crash"), _make_item("Budget meeting")]
        tagged = classify_all(items)
        assert [i.sentiment for i in tagged] == [
            Sentiment.POSITIVE, Sentiment.NEGATIVE, Sentiment.NEUTRAL,
        ]
        # originals untouched (frozen models)
        assert all(i.sentiment is None for i in items)
