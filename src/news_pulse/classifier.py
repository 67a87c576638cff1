"""Lexical sentiment tagger.

Counts how many words of a fixed positive and a fixed negative lexicon
occur in the lower-cased ``title + description``. Matching is a plain
substring test, not word-boundary aware ("warning" counts as "war"); this
is a known approximation and the lexicons are part of the golden output.
相同计数（包括 0:0）判为 Neutral。
"""

import logging

from .models import Item, Sentiment

logger = logging.getLogger(__name__)

LEXICON_VERSION = 1

POSITIVE_WORDS: tuple[str, ...] = (
    "good", "great", "success", "win", "breakthrough", "achievement",
    "record", "milestone", "growth", "surge", "gain", "improve",
    "innovative", "celebrate", "boost", "rise", "best", "progress",
    "hope", "positive",
)

NEGATIVE_WORDS: tuple[str, ...] = (
    "crash", "crisis", "fear", "war", "death", "kill", "attack",
    "decline", "loss", "fall", "drop", "risk", "threat", "scandal",
    "fraud", "collapse", "disaster", "fail", "recession", "conflict",
    "negative", "worst", "concern",
)


def _score(text: str, lexicon: tuple[str, ...]) -> int:
    return sum(1 for word in lexicon if word in text)


def classify(item: Item) -> Sentiment:
    """Classify one item. Pure and deterministic."""
    text = f"{item.title} {item.description or ''}".lower()
    positive = _score(text, POSITIVE_WORDS)
    negative = _score(text, NEGATIVE_WORDS)
    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def classify_all(items: list[Item]) -> list[Item]:
    """Return tagged copies of items, order preserved."""
    tagged = [item.model_copy(update={"sentiment": classify(item)}) for item in items]
    counts = {s: 0 for s in Sentiment}
    for item in tagged:
        counts[item.sentiment] += 1
    logger.debug(
        "Classified %d items: %d positive, %d negative, %d neutral",
        len(tagged),
        counts[Sentiment.POSITIVE],
        counts[Sentiment.NEGATIVE],
        counts[Sentiment.NEUTRAL],
    )
    return tagged
