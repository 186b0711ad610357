"""Ticker extraction and normalization for free text.

Extraction is purely lexical: any ``$`` followed by two or more ASCII letters
forming a whole word is reported, whether or not it names a real asset
(``$USD`` in "costs $USD 5" is a match).
"""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from defai.schemas.twitter import Post, PostWithTickers, TickerMention

TICKER_PATTERN = re.compile(r"\$\b[A-Za-z]{2,}\b", re.ASCII)


def normalize_token(token: str) -> str:
    """Uppercase a ``$``-prefixed ticker and drop the sigil; leave bare symbols alone."""
    if token.startswith("$"):
        return token.lstrip("$").upper()
    return token


def extract_tickers(text: str) -> List[str]:
    """Return every ticker match in order, duplicates included."""
    return TICKER_PATTERN.findall(text or "")


def extract_mentions(text: str) -> List[TickerMention]:
    """Pair every ticker match with its normalized form."""
    return [TickerMention(raw=raw, ticker=normalize_token(raw)) for raw in extract_tickers(text)]


def distinct_tickers(mentions: Iterable[TickerMention]) -> List[str]:
    """Normalized tickers without repeats, keeping first-seen order."""
    return list(dict.fromkeys(mention.ticker for mention in mentions))


def filter_posts_with_ticker_mentions(posts: Sequence[Post]) -> List[PostWithTickers]:
    """Keep only the posts mentioning at least one ticker."""
    results: List[PostWithTickers] = []
    for post in posts:
        mentions = extract_mentions(post.text)
        if mentions:
            results.append(PostWithTickers(post=post, mentions=mentions))
    return results
