"""Deduplication and ranking of merged articles."""

import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from florida_news.models.schemas import Article, ResultPayload


DEFAULT_FINGERPRINT_LENGTH = 65
DEFAULT_MAX_ARTICLES = 100

_NON_ALPHANUMERIC_RE = re.compile(r"[\W_]+")


def fingerprint(title: str, length: int = DEFAULT_FINGERPRINT_LENGTH) -> str:
    """Build the dedup key for a title.

    The first `length` characters of the lower-cased title, with everything
    that is not a letter or digit removed. Titles made only of punctuation
    fall back to their lower-cased text.
    """
    head = title.lower()[:length]
    key = _NON_ALPHANUMERIC_RE.sub("", head)
    return key or head.strip()


def deduplicate(
    articles: Iterable[Article],
    length: int = DEFAULT_FINGERPRINT_LENGTH,
) -> List[Article]:
    """Drop articles whose title fingerprint was already seen. First one wins."""
    seen = set()
    kept = []
    for article in articles:
        key = fingerprint(article.title, length)
        if key in seen:
            continue
        seen.add(key)
        kept.append(article)
    return kept


def finalize(
    articles: Iterable[Article],
    *,
    max_articles: int = DEFAULT_MAX_ARTICLES,
    fingerprint_length: int = DEFAULT_FINGERPRINT_LENGTH,
    now: Optional[datetime] = None,
) -> ResultPayload:
    """Deduplicate, sort newest first, truncate and wrap as a payload."""
    kept = deduplicate(articles, fingerprint_length)
    # sorted() is stable, also with reverse=True
    kept = sorted(kept, key=lambda a: a.published_at, reverse=True)[:max_articles]

    return ResultPayload(
        ok=True,
        count=len(kept),
        fetched_at=now or datetime.now(timezone.utc),
        articles=tuple(kept),
    )
