"""Data models for florida_news.

This module defines the core data structures for feed sources, articles and
the cached result payload.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


def _epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


@dataclass(frozen=True)
class Source:
    """Represents a configured feed source."""

    name: str
    label: str
    url: str
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "url": self.url,
            "color": self.color,
        }


@dataclass(frozen=True)
class Article:
    """Represents an article extracted from one feed item.

    Only built from items that carry a title and an absolute link.
    """

    title: str
    link: str
    description: str
    thumbnail: str
    published_at: datetime
    source_label: str
    pub_date: str = ""
    source_name: Optional[str] = None
    source_color: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "thumbnail": self.thumbnail,
            "pubDate": self.pub_date,
            "publishedAt": _epoch_millis(self.published_at),
            "sourceLabel": self.source_label,
        }
        if self.source_name is not None:
            data["sourceName"] = self.source_name
        if self.source_color is not None:
            data["sourceColor"] = self.source_color
        if self.category is not None:
            data["category"] = self.category
        return data


@dataclass(frozen=True)
class ResultPayload:
    """Merged, deduplicated and ranked articles served to clients."""

    ok: bool
    count: int
    fetched_at: datetime
    articles: Tuple[Article, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "count": self.count,
            "fetchedAt": _epoch_millis(self.fetched_at),
            "articles": [article.to_dict() for article in self.articles],
        }


@dataclass(frozen=True)
class CacheEntry:
    """The last stored payload and the clock reading it was built at."""

    payload: Optional[ResultPayload] = None
    built_at: float = 0.0
