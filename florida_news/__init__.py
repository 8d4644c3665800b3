"""florida_news

Aggregates Florida cannabis, marijuana and hemp news from syndication feeds
and serves the merged, deduplicated result as cached JSON.
"""

from florida_news.models.schemas import Article, ResultPayload, Source
from florida_news.services.aggregator import NewsAggregator

__all__ = [
    "Article",
    "ResultPayload",
    "Source",
    "NewsAggregator",
]
