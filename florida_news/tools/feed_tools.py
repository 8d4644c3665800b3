"""Florida news MCP tools.

These tools read from the same aggregator (and therefore the same cache) as
the HTTP endpoint.

get_news takes its filters as plain defaults rather than Optional values:
category "" means every category and limit 0 means no limit.
"""

from typing import Any, Callable, Dict, List

from mcp.server.fastmcp import Context

from florida_news.logging_config import get_logger
from florida_news.services.aggregator import NewsAggregator


def create_feed_tools(aggregator: NewsAggregator) -> List[Callable]:
    """Build the tool functions bound to one aggregator."""

    async def get_news(
        limit: int = 0,
        category: str = "",
        ctx: Context = None,
    ) -> Dict[str, Any]:
        """Get the latest Florida cannabis, marijuana and hemp news.

        Articles are merged from all configured feeds, deduplicated by title
        and ordered newest first. Results are cached for a few minutes.

        Args:
            limit: Maximum number of articles to return (0 returns all cached articles)
            category: Only return articles with this category, e.g. "legislation",
                "medical", "business", "hemp", "enforcement" or "general"
                (empty string for all)
            ctx: MCP Context object (injected automatically)

        Returns:
            Dictionary with:
            - ok: bool
            - count: number of articles returned
            - fetchedAt: epoch milliseconds when the payload was built
            - cache: "HIT" if served from cache, "MISS" if rebuilt
            - articles: list of article objects
        """
        logger = get_logger(__name__)
        logger.info(f"get_news called: limit={limit}, category={category}")

        payload, hit = await aggregator.get_news()
        data = payload.to_dict()

        articles = data["articles"]
        if category:
            articles = [a for a in articles if a.get("category") == category.lower()]
        if limit > 0:
            articles = articles[:limit]

        data["articles"] = articles
        data["count"] = len(articles)
        data["cache"] = "HIT" if hit else "MISS"
        return data

    async def list_sources(ctx: Context = None) -> Dict[str, Any]:
        """List the feeds the news is aggregated from.

        Args:
            ctx: MCP Context object (injected automatically)

        Returns:
            Dictionary with:
            - ok: bool
            - count: number of sources
            - sources: list of source objects with name, label, url, color
        """
        logger = get_logger(__name__)
        logger.info("list_sources called")

        sources = [source.to_dict() for source in aggregator.sources]
        return {
            "ok": True,
            "count": len(sources),
            "sources": sources,
        }

    return [get_news, list_sources]
