"""Feed fetching service.

Every configured source is fetched and parsed concurrently. A source that
fails contributes nothing and never holds up the others.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Iterable, List, Optional, Sequence

import httpx

from florida_news.config import ServerConfig
from florida_news.exceptions import FeedFetchError
from florida_news.logging_config import get_logger
from florida_news.models.schemas import Article, Source
from florida_news.services.feed_parser import parse_feed


@dataclass
class Settled:
    """Outcome of one task in a joined batch."""

    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def gather_settled(awaitables: Iterable[Awaitable[Any]]) -> List[Settled]:
    """Run all awaitables concurrently and wait for every one of them.

    Results come back in launch order. Exceptions are captured per task;
    cancellation of the caller still propagates.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    settled = []
    for result in results:
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            settled.append(Settled(error=result))
        else:
            settled.append(Settled(value=result))
    return settled


def create_client(config: ServerConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        follow_redirects=True,
        max_redirects=config.max_redirects,
        timeout=config.fetch_timeout_seconds,
        headers={
            "User-Agent": config.user_agent,
            "Accept": config.accept_header,
        },
    )


async def fetch_feed(client: httpx.AsyncClient, url: str) -> str:
    """Fetch a feed document.

    Args:
        client: HTTP client
        url: Feed URL

    Returns:
        Response body as text

    Raises:
        FeedFetchError: on a non-2xx status, timeout, transport error or too
            many redirects
    """
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FeedFetchError(url, "status", str(e)) from e
    except httpx.TimeoutException as e:
        raise FeedFetchError(url, "timeout", str(e)) from e
    except httpx.TooManyRedirects as e:
        raise FeedFetchError(url, "redirects", str(e)) from e
    except httpx.HTTPError as e:
        raise FeedFetchError(url, "transport", str(e)) from e

    return response.text


async def fetch_source(
    client: httpx.AsyncClient,
    source: Source,
    config: ServerConfig,
) -> List[Article]:
    """Fetch one source and parse its items, bounded by the fetch timeout."""
    try:
        document = await asyncio.wait_for(
            fetch_feed(client, source.url),
            timeout=config.fetch_timeout_seconds,
        )
    except asyncio.TimeoutError as e:
        raise FeedFetchError(source.url, "timeout") from e

    return parse_feed(
        document,
        source,
        description_max_length=config.description_max_length,
    )


async def gather_all(sources: Sequence[Source], config: ServerConfig) -> List[Article]:
    """Fetch and parse every source concurrently.

    Args:
        sources: Sources in configuration order
        config: Server configuration

    Returns:
        Articles of all sources that succeeded, in source order then document order
    """
    logger = get_logger(__name__)
    logger.info(f"Fetching {len(sources)} sources")

    async with create_client(config) as client:
        results = await gather_settled(
            fetch_source(client, source, config) for source in sources
        )

    articles = []
    failed = 0
    for source, result in zip(sources, results):
        if result.ok:
            articles.extend(result.value)
        else:
            failed += 1
            logger.warning(f"Source {source.label} failed: {result.error}")

    logger.info(f"Collected {len(articles)} articles ({failed} of {len(sources)} sources failed)")
    return articles
