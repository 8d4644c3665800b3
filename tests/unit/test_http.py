"""Unit tests for the HTTP news endpoint."""

import httpx
import pytest
from starlette.applications import Starlette
from starlette.routing import Route

from florida_news.server.http import create_news_endpoint
from florida_news.services.aggregator import NewsAggregator
from florida_news.services.feed_parser import parse_feed


# Mark all tests as async
pytestmark = pytest.mark.anyio


def _client(aggregator: NewsAggregator) -> httpx.AsyncClient:
    app = Starlette(routes=[
        Route("/api/news", create_news_endpoint(aggregator), methods=["GET", "OPTIONS"]),
    ])
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


@pytest.fixture
def aggregator(config, make_article):
    articles = [
        make_article("Florida marijuana bill advances", hours=2),
        make_article("Miami hemp farm expands", hours=4, thumbnail="https://cdn.example.com/h.jpg"),
    ]

    async def gather(sources, config):
        return articles

    return NewsAggregator(config, gather=gather)


class TestNewsEndpoint:
    """Tests for GET and OPTIONS handling."""

    async def test_get_returns_payload(self, aggregator):
        async with _client(aggregator) as client:
            response = await client.get("/api/news")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["count"] == 2
        assert [a["title"] for a in data["articles"]] == [
            "Miami hemp farm expands",
            "Florida marijuana bill advances",
        ]
        assert data["articles"][0]["thumbnail"] == "https://cdn.example.com/h.jpg"
        assert data["articles"][0]["category"] == "hemp"
        assert isinstance(data["fetchedAt"], int)

    async def test_cache_headers(self, aggregator):
        async with _client(aggregator) as client:
            first = await client.get("/api/news")
            second = await client.get("/api/news")

        assert first.headers["x-cache"] == "MISS"
        assert second.headers["x-cache"] == "HIT"
        assert first.headers["cache-control"] == "public, s-maxage=300, stale-while-revalidate=60"
        assert first.headers["access-control-allow-origin"] == "*"
        assert second.json() == first.json()

    async def test_options_preflight(self, aggregator):
        async with _client(aggregator) as client:
            response = await client.options("/api/news")

        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"

    async def test_internal_error(self, config):
        async def gather(sources, config):
            raise RuntimeError("boom")

        aggregator = NewsAggregator(config, gather=gather)

        async with _client(aggregator) as client:
            response = await client.get("/api/news")

        assert response.status_code == 500
        data = response.json()
        assert data["ok"] is False
        assert data["error"]
        assert "boom" not in data["error"]

    async def test_unencodable_payload_gets_json_error(self, config, make_article):
        async def gather(sources, config):
            return [make_article("Florida cannabis \ud800 news")]

        aggregator = NewsAggregator(config, gather=gather)

        async with _client(aggregator) as client:
            response = await client.get("/api/news")

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "Failed to load news"}
        assert response.headers["access-control-allow-origin"] == "*"

    async def test_feed_with_surrogate_reference_is_served(self, config, source):
        document = (
            "<rss><channel><item><title>Florida cannabis &#xD800; news</title>"
            "<link>https://example.com/a</link></item></channel></rss>"
        )

        async def gather(sources, config):
            return parse_feed(document, source)

        aggregator = NewsAggregator(config, gather=gather)

        async with _client(aggregator) as client:
            response = await client.get("/api/news")

        assert response.status_code == 200
        assert response.json()["articles"][0]["title"] == "Florida cannabis &#xD800; news"
