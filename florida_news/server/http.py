"""HTTP endpoint serving the aggregated news payload."""

from typing import Awaitable, Callable, Dict

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from florida_news.logging_config import get_logger
from florida_news.services.aggregator import NewsAggregator


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
}


def cache_control(ttl_seconds: float, stale_while_revalidate: int) -> str:
    return f"public, s-maxage={int(ttl_seconds)}, stale-while-revalidate={stale_while_revalidate}"


def create_news_endpoint(
    aggregator: NewsAggregator,
) -> Callable[[Request], Awaitable[Response]]:
    """Build the GET/OPTIONS handler bound to one aggregator."""
    config = aggregator.config
    cache_header = cache_control(config.cache_ttl_seconds, config.stale_while_revalidate_seconds)

    async def news_endpoint(request: Request) -> Response:
        logger = get_logger(__name__)

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        try:
            payload, hit = await aggregator.get_news()
            headers: Dict[str, str] = {
                **CORS_HEADERS,
                "Cache-Control": cache_header,
                "X-Cache": "HIT" if hit else "MISS",
            }
            # Rendering errors must also end in the JSON 500 below
            return JSONResponse(payload.to_dict(), headers=headers)
        except Exception as e:
            logger.error(f"Failed to build news payload: {e}", exc_info=True)
            return JSONResponse(
                {"ok": False, "error": "Failed to load news"},
                status_code=500,
                headers=CORS_HEADERS,
            )

    return news_endpoint
