"""florida_news - MCP server with an HTTP news endpoint

This module assembles the FastMCP server: the news endpoint is mounted as a
custom HTTP route and the news tools are registered with the decorator chain
(exception handling, logging). Both share one NewsAggregator, which owns the
result cache.
"""

import asyncio
import sys
from typing import Optional

import click
from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from florida_news.config import ServerConfig, get_config
from florida_news.decorators.exception_handler import exception_handler
from florida_news.decorators.tool_logger import tool_logger
from florida_news.logging_config import setup_logging, logger
from florida_news.server.http import create_news_endpoint
from florida_news.services.aggregator import NewsAggregator
from florida_news.tools.feed_tools import create_feed_tools


def create_mcp_server(
    config: Optional[ServerConfig] = None,
    aggregator: Optional[NewsAggregator] = None,
) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        config: Optional server configuration
        aggregator: Optional aggregator (one is built from the config if omitted)

    Returns:
        Configured FastMCP server instance
    """
    if config is None:
        config = get_config()

    setup_logging(config)
    logger.info(f"Server config: {config.name} at log level {config.log_level}")

    if aggregator is None:
        aggregator = NewsAggregator(config)

    mcp_server = FastMCP(
        config.name or "florida_news",
        transport_security=TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
        ),
    )

    register_routes(mcp_server, aggregator)
    register_tools(mcp_server, aggregator, config)

    logger.info(
        f"Server initialization complete: {len(aggregator.sources)} sources, "
        f"cache TTL {config.cache_ttl_seconds:.0f}s"
    )
    return mcp_server


def register_routes(mcp_server: FastMCP, aggregator: NewsAggregator) -> None:
    """Mount the news endpoint as a plain HTTP route."""
    path = aggregator.config.news_path
    mcp_server.custom_route(path, methods=["GET", "OPTIONS"], name="news")(
        create_news_endpoint(aggregator)
    )
    logger.info(f"Registered HTTP route: GET {path}")


def register_tools(
    mcp_server: FastMCP,
    aggregator: NewsAggregator,
    config: ServerConfig,
) -> None:
    """Register the news tools using decorators.

    Decorated functions keep their signatures (functools.wraps), so MCP can
    still introspect the parameters.
    """
    for tool_func in create_feed_tools(aggregator):
        # Apply decorator chain: exception_handler → tool_logger
        decorated_func = exception_handler(tool_logger(tool_func, config.__dict__))

        tool_name = tool_func.__name__
        mcp_server.tool(name=tool_name)(decorated_func)

        logger.info(f"Registered news tool: {tool_name}")

    logger.info(f"Server '{mcp_server.name}' initialized with decorators")


# Create a server instance that can be imported by the MCP CLI
server = create_mcp_server()


@click.command()
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to listen on for SSE or Streamable HTTP transport (default from config)"
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (use 0.0.0.0 for Docker, default from config)"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="streamable-http",
    help="Transport type; the news endpoint is only served over sse or streamable-http"
)
def main(port: Optional[int], host: Optional[str], transport: str) -> int:
    """Run the florida_news server with specified transport."""
    config = get_config()
    host = host or config.host
    port = port or config.port

    async def run_server():
        """Inner async function to run the server and manage the event loop."""
        if transport == "stdio":
            logger.info("Starting server with STDIO transport")
            await server.run_stdio_async()
        elif transport == "sse":
            logger.info(f"Starting server with SSE transport on {host}:{port}")
            server.settings.host = host
            server.settings.port = port
            await server.run_sse_async()
        elif transport == "streamable-http":
            logger.info(f"Starting server with Streamable HTTP transport on {host}:{port}")
            server.settings.host = host
            server.settings.port = port
            server.settings.streamable_http_path = "/mcp"
            await server.run_streamable_http_async()
        else:
            raise ValueError(f"Unknown transport: {transport}")

    try:
        asyncio.run(run_server())
        return 0
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
