"""Call logging for MCP tools."""

import functools
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from florida_news.logging_config import get_logger


def tool_logger(
    func: Callable[..., Awaitable[Any]],
    config: Optional[Dict[str, Any]] = None,
) -> Callable[..., Awaitable[Any]]:
    """Log each tool call with its arguments and duration.

    Args:
        func: Async tool function
        config: Server configuration as a dict (uses "name" for the log prefix)
    """
    server_name = (config or {}).get("name", "florida_news")

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        arguments = {k: v for k, v in kwargs.items() if k != "ctx"}
        logger.info(f"[{server_name}] {func.__name__} called with {arguments}")

        started = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            elapsed = (time.perf_counter() - started) * 1000
            logger.info(f"[{server_name}] {func.__name__} finished in {elapsed:.1f} ms")

    return wrapper
