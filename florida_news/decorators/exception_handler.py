"""Exception handling for MCP tools.

A tool that raises returns an error payload instead of failing the MCP call.
"""

import functools
from typing import Any, Awaitable, Callable, Dict

from florida_news.logging_config import get_logger


def exception_handler(
    func: Callable[..., Awaitable[Dict[str, Any]]],
) -> Callable[..., Awaitable[Dict[str, Any]]]:
    """Wrap an async tool so unexpected exceptions become {"ok": False, "error": ...}."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            logger = get_logger(func.__module__)
            logger.error(f"Tool {func.__name__} failed: {e}", exc_info=True)
            return {
                "ok": False,
                "error": f"{func.__name__} failed: {type(e).__name__}",
            }

    return wrapper
