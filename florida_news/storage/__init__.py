"""Storage layer for florida_news."""

from .cache import ResultCache

__all__ = [
    "ResultCache",
]
