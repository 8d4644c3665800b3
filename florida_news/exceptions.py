"""Exceptions for florida_news."""


class FloridaNewsError(Exception):
    """Base class for florida_news errors."""


class FeedFetchError(FloridaNewsError):
    """Raised when a feed cannot be fetched.

    The reason is one of "status", "timeout", "transport" or "redirects".
    """

    def __init__(self, url: str, reason: str, detail: str = ""):
        self.url = url
        self.reason = reason
        self.detail = detail
        message = f"Failed to fetch feed: {url} ({reason})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
