"""Configuration for florida_news.

Sources and pipeline limits are fixed at process start. Only process-level
settings (host, port, log level) can be overridden from the environment.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from florida_news.models.schemas import Source


DEFAULT_SOURCES: Tuple[Source, ...] = (
    Source(
        name="Google News: Florida Cannabis",
        label="FL Cannabis",
        url="https://news.google.com/rss/search?q=florida+cannabis&hl=en-US&gl=US&ceid=US:en",
        color="#2e7d32",
    ),
    Source(
        name="Google News: Florida Marijuana",
        label="FL Marijuana",
        url="https://news.google.com/rss/search?q=florida+marijuana&hl=en-US&gl=US&ceid=US:en",
        color="#558b2f",
    ),
    Source(
        name="Google News: Florida Hemp",
        label="FL Hemp",
        url="https://news.google.com/rss/search?q=florida+hemp&hl=en-US&gl=US&ceid=US:en",
        color="#9e9d24",
    ),
    Source(
        name="Google News: Florida Medical Marijuana",
        label="FL Medical",
        url="https://news.google.com/rss/search?q=florida+%22medical+marijuana%22&hl=en-US&gl=US&ceid=US:en",
        color="#00838f",
    ),
    Source(
        name="Google News: Florida Dispensaries",
        label="FL Dispensary",
        url="https://news.google.com/rss/search?q=florida+dispensary+marijuana&hl=en-US&gl=US&ceid=US:en",
        color="#6a1b9a",
    ),
)


@dataclass
class ServerConfig:
    """Server and pipeline settings."""

    name: str = "florida_news"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3001
    transport: str = "streamable-http"
    news_path: str = "/api/news"

    # Result cache
    cache_ttl_seconds: float = 300.0
    stale_while_revalidate_seconds: int = 60

    # Outbound fetch
    fetch_timeout_seconds: float = 6.0
    max_redirects: int = 3
    user_agent: str = "Mozilla/5.0 (compatible; FloridaNews/1.0)"
    accept_header: str = "application/xml,text/xml,*/*"

    # Parsing and ranking
    description_max_length: int = 260
    fingerprint_length: int = 65
    max_articles: int = 100

    # Classifier switches
    admission_filter: bool = True
    assign_category: bool = True

    sources: Tuple[Source, ...] = field(default=DEFAULT_SOURCES)


def load_config() -> ServerConfig:
    """Build a configuration, applying environment overrides.

    Recognised variables: FLORIDA_NEWS_HOST, FLORIDA_NEWS_PORT,
    FLORIDA_NEWS_LOG_LEVEL.

    Returns:
        ServerConfig instance
    """
    config = ServerConfig()

    host = os.getenv("FLORIDA_NEWS_HOST")
    if host:
        config = replace(config, host=host)

    port = os.getenv("FLORIDA_NEWS_PORT")
    if port:
        try:
            config = replace(config, port=int(port))
        except ValueError:
            raise ValueError(f"FLORIDA_NEWS_PORT must be an integer, got {port!r}")

    log_level = os.getenv("FLORIDA_NEWS_LOG_LEVEL")
    if log_level:
        config = replace(config, log_level=log_level.upper())

    return config


_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get or create the process-wide configuration."""
    global _config

    if _config is None:
        _config = load_config()

    return _config
