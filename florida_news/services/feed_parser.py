"""Feed parser service.

This module scans RSS/Atom documents for item blocks and turns each one into
an Article.
"""

import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import List, Optional

from feedparser import datetimes as feedparser_datetimes

from florida_news.logging_config import get_logger
from florida_news.models.schemas import Article, Source
from florida_news.services.markup import (
    clean_text,
    decode_entities,
    extract_field,
    extract_raw_field,
    find_attribute,
    first_field,
    iter_tags,
    strip_tags,
)


URL_SCHEMES = ("http://", "https://")

DEFAULT_DESCRIPTION_LENGTH = 260

_ITEM_RE = re.compile(r"<item(?:\s[^>]*)?>(.*?)</item\s*>", re.IGNORECASE | re.DOTALL)
_ENTRY_RE = re.compile(r"<entry(?:\s[^>]*)?>(.*?)</entry\s*>", re.IGNORECASE | re.DOTALL)


def parse_feed(
    document: str,
    source: Source,
    *,
    description_max_length: int = DEFAULT_DESCRIPTION_LENGTH,
    now: Optional[datetime] = None,
) -> List[Article]:
    """Parse an RSS/Atom document and extract articles.

    Items without a title or without an absolute link are skipped.

    Args:
        document: Raw feed text
        source: Source the document was fetched from
        description_max_length: Maximum description length in characters
        now: Ingestion time, used for items whose date cannot be parsed

    Returns:
        List of Article objects in document order
    """
    logger = get_logger(__name__)

    if now is None:
        now = datetime.now(timezone.utc)

    blocks = _ITEM_RE.findall(document)
    if not blocks:
        # Atom feeds
        blocks = _ENTRY_RE.findall(document)

    articles = []
    for block in blocks:
        article = _parse_item(block, source, description_max_length, now)
        if article is not None:
            articles.append(article)

    logger.info(f"Parsed {len(articles)} articles from {source.label} ({len(blocks)} items)")
    return articles


def _parse_item(
    block: str,
    source: Source,
    description_max_length: int,
    now: datetime,
) -> Optional[Article]:
    title = extract_field(block, "title")
    if not title:
        return None

    link = _extract_link(block)
    if not link or not has_url_scheme(link):
        return None

    pub_date = first_field(block, "pubDate", "dc:date", "published", "updated")
    published_at = _parse_date(pub_date) or now

    raw_description = (
        extract_raw_field(block, "description")
        or extract_raw_field(block, "summary")
        or extract_raw_field(block, "content")
    )
    description = description_text(raw_description)[:description_max_length]

    return Article(
        title=title,
        link=link,
        description=description,
        thumbnail=_resolve_thumbnail(block, raw_description),
        published_at=published_at,
        pub_date=pub_date,
        source_label=source.label,
        source_name=source.name,
        source_color=source.color,
    )


def has_url_scheme(value: str) -> bool:
    return value.lower().startswith(URL_SCHEMES)


def description_text(raw_description: str) -> str:
    """Plain text of a raw description.

    Descriptions often carry HTML that is itself entity-escaped (Google News
    does this), so after the usual strip and decode the decoded markup is
    stripped once more.
    """
    if not raw_description:
        return ""
    return clean_text(decode_entities(strip_tags(raw_description)))


def _extract_link(block: str) -> str:
    """Find the item link.

    Order: <link> text, <guid>, then an href attribute on a <link> tag. A later
    candidate is only consulted when the earlier ones are empty; the caller
    rejects a link without a URL scheme.
    """
    return extract_field(block, "link") or extract_field(block, "guid") or _link_href(block)


def _link_href(block: str) -> str:
    fallback = ""
    for attributes in iter_tags(block, "link"):
        href = attributes.get("href", "")
        if not href:
            continue
        if attributes.get("rel", "alternate").lower() == "alternate":
            return href
        fallback = fallback or href
    return fallback


def _resolve_thumbnail(block: str, raw_description: str) -> str:
    """Pick a thumbnail URL for an item.

    The first strategy that yields anything wins: media:content, media:thumbnail,
    an image enclosure, then the first <img> in the description. A result
    without a URL scheme is dropped.
    """
    thumbnail = (
        find_attribute(block, "media:content", "url")
        or find_attribute(block, "media:thumbnail", "url")
        or _image_enclosure(block)
        or _embedded_image(raw_description)
    )
    if not has_url_scheme(thumbnail):
        return ""
    return thumbnail


def _image_enclosure(block: str) -> str:
    for attributes in iter_tags(block, "enclosure"):
        url = attributes.get("url", "")
        if url and attributes.get("type", "").lower().startswith("image"):
            return url
    return ""


def _embedded_image(raw_description: str) -> str:
    if not raw_description:
        return ""
    # Descriptions often carry escaped HTML
    return find_attribute(decode_entities(raw_description), "img", "src")


def _parse_date(value: str) -> Optional[datetime]:
    """Parse a feed date into a timezone-aware UTC datetime.

    Args:
        value: Date text from the feed

    Returns:
        datetime if parsed successfully, None otherwise
    """
    if not value:
        return None

    parsed = None

    # Try RFC 2822 format (common in RSS)
    try:
        parsed = parsedate_to_datetime(value)
    except (ValueError, TypeError, IndexError):
        pass

    # Try ISO format
    if parsed is None:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass

    # Fall back to feedparser's date handlers
    if parsed is None:
        parsed = _feedparser_date(value)

    if parsed is None:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _feedparser_date(value: str) -> Optional[datetime]:
    # _parse_date is not part of feedparser's public API; the dependency is
    # pinned to the 6.x line, which ships it in feedparser.datetimes.
    parse = getattr(feedparser_datetimes, "_parse_date", None)
    if parse is None:
        return None

    try:
        struct = parse(value)
        if struct is None:
            return None
        return datetime(*struct[:6], tzinfo=timezone.utc)
    except (ValueError, TypeError, OverflowError):
        return None
