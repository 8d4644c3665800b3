"""Shared fixtures for florida_news tests."""

from datetime import datetime, timedelta, timezone

import pytest

from florida_news.config import ServerConfig
from florida_news.models.schemas import Article, Source


SAMPLE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>"florida cannabis" - Google News</title>
    <link>https://news.google.com/search?q=florida+cannabis</link>
    <item>
      <title>Florida House advances marijuana bill - Tampa Bay Times</title>
      <link>https://news.google.com/rss/articles/abc?oc=5</link>
      <guid isPermaLink="false">CBMiabc</guid>
      <pubDate>Mon, 01 Jan 2024 12:00:00 GMT</pubDate>
      <description>&lt;a href="https://news.google.com/rss/articles/abc?oc=5" target="_blank"&gt;Florida House advances marijuana bill&lt;/a&gt;&amp;nbsp;&amp;nbsp;&lt;font color="#6f6f6f"&gt;Tampa Bay Times&lt;/font&gt;</description>
      <source url="https://www.tampabay.com">Tampa Bay Times</source>
    </item>
    <item>
      <title>Trulieve opens new Miami dispensary</title>
      <link>https://example.com/trulieve-miami</link>
      <pubDate>Tue, 02 Jan 2024 08:30:00 +0000</pubDate>
      <media:content url="https://cdn.example.com/trulieve.jpg" medium="image"/>
      <media:thumbnail url="https://cdn.example.com/trulieve-thumb.jpg"/>
      <description>Trulieve &amp; partners cut the ribbon.</description>
    </item>
    <item>
      <link>https://example.com/no-title</link>
      <description>Missing a title</description>
    </item>
    <item>
      <title>Relative link story</title>
      <link>/stories/relative</link>
    </item>
    <item>
      <title><![CDATA[Hemp farmers in Gainesville <em>expand</em>]]></title>
      <link>https://example.com/hemp-gainesville</link>
      <pubDate>sometime last week</pubDate>
      <description><![CDATA[<p><img src="https://cdn.example.com/hemp.png" alt=""> Hemp acreage grows.</p>]]></description>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def source():
    return Source(
        name="Google News: Florida Cannabis",
        label="FL Cannabis",
        url="https://feeds.example.com/cannabis.xml",
        color="#2e7d32",
    )


@pytest.fixture
def config():
    return ServerConfig()


@pytest.fixture
def make_article():
    """Factory for articles; `hours` offsets the publish time from a fixed base."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _make(title="Florida marijuana news", hours=0, label="FL Cannabis", **kwargs):
        slug = "".join(c if c.isalnum() else "-" for c in title.lower())
        defaults = {
            "link": f"https://example.com/{slug}",
            "description": "",
            "thumbnail": "",
        }
        defaults.update(kwargs)
        return Article(
            title=title,
            published_at=base + timedelta(hours=hours),
            source_label=label,
            **defaults,
        )

    return _make
