"""Services for florida_news."""

from .aggregator import NewsAggregator
from .classifier import Classifier, categorize, is_relevant
from .feed_parser import parse_feed
from .fetcher import gather_all, gather_settled
from .markup import extract_field, extract_raw_field
from .ranking import finalize, fingerprint

__all__ = [
    "NewsAggregator",
    "Classifier",
    "categorize",
    "is_relevant",
    "parse_feed",
    "gather_all",
    "gather_settled",
    "extract_field",
    "extract_raw_field",
    "finalize",
    "fingerprint",
]
