"""Relevance and category classification.

Both policies are plain keyword matching over the lower-cased title and
description. They keep no state between calls.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Sequence, Tuple

from florida_news.models.schemas import Article


DEFAULT_CATEGORY = "general"

# An article must name the region...
REGION_KEYWORDS: Tuple[str, ...] = (
    "florida", "fla.", "sunshine state",
    "miami", "tampa", "orlando", "jacksonville", "tallahassee",
    "st. petersburg", "st. pete", "fort lauderdale", "gainesville",
    "pensacola", "sarasota", "fort myers", "naples, fla", "daytona",
    "palm beach", "boca raton", "key west", "broward", "hillsborough",
    "pinellas", "orange county, fla", "desantis", "ommu",
)

# ...and the topic. Operator names catch articles without generic keywords.
TOPIC_KEYWORDS: Tuple[str, ...] = (
    "cannabis", "marijuana", "hemp", "thc", "cbd", "dispensar",
    "kratom", "delta-8", "delta 8", "medical use",
    "trulieve", "curaleaf", "ayr wellness", "verano", "muv",
    "fluent", "surterra", "liberty health sciences", "rise dispensar",
    "sunnyside", "planet 13", "green dragon", "jungle boys",
    "smart for florida", "cresco",
)

# First match wins, so order matters.
CATEGORIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("legislation", (
        "bill", "legislat", "lawmaker", "senate", "house", "session",
        "amendment", "ballot", "referendum", "statute", "governor", "desantis",
    )),
    ("medical", (
        "medical marijuana", "medical cannabis", "patient", "physician",
        "doctor", "qualifying condition", "ommu", "marijuana card",
    )),
    ("business", (
        "dispensar", "license", "licensing", "trulieve", "curaleaf", "verano",
        "market", "sales", "revenue", "earnings", "stock", "company", "acquisition",
    )),
    ("hemp", ("hemp", "cbd", "delta-8", "delta 8", "thc-a", "kratom")),
    ("enforcement", (
        "arrest", "police", "sheriff", "seized", "charged", "deputies",
        "raid", "dui", "court", "lawsuit", "judge",
    )),
)


def _text(title: str, description: str) -> str:
    return f"{title} {description}".lower()


def _matches_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword.lower() in text for keyword in keywords)


def is_relevant(
    title: str,
    description: str = "",
    *,
    region_keywords: Sequence[str] = REGION_KEYWORDS,
    topic_keywords: Sequence[str] = TOPIC_KEYWORDS,
) -> bool:
    """Admit an article only if it mentions both the region and the topic."""
    text = _text(title, description)
    return _matches_any(text, region_keywords) and _matches_any(text, topic_keywords)


def categorize(
    title: str,
    description: str = "",
    *,
    categories: Iterable[Tuple[str, Sequence[str]]] = CATEGORIES,
    default: str = DEFAULT_CATEGORY,
) -> str:
    """Return the first category with a keyword in the title or description."""
    if isinstance(categories, Mapping):
        categories = categories.items()

    text = _text(title, description)
    for name, keywords in categories:
        if _matches_any(text, keywords):
            return name
    return default


@dataclass(frozen=True)
class Classifier:
    """Admission filter and category labelling, each of which can be switched off."""

    admission_filter: bool = True
    assign_category: bool = True
    region_keywords: Tuple[str, ...] = REGION_KEYWORDS
    topic_keywords: Tuple[str, ...] = TOPIC_KEYWORDS
    categories: Tuple[Tuple[str, Tuple[str, ...]], ...] = CATEGORIES

    def admit(self, article: Article) -> bool:
        if not self.admission_filter:
            return True
        return is_relevant(
            article.title,
            article.description,
            region_keywords=self.region_keywords,
            topic_keywords=self.topic_keywords,
        )

    def label(self, article: Article) -> Article:
        if not self.assign_category:
            return article
        category = categorize(article.title, article.description, categories=self.categories)
        return replace(article, category=category)

    def apply(self, articles: Iterable[Article]) -> list:
        return [self.label(article) for article in articles if self.admit(article)]
