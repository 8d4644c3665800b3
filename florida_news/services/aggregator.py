"""News aggregation service.

Ties the pipeline together: serve the cached payload while it is fresh,
otherwise fetch every source, classify, deduplicate, rank and store the
result.
"""

from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from florida_news.config import ServerConfig
from florida_news.logging_config import get_logger
from florida_news.models.schemas import Article, ResultPayload, Source
from florida_news.services.classifier import Classifier
from florida_news.services.fetcher import gather_all
from florida_news.services.ranking import finalize
from florida_news.storage.cache import ResultCache


Gather = Callable[[Sequence[Source], ServerConfig], Awaitable[List[Article]]]


class NewsAggregator:
    """Owns the result cache and rebuilds it on a miss.

    Concurrent misses may each run a rebuild; every rebuild computes its own
    payload and stores it in one step.
    """

    def __init__(
        self,
        config: ServerConfig,
        cache: Optional[ResultCache] = None,
        gather: Optional[Gather] = None,
        classifier: Optional[Classifier] = None,
    ):
        self.config = config
        self.cache = cache or ResultCache(config.cache_ttl_seconds)
        self._gather = gather or gather_all
        self.classifier = classifier or Classifier(
            admission_filter=config.admission_filter,
            assign_category=config.assign_category,
        )

    @property
    def sources(self) -> Sequence[Source]:
        return self.config.sources

    async def rebuild(self) -> ResultPayload:
        """Run the whole pipeline and return a fresh payload (not cached)."""
        logger = get_logger(__name__)

        articles = await self._gather(self.sources, self.config)
        relevant = self.classifier.apply(articles)
        payload = finalize(
            relevant,
            max_articles=self.config.max_articles,
            fingerprint_length=self.config.fingerprint_length,
        )

        logger.info(
            f"Rebuilt payload: {len(articles)} fetched, {len(relevant)} relevant, {payload.count} kept"
        )
        return payload

    async def get_news(self) -> Tuple[ResultPayload, bool]:
        """Return the current payload and whether it came from the cache."""
        logger = get_logger(__name__)

        cached = self.cache.get()
        if cached is not None:
            return cached, True

        payload = await self.rebuild()
        if not self.cache.store(payload):
            logger.warning("Rebuild produced no articles; keeping previous cache entry")
        return payload, False
