"""Query service: the end-to-end resolution pipeline.

    source text -> parse -> cache lookup -> (miss) dispatch -> cache store

Parse errors propagate to the caller before any network call. Everything
after parsing yields a QueryResult, failed or not.
"""

import logging
from dataclasses import dataclass

from data_query.config import PipelineConfig
from data_query.entities import EndpointConfig, QueryResult, RequestDescriptor
from data_query.parser import parse_query
from data_query.protocols import StorageBackend, Transport

from .cache_service import CacheService, CacheStats
from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryOutcome:
    """A resolved query together with where its result came from."""

    descriptor: RequestDescriptor
    result: QueryResult
    from_cache: bool


class QueryService:
    """Orchestrates parser, cache and dispatcher for one query block.

    Example:
        ```python
        service = QueryService.create(
            config=PipelineConfig(endpoints=(weather,)),
            transport=HttpxTransport.create(),
            storage=LocalStorageBackend.create(root="."),
        )
        outcome = await service.resolve("@weather\\nbody: {\\"city\\": \\"Tokyo\\"}")
        ```
    """

    def __init__(
        self,
        config: PipelineConfig,
        dispatcher: Dispatcher,
        cache: CacheService,
    ) -> None:
        self._config = config
        self._dispatcher = dispatcher
        self._cache = cache

    @classmethod
    def create(
        cls,
        config: PipelineConfig,
        transport: Transport,
        storage: StorageBackend,
    ) -> "QueryService":
        """Factory method wiring the default dispatcher and cache service."""
        return cls(
            config=config,
            dispatcher=Dispatcher.create(transport=transport),
            cache=CacheService.create(storage=storage, config=config),
        )

    @property
    def endpoints(self) -> tuple[EndpointConfig, ...]:
        return self._config.endpoints

    def parse(self, source: str) -> RequestDescriptor:
        """Parse source against the configured endpoints.

        Raises:
            ParseError: If the source is malformed
        """
        return parse_query(source, self._config.endpoints)

    async def resolve(self, source: str) -> QueryOutcome:
        """Return the cached result for source, fetching it on a miss.

        Raises:
            ParseError: If the source is malformed
        """
        descriptor = self.parse(source)

        cached = await self._cache.lookup(descriptor)
        if cached is not None:
            logger.debug("Cache hit for %s (%s)", descriptor.url, descriptor.endpoint_ref)
            return QueryOutcome(descriptor=descriptor, result=cached, from_cache=True)

        return await self._fetch(descriptor)

    async def refresh(self, source: str) -> QueryOutcome:
        """Re-execute source, bypassing and then overwriting the cache entry.

        Raises:
            ParseError: If the source is malformed
        """
        return await self._fetch(self.parse(source))

    async def _fetch(self, descriptor: RequestDescriptor) -> QueryOutcome:
        result = await self._dispatcher.execute(descriptor)
        await self._cache.store(descriptor, result)
        return QueryOutcome(descriptor=descriptor, result=result, from_cache=False)

    async def clear_cache(self) -> int:
        """Delete all cached results.

        Raises:
            CacheError: If any entry could not be deleted
        """
        return await self._cache.clear_all()

    async def cache_stats(self) -> CacheStats:
        return await self._cache.stats()

    async def is_healthy(self) -> bool:
        return await self._cache.storage.health_check()

    @property
    def cache(self) -> CacheService:
        """Get the underlying cache service (for testing)."""
        return self._cache

    @property
    def dispatcher(self) -> Dispatcher:
        """Get the underlying dispatcher (for testing)."""
        return self._dispatcher
