"""Service layer for business logic.

This layer contains the query pipeline and its orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> QueryService -> Dispatcher -> Executors -> Transport
                            -> CacheService -> StorageBackend

Usage:
    ```python
    from data_query.services import QueryService

    service = QueryService.create(config=config, transport=transport, storage=storage)
    outcome = await service.resolve(source)
    ```
"""

from .cache_service import CacheService, CacheStats, fingerprint
from .dispatcher import Dispatcher
from .query_service import QueryOutcome, QueryService

__all__ = [
    "CacheService",
    "CacheStats",
    "Dispatcher",
    "QueryOutcome",
    "QueryService",
    "fingerprint",
]
