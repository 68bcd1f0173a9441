"""Data Query - resolve document-embedded queries with a result cache.

This package provides a layered architecture for the query pipeline:

Layers:
    - entities: Domain models (RequestDescriptor, QueryResult, EndpointConfig)
    - parser: Query block text -> RequestDescriptor
    - executors: One executor per protocol (rest, graphql, grpc, rpc)
    - services: Dispatcher, CacheService and the QueryService pipeline
    - protocols: Interface contracts (Transport, StorageBackend, QueryExecutor)
    - repositories: Network and storage implementations
    - handlers / dto / api: HTTP surface

Usage:
    ```python
    from data_query import PipelineConfig, QueryService
    from data_query.repositories import HttpxTransport, LocalStorageBackend

    service = QueryService.create(
        config=PipelineConfig(endpoints=endpoints, cache_duration_minutes=60),
        transport=HttpxTransport.create(),
        storage=LocalStorageBackend.create(root="."),
    )
    outcome = await service.resolve(block_source)
    ```
"""

from data_query.config import PipelineConfig, Settings, get_settings, load_endpoints
from data_query.entities import EndpointConfig, QueryResult, RequestDescriptor
from data_query.errors import CacheError, DataQueryError, ExecutionError, ParseError
from data_query.parser import parse_query
from data_query.services import CacheService, CacheStats, Dispatcher, QueryOutcome, QueryService

__all__ = [
    # Configuration
    "PipelineConfig",
    "Settings",
    "get_settings",
    "load_endpoints",
    # Entities
    "EndpointConfig",
    "QueryResult",
    "RequestDescriptor",
    # Errors
    "DataQueryError",
    "ParseError",
    "ExecutionError",
    "CacheError",
    # Pipeline
    "parse_query",
    "Dispatcher",
    "CacheService",
    "CacheStats",
    "QueryService",
    "QueryOutcome",
]
