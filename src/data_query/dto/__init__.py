"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import QueryRequest
from .responses import (
    CacheClearResponse,
    CacheStatsResponse,
    DescriptorResponse,
    EndpointItem,
    HealthCheckResponse,
    QueryResponse,
)

__all__ = [
    "QueryRequest",
    "DescriptorResponse",
    "QueryResponse",
    "EndpointItem",
    "CacheStatsResponse",
    "CacheClearResponse",
    "HealthCheckResponse",
]
