"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class DescriptorResponse(BaseModel):
    """Response DTO for a parsed request descriptor."""

    endpoint: str = Field(..., description="Endpoint alias, or 'direct' for inline queries")
    protocol: str = Field(..., description="rest, graphql, grpc or rpc")
    url: str = Field(..., description="Target URL")
    method: str | None = Field(None, description="HTTP method override")
    headers: dict[str, str] = Field(default_factory=dict, description="Merged request headers")
    body: Any = Field(None, description="Request body (JSON value or raw text)")
    query: str | None = Field(None, description="GraphQL document or RPC method name")
    variables: Any = Field(None, description="GraphQL variables")


class QueryResponse(BaseModel):
    """Response DTO for a resolved query."""

    endpoint: str = Field(..., description="Endpoint alias, or 'direct' for inline queries")
    protocol: str = Field(..., description="Protocol the query was dispatched with")
    url: str = Field(..., description="Target URL")
    from_cache: bool = Field(..., description="Whether the result was served from the cache")
    data: Any = Field(None, description="Decoded response data, null on failure")
    timestamp: int = Field(..., description="When the result was fetched (ms since epoch)")
    error: str | None = Field(None, description="Failure message, present iff the query failed")
    rendered: str = Field(..., description="Display text for the result")


class EndpointItem(BaseModel):
    """Single configured endpoint (in endpoints array)."""

    alias: str = Field(..., description="Name referenced as @alias")
    url: str = Field(..., description="Endpoint URL")
    protocol: str = Field(..., description="rest, graphql, grpc or rpc")
    method: str = Field(..., description="Default HTTP method")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    count: int = Field(..., description="Number of persisted entries (expired included)", ge=0)
    total_bytes: int = Field(..., description="Total size of persisted entries in bytes", ge=0)
    cache_duration_minutes: int = Field(
        ...,
        description="Age after which an entry is treated as a miss",
        ge=0,
    )


class CacheClearResponse(BaseModel):
    """Response DTO for cache clear operation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    deleted_count: int = Field(..., description="Number of entries deleted", ge=0)
    message: str = Field(..., description="Human-readable status message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    storage_healthy: bool = Field(..., description="Whether the cache storage backend is reachable")
