"""HTTP handlers for query operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from fastapi import HTTPException, status

from data_query.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    DescriptorResponse,
    EndpointItem,
    HealthCheckResponse,
    QueryRequest,
    QueryResponse,
)
from data_query.errors import CacheError, ParseError
from data_query.rendering import format_result
from data_query.services import QueryOutcome, QueryService


def _to_query_response(outcome: QueryOutcome) -> QueryResponse:
    descriptor, result = outcome.descriptor, outcome.result
    return QueryResponse(
        endpoint=descriptor.endpoint_ref,
        protocol=descriptor.protocol,
        url=descriptor.url,
        from_cache=outcome.from_cache,
        data=result.data,
        timestamp=result.timestamp,
        error=result.error,
        rendered=format_result(result),
    )


class QueryHandler:
    """HTTP handlers for query operations.

    This handler delegates business logic to QueryService
    and handles HTTP-specific concerns like:
    - Converting outcomes to DTOs
    - Mapping ParseError to 400 and CacheError to 500
    """

    def __init__(self, query_service: QueryService) -> None:
        """Initialize the query handler.

        Args:
            query_service: The query service for business logic (required).
        """
        self._service = query_service

    async def run_query(self, request: QueryRequest) -> QueryResponse:
        """Handle POST /query requests.

        Raises:
            HTTPException: 400 if the block cannot be parsed
        """
        try:
            outcome = await self._service.resolve(request.source)
        except ParseError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Failed to parse query: {e}",
            ) from e
        return _to_query_response(outcome)

    async def refresh_query(self, request: QueryRequest) -> QueryResponse:
        """Handle POST /query/refresh requests."""
        try:
            outcome = await self._service.refresh(request.source)
        except ParseError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Failed to parse query: {e}",
            ) from e
        return _to_query_response(outcome)

    def parse_query(self, request: QueryRequest) -> DescriptorResponse:
        """Handle POST /query/parse requests (no network call)."""
        try:
            descriptor = self._service.parse(request.source)
        except ParseError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Failed to parse query: {e}",
            ) from e
        return DescriptorResponse(**descriptor.to_dict())

    def list_endpoints(self) -> list[EndpointItem]:
        return [
            EndpointItem(
                alias=endpoint.alias,
                url=endpoint.url,
                protocol=endpoint.protocol,
                method=endpoint.method,
            )
            for endpoint in self._service.endpoints
        ]

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests."""
        stats = await self._service.cache_stats()
        return CacheStatsResponse(
            count=stats.count,
            total_bytes=stats.total_bytes,
            cache_duration_minutes=self._service.cache.cache_duration_minutes,
        )

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /cache requests.

        Raises:
            HTTPException: 500 if any entry could not be deleted
        """
        try:
            count = await self._service.clear_cache()
        except CacheError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

        return CacheClearResponse(
            success=True,
            deleted_count=count,
            message=f"Cleared {count} cache files",
        )

    async def health_check(self) -> HealthCheckResponse:
        is_healthy = await self._service.is_healthy()
        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            storage_healthy=is_healthy,
        )
