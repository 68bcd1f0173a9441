from typing import Any

from fastapi import FastAPI

from data_query.api.dependencies import HandlerDep, lifespan
from data_query.config import QUERY_BLOCK_TYPE, get_settings
from data_query.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    DescriptorResponse,
    EndpointItem,
    HealthCheckResponse,
    QueryRequest,
    QueryResponse,
)

API_VERSION = "0.1.0"


def create_app() -> FastAPI:
    """Build the FastAPI application and register routes."""
    app = FastAPI(
        title="Data Query API",
        description="Resolve data-query blocks over REST, GraphQL, gRPC proxies and JSON-RPC with caching",
        version=API_VERSION,
        lifespan=lifespan,
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Data Query API",
            "version": API_VERSION,
            "block_type": QUERY_BLOCK_TYPE,
            "endpoints": {
                "query": "/query",
                "refresh": "/query/refresh",
                "parse": "/query/parse",
                "cache": "/cache",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.post("/query", response_model=QueryResponse)
    async def run_query(request: QueryRequest, handler: HandlerDep) -> QueryResponse:
        """Resolve a query block, serving from cache when fresh."""
        return await handler.run_query(request)

    @app.post("/query/refresh", response_model=QueryResponse)
    async def refresh_query(request: QueryRequest, handler: HandlerDep) -> QueryResponse:
        """Re-fetch a query block and overwrite its cache entry."""
        return await handler.refresh_query(request)

    @app.post("/query/parse", response_model=DescriptorResponse)
    async def parse_query(request: QueryRequest, handler: HandlerDep) -> DescriptorResponse:
        """Parse a query block without executing it."""
        return handler.parse_query(request)

    @app.get("/endpoints", response_model=list[EndpointItem])
    async def list_endpoints(handler: HandlerDep) -> list[EndpointItem]:
        """List configured endpoint aliases."""
        return handler.list_endpoints()

    @app.get("/cache/stats", response_model=CacheStatsResponse)
    async def cache_stats(handler: HandlerDep) -> CacheStatsResponse:
        """Get cache statistics."""
        return await handler.get_stats()

    @app.delete("/cache", response_model=CacheClearResponse)
    async def clear_cache(handler: HandlerDep) -> CacheClearResponse:
        """Clear all entries from the cache."""
        return await handler.clear_cache()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "data_query.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
