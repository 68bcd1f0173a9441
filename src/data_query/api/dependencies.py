"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from data_query.config import PipelineConfig, Settings, configure_logging, get_settings
from data_query.errors import CacheError
from data_query.handlers import QueryHandler
from data_query.protocols import StorageBackend
from data_query.repositories import HttpxTransport, LocalStorageBackend, RedisStorageBackend
from data_query.services import QueryService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> QueryHandler:
    """Dependency injection for QueryHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "query_handler", None)
    if handler is None:
        raise RuntimeError("QueryHandler not initialized. Check lifespan setup.")
    return handler


def build_storage(settings: Settings) -> StorageBackend:
    """Select the cache storage backend named by STORAGE_BACKEND."""
    if settings.storage_backend == "redis":
        return RedisStorageBackend.create(settings)
    return LocalStorageBackend.create(root=settings.storage_root)


def install_service(app: FastAPI, service: QueryService) -> None:
    """Store a service and its handler in app.state."""
    app.state.query_service = service
    app.state.query_handler = QueryHandler(query_service=service)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Transport and storage backend (repositories)
    2. Service (business logic) - stored in app.state.query_service
    3. Handler (HTTP endpoints) - stored in app.state.query_handler
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    config = PipelineConfig.from_settings(settings)
    transport = HttpxTransport.create(timeout=settings.http_timeout)
    storage = build_storage(settings)

    service = QueryService.create(config=config, transport=transport, storage=storage)
    install_service(app, service)

    try:
        await service.cache.ensure_storage()
    except CacheError as e:
        logger.warning("Cache storage unavailable: %s", e)

    logger.info("Query service initialized")
    logger.info("Endpoints: %s", ", ".join(e.alias for e in config.endpoints) or "(none)")
    logger.info("Cache: %s backend, %d minutes", settings.storage_backend, config.cache_duration_minutes)

    yield

    await transport.close()
    if isinstance(storage, RedisStorageBackend):
        await storage.close()

    # Cleanup - remove from app.state
    del app.state.query_handler
    del app.state.query_service
    logger.info("Query service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[QueryHandler, Depends(get_handler)]
