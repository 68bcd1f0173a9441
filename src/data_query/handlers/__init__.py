"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Network / Storage)
"""

from .query_handler import QueryHandler

__all__ = [
    "QueryHandler",
]
