"""Repository layer for external resources.

This layer puts the network and the storage medium behind protocol-based
interfaces:
- HttpxTransport satisfies Transport
- LocalStorageBackend and RedisStorageBackend satisfy StorageBackend

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from data_query.protocols import StorageBackend, Transport

from .httpx_transport import HttpxTransport
from .local_storage import LocalStorageBackend
from .redis_storage import RedisStorageBackend

__all__ = [
    "HttpxTransport",
    "LocalStorageBackend",
    "RedisStorageBackend",
    "StorageBackend",
    "Transport",
]
