"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the network transport (httpx, host-provided, test doubles)
- Swapping the cache storage backend (filesystem, Redis, in-memory)
- Unit testing with fake implementations

Usage:
    ```python
    from data_query.protocols import StorageBackend, Transport

    storage: StorageBackend = LocalStorageBackend(root=".")
    transport: Transport = HttpxTransport.create()
    ```
"""

from .executor import QueryExecutor
from .storage_backend import FileStat, StorageBackend
from .transport import Transport, TransportRequest, TransportResponse

__all__ = [
    "FileStat",
    "QueryExecutor",
    "StorageBackend",
    "Transport",
    "TransportRequest",
    "TransportResponse",
]
