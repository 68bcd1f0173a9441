"""Storage backend protocol.

Defines the key-value-over-hierarchical-namespace interface the cache
service persists its entries through. Paths are POSIX-style strings
relative to the backend's own root (e.g. ``data-fetcher-cache/<key>.json``).

Implementations can include:
- Local filesystem (default)
- Redis
- An in-memory dictionary for tests
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class FileStat:
    """Metadata for one stored file."""

    size: int


@runtime_checkable
class StorageBackend(Protocol):
    """Protocol for cache storage backends.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.
    """

    async def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at path."""
        ...

    async def create_directory(self, path: str) -> None:
        """Create a directory (and parents). Must be idempotent."""
        ...

    async def write_file(self, path: str, data: bytes) -> None:
        """Create or overwrite the file at path."""
        ...

    async def read_file(self, path: str) -> bytes:
        """Read the file at path.

        Raises:
            FileNotFoundError: If no file exists at path
        """
        ...

    async def list_files(self, directory: str) -> list[str]:
        """List the file paths directly inside directory."""
        ...

    async def stat_file(self, path: str) -> FileStat:
        """Return metadata for the file at path."""
        ...

    async def delete_file(self, path: str) -> None:
        """Delete the file at path."""
        ...

    async def health_check(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
