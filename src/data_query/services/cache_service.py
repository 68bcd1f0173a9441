"""Cache service for query results.

Results are stored as JSON snapshots under one cache directory, one file
per request fingerprint. Entries expire logically (by age) on lookup but
are only physically removed by ``clear_all``.
"""

import hashlib
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass

from data_query.config import PipelineConfig
from data_query.entities import QueryResult, RequestDescriptor, now_ms
from data_query.errors import CacheError
from data_query.protocols import StorageBackend

logger = logging.getLogger(__name__)

CACHE_FILE_SUFFIX = ".json"


@dataclass(frozen=True)
class CacheStats:
    """Aggregate usage of the cache directory, expired entries included."""

    count: int
    total_bytes: int


def fingerprint(descriptor: RequestDescriptor) -> str:
    """Deterministic cache key for a descriptor.

    Only url, protocol, method, body, query and variables take part;
    headers and the endpoint alias do not. Keys are sorted before hashing so
    field order never changes the result.
    """
    canonical = json.dumps(
        descriptor.cache_fields(),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
        default=str,
    )
    return hashlib.md5(canonical.encode("utf-8")).hexdigest()


class CacheService:
    """Fingerprint-addressed result cache on top of a StorageBackend.

    This service depends on the StorageBackend PROTOCOL, so the same logic
    runs against the local filesystem, Redis or an in-memory fake.

    Example:
        ```python
        cache = CacheService.create(
            storage=LocalStorageBackend.create(root="."),
            config=PipelineConfig(cache_duration_minutes=60),
        )

        result = await cache.lookup(descriptor)
        if result is None:
            result = await dispatcher.execute(descriptor)
            await cache.store(descriptor, result)
        ```
    """

    def __init__(
        self,
        storage: StorageBackend,
        config: PipelineConfig,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """Initialize the cache service.

        Args:
            storage: Backend holding the cache files (required).
            config: Pipeline configuration (cache directory and duration).
            clock: Returns the current time in milliseconds.
        """
        self._storage = storage
        self._config = config
        self._clock = clock
        self._directory = config.cache_dir.rstrip("/")

    @classmethod
    def create(
        cls,
        storage: StorageBackend,
        config: PipelineConfig,
        clock: Callable[[], int] = now_ms,
    ) -> "CacheService":
        """Factory method to create a CacheService."""
        return cls(storage=storage, config=config, clock=clock)

    def fingerprint(self, descriptor: RequestDescriptor) -> str:
        return fingerprint(descriptor)

    def entry_path(self, key: str) -> str:
        return f"{self._directory}/{key}{CACHE_FILE_SUFFIX}"

    async def ensure_storage(self) -> None:
        """Create the cache directory if it does not exist yet.

        Raises:
            CacheError: If the backend cannot create the directory
        """
        try:
            if not await self._storage.exists(self._directory):
                await self._storage.create_directory(self._directory)
        except CacheError:
            raise
        except Exception as e:
            raise CacheError(f"Failed to create cache folder {self._directory}: {e}") from e

    def is_expired(self, result: QueryResult) -> bool:
        return result.age_ms(self._clock()) > self._config.cache_duration_ms

    async def lookup(self, descriptor: RequestDescriptor) -> QueryResult | None:
        """Return the cached result, or None on miss or logical expiry.

        Expired entries are left in place.
        """
        path = self.entry_path(self.fingerprint(descriptor))
        try:
            await self.ensure_storage()
            if not await self._storage.exists(path):
                return None
            raw = await self._storage.read_file(path)
            result = QueryResult.from_dict(json.loads(raw))
        except Exception as e:
            logger.error("Error reading from cache %s: %s", path, e)
            return None

        if self.is_expired(result):
            logger.debug("Cache entry %s expired", path)
            return None
        return result

    async def store(self, descriptor: RequestDescriptor, result: QueryResult) -> bool:
        """Create or overwrite the entry for descriptor.

        Returns:
            True if written, False if the backend failed (failure is logged)
        """
        path = self.entry_path(self.fingerprint(descriptor))
        try:
            await self.ensure_storage()
            payload = json.dumps(result.to_dict(), default=str)
            await self._storage.write_file(path, payload.encode("utf-8"))
        except Exception as e:
            logger.error("Error saving to cache %s: %s", path, e)
            return False
        return True

    async def _entry_paths(self) -> list[str]:
        paths = await self._storage.list_files(self._directory)
        return [path for path in paths if path.endswith(CACHE_FILE_SUFFIX)]

    async def clear_all(self) -> int:
        """Delete every cache entry.

        Individual delete failures do not stop the remaining deletions.

        Returns:
            Number of entries deleted

        Raises:
            CacheError: If the directory could not be listed or any delete failed
        """
        await self.ensure_storage()
        try:
            paths = await self._entry_paths()
        except Exception as e:
            raise CacheError(f"Error clearing cache: {e}") from e

        deleted = 0
        failed = 0
        for path in paths:
            try:
                await self._storage.delete_file(path)
                deleted += 1
            except Exception as e:
                failed += 1
                logger.error("Failed to delete cache file %s: %s", path, e)

        logger.info("Cleared %d cache files", deleted)
        if failed:
            raise CacheError(
                f"Failed to delete {failed} of {len(paths)} cache files",
                deleted=deleted,
                failed=failed,
            )
        return deleted

    async def stats(self) -> CacheStats:
        """Count and size all persisted entries, regardless of expiry."""
        try:
            await self.ensure_storage()
            count = 0
            total_bytes = 0
            for path in await self._entry_paths():
                stat = await self._storage.stat_file(path)
                count += 1
                total_bytes += stat.size
        except Exception as e:
            logger.error("Error getting cache info: %s", e)
            return CacheStats(count=0, total_bytes=0)
        return CacheStats(count=count, total_bytes=total_bytes)

    @property
    def cache_duration_minutes(self) -> int:
        return self._config.cache_duration_minutes

    @property
    def storage(self) -> StorageBackend:
        """Get the underlying storage backend (for testing)."""
        return self._storage
