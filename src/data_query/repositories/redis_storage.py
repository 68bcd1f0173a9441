"""Redis implementation of StorageBackend.

Maps the hierarchical namespace onto flat Redis keys:

    <namespace>:file:<path>   -> file contents (string value)
    <namespace>:dir:<path>    -> directory marker

Entries carry no Redis TTL; expiry is decided by the cache service on
lookup, and entries are only removed by an explicit clear.
"""

import redis.asyncio as redis

from data_query.config import Settings, get_redis_client
from data_query.protocols import FileStat


GLOB_SPECIAL_CHARS = "\\*?[]"


def _escape_glob(text: str) -> str:
    """Escape characters that SCAN MATCH treats as glob syntax."""
    return "".join(f"\\{ch}" if ch in GLOB_SPECIAL_CHARS else ch for ch in text)


class RedisStorageBackend:
    """Redis-backed storage.

    This class satisfies the StorageBackend protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        namespace: str = "data_query",
    ) -> None:
        """Initialize the Redis storage backend.

        Args:
            redis_client: Async Redis client instance.
            namespace: Prefix for every key written by this backend.
        """
        self._client = redis_client
        self._namespace = namespace

    @classmethod
    def create(cls, settings: Settings) -> "RedisStorageBackend":
        """Factory method building the client from settings."""
        return cls(redis_client=get_redis_client(settings), namespace=settings.redis_namespace)

    def _file_key(self, path: str) -> str:
        return f"{self._namespace}:file:{path.strip('/')}"

    def _dir_key(self, path: str) -> str:
        return f"{self._namespace}:dir:{path.strip('/')}"

    async def exists(self, path: str) -> bool:
        count: int = await self._client.exists(self._file_key(path), self._dir_key(path))
        return count > 0

    async def create_directory(self, path: str) -> None:
        await self._client.set(self._dir_key(path), b"1")

    async def write_file(self, path: str, data: bytes) -> None:
        await self._client.set(self._file_key(path), data)

    async def read_file(self, path: str) -> bytes:
        value = await self._client.get(self._file_key(path))
        if value is None:
            raise FileNotFoundError(path)
        return value

    async def list_files(self, directory: str) -> list[str]:
        prefix = self._file_key(directory) + "/"
        paths = []
        async for key in self._client.scan_iter(match=f"{_escape_glob(prefix)}*"):
            name = (key.decode() if isinstance(key, bytes) else key)[len(prefix):]
            # Direct children only
            if "/" not in name:
                paths.append(f"{directory.strip('/')}/{name}")
        return sorted(paths)

    async def stat_file(self, path: str) -> FileStat:
        key = self._file_key(path)
        if not await self._client.exists(key):
            raise FileNotFoundError(path)
        size: int = await self._client.strlen(key)
        return FileStat(size=size)

    async def delete_file(self, path: str) -> None:
        deleted: int = await self._client.delete(self._file_key(path))
        if deleted == 0:
            raise FileNotFoundError(path)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except redis.RedisError:
            return False

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
