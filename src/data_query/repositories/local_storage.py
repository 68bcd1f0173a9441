"""Local filesystem implementation of StorageBackend.

Paths are resolved under a root directory; writes go through a temporary
file and ``os.replace`` so a crashed write never leaves a truncated entry.
"""

import asyncio
import os
import uuid
from contextlib import suppress
from pathlib import Path

from data_query.protocols import FileStat


class LocalStorageBackend:
    """Filesystem storage rooted at one directory.

    This class satisfies the StorageBackend protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, root: Path | str = Path(".")) -> None:
        self.root = Path(root).resolve()

    @classmethod
    def create(cls, root: Path | str = Path(".")) -> "LocalStorageBackend":
        return cls(root=root)

    def _resolve(self, path: str) -> Path:
        resolved = (self.root / path).resolve()
        if resolved != self.root and self.root not in resolved.parents:
            raise ValueError(f"Path escapes storage root: {path}")
        return resolved

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def _write_sync(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = target.with_name(f".tmp-{target.name}-{uuid.uuid4().hex}")
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, target)
        except OSError:
            with suppress(FileNotFoundError):
                tmp_path.unlink()
            raise

    def _list_sync(self, base: Path) -> list[str]:
        if not base.is_dir():
            return []
        return sorted(
            self._relative(child)
            for child in base.iterdir()
            if child.is_file() and not child.name.startswith(".tmp-")
        )

    def _healthy_sync(self) -> bool:
        return self.root.is_dir() and os.access(self.root, os.W_OK)

    # Filesystem calls run in a worker thread to keep the event loop free

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._resolve(path).exists)

    async def create_directory(self, path: str) -> None:
        await asyncio.to_thread(self._resolve(path).mkdir, parents=True, exist_ok=True)

    async def write_file(self, path: str, data: bytes) -> None:
        await asyncio.to_thread(self._write_sync, self._resolve(path), data)

    async def read_file(self, path: str) -> bytes:
        return await asyncio.to_thread(self._resolve(path).read_bytes)

    async def list_files(self, directory: str) -> list[str]:
        return await asyncio.to_thread(self._list_sync, self._resolve(directory))

    async def stat_file(self, path: str) -> FileStat:
        stat = await asyncio.to_thread(self._resolve(path).stat)
        return FileStat(size=stat.st_size)

    async def delete_file(self, path: str) -> None:
        await asyncio.to_thread(self._resolve(path).unlink)

    async def health_check(self) -> bool:
        return await asyncio.to_thread(self._healthy_sync)
