"""Shared fixtures: in-memory storage and an httpx mock network."""

import json
from collections.abc import Callable

import httpx
import pytest

from data_query.config import PipelineConfig
from data_query.entities import EndpointConfig
from data_query.protocols import FileStat
from data_query.repositories import HttpxTransport

BASE_TIME_MS = 1_700_000_000_000


class InMemoryStorageBackend:
    """Dictionary-backed StorageBackend for tests."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.directories: set[str] = set()
        self.failing_deletes: set[str] = set()
        self.fail_writes = False

    async def exists(self, path: str) -> bool:
        return path in self.files or path in self.directories

    async def create_directory(self, path: str) -> None:
        self.directories.add(path)

    async def write_file(self, path: str, data: bytes) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.files[path] = data

    async def read_file(self, path: str) -> bytes:
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    async def list_files(self, directory: str) -> list[str]:
        prefix = directory.rstrip("/") + "/"
        return sorted(p for p in self.files if p.startswith(prefix) and "/" not in p[len(prefix):])

    async def stat_file(self, path: str) -> FileStat:
        return FileStat(size=len(self.files[path]))

    async def delete_file(self, path: str) -> None:
        if path in self.failing_deletes:
            raise PermissionError(path)
        del self.files[path]

    async def health_check(self) -> bool:
        return True


class Clock:
    """Settable millisecond clock."""

    def __init__(self, now: int = BASE_TIME_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance_minutes(self, minutes: float) -> None:
        self.now += int(minutes * 60 * 1000)


class RecordingNetwork:
    """httpx.MockTransport handler that records requests and replays one response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status = 200
        self.payload: object = {"ok": True}
        self.content_type = "application/json"
        self.raw: bytes | None = None
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        content = self.raw if self.raw is not None else json.dumps(self.payload).encode()
        return httpx.Response(
            self.status,
            headers={"content-type": self.content_type},
            content=content,
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> object:
        return json.loads(self.last.content)


@pytest.fixture
def storage() -> InMemoryStorageBackend:
    return InMemoryStorageBackend()


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def network() -> RecordingNetwork:
    return RecordingNetwork()


@pytest.fixture
def transport(network: RecordingNetwork) -> HttpxTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(network))
    return HttpxTransport(client=client)


@pytest.fixture
def endpoints() -> tuple[EndpointConfig, ...]:
    return (
        EndpointConfig(
            alias="weather",
            url="https://x/weather",
            protocol="rest",
            method="GET",
            headers={},
        ),
        EndpointConfig(
            alias="github",
            url="https://x/gql",
            protocol="graphql",
            method="POST",
            headers={"Authorization": "Bearer base", "Accept": "application/json"},
        ),
        EndpointConfig(
            alias="node",
            url="https://x/rpc",
            protocol="rpc",
            method="POST",
            headers={},
            query="eth_blockNumber",
        ),
    )


@pytest.fixture
def config(endpoints: tuple[EndpointConfig, ...]) -> PipelineConfig:
    return PipelineConfig(endpoints=endpoints, cache_duration_minutes=60)


@pytest.fixture
def make_config(endpoints: tuple[EndpointConfig, ...]) -> Callable[[int], PipelineConfig]:
    def _make(minutes: int) -> PipelineConfig:
        return PipelineConfig(endpoints=endpoints, cache_duration_minutes=minutes)

    return _make
