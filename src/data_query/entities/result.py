"""Query result domain entity."""

import time
from dataclasses import dataclass
from typing import Any


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class QueryResult:
    """Snapshot of one executed query.

    Never mutated after creation; a refresh produces a new result.

    Attributes:
        data: Decoded response (JSON value or text), None on failure
        timestamp: Milliseconds since epoch when the executor completed
        error: Human-readable failure message, present iff the query failed
    """

    data: Any
    timestamp: int
    error: str | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.data is not None:
            raise ValueError("A failed QueryResult cannot carry data")

    @classmethod
    def success(cls, data: Any, timestamp: int | None = None) -> "QueryResult":
        return cls(data=data, timestamp=timestamp if timestamp is not None else now_ms())

    @classmethod
    def failure(cls, error: str, timestamp: int | None = None) -> "QueryResult":
        return cls(
            data=None,
            timestamp=timestamp if timestamp is not None else now_ms(),
            error=error,
        )

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def age_ms(self, now: int) -> int:
        return now - self.timestamp

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the cached snapshot format."""
        payload: dict[str, Any] = {"data": self.data, "timestamp": self.timestamp}
        if self.error is not None:
            payload["error"] = self.error
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "QueryResult":
        """Rebuild a result from a cached snapshot.

        Raises:
            ValueError: If the snapshot is missing a numeric timestamp
        """
        timestamp = payload.get("timestamp")
        if not isinstance(timestamp, (int, float)) or isinstance(timestamp, bool):
            raise ValueError(f"Invalid cache snapshot timestamp: {timestamp!r}")
        error = payload.get("error")
        return cls(
            data=None if error is not None else payload.get("data"),
            timestamp=int(timestamp),
            error=error,
        )
