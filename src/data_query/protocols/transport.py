"""Transport protocol.

Defines the single network boundary of the pipeline: given a method, url,
headers and body, return the full response or raise.

Implementations can include:
- httpx AsyncClient (default)
- a test double built on httpx.MockTransport
- any proxying transport used by a host application
"""

import json
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

DEFAULT_CHARSET = "utf-8"


@dataclass(frozen=True)
class TransportRequest:
    """One outbound request built by an executor."""

    url: str
    method: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None


@dataclass(frozen=True)
class TransportResponse:
    """Fully buffered response returned by a transport."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def charset(self) -> str:
        """Charset named in the Content-Type header, utf-8 when absent."""
        for param in self.content_type.split(";")[1:]:
            key, _, value = param.strip().partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip("\"'")
        return DEFAULT_CHARSET

    @property
    def text(self) -> str:
        try:
            return self.body.decode(self.charset, errors="replace")
        except LookupError:
            # Unknown charset name
            return self.body.decode(DEFAULT_CHARSET, errors="replace")

    @property
    def content_type(self) -> str:
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                return value
        return ""

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
        """
        return json.loads(self.body)


@runtime_checkable
class Transport(Protocol):
    """Protocol for the network transport primitive.

    Any type that implements ``request`` satisfies the protocol,
    no explicit inheritance needed.
    """

    async def request(self, request: TransportRequest) -> TransportResponse:
        """Perform one request and wait for the complete response.

        Args:
            request: The request to send

        Returns:
            The buffered response

        Raises:
            ExecutionError: If the request could not be completed
        """
        ...
