"""Request descriptor domain entity."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from .payload import EMPTY, Payload

DIRECT_ENDPOINT = "direct"


class QueryProtocol(str, Enum):
    """Protocol variants understood by the dispatcher."""

    REST = "rest"
    GRAPHQL = "graphql"
    GRPC = "grpc"
    RPC = "rpc"


@dataclass(frozen=True)
class RequestDescriptor:
    """Normalized, dialect-independent representation of one query.

    Produced by the parser and consumed by exactly one dispatcher call.
    ``protocol`` is kept as a plain string so that unsupported values reach
    the dispatcher, which turns them into a failure result.

    Attributes:
        url: Target URL (always present after a successful parse)
        protocol: One of rest, graphql, grpc, rpc
        endpoint_ref: Endpoint alias, or "direct" for inline queries
        method: HTTP method override, protocol default when None
        headers: Merged request headers (read-only)
        body: Request body payload
        query: GraphQL document or JSON-RPC method name
        variables: GraphQL variables payload
    """

    url: str
    protocol: str
    endpoint_ref: str = DIRECT_ENDPOINT
    method: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Payload = EMPTY
    query: str | None = None
    variables: Payload = EMPTY

    def __post_init__(self) -> None:
        # Frozen dataclass: bypass __setattr__ to freeze the header mapping
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __hash__(self) -> int:
        return hash((self.url, self.protocol, self.endpoint_ref, self.method, self.query))

    def cache_fields(self) -> dict[str, Any]:
        """Return the subset of fields that identifies a cache entry.

        Headers and endpoint_ref are not part of the identity.
        """
        return {
            "url": self.url,
            "protocol": self.protocol,
            "method": self.method,
            "body": self.body.to_value(),
            "query": self.query,
            "variables": self.variables.to_value(),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "endpoint": self.endpoint_ref,
            "headers": dict(self.headers),
            **self.cache_fields(),
        }
