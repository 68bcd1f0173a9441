"""Endpoint configuration domain entity."""

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EndpointConfig:
    """A named, preconfigured endpoint referenced as ``@alias`` in queries.

    Attributes:
        alias: Name used after the ``@`` marker
        url: Endpoint URL
        protocol: One of rest, graphql, grpc, rpc
        method: Default HTTP method
        headers: Default headers, copied into every descriptor
        body: Optional default body (raw text, parsed like a ``body:`` line)
        query: Optional default GraphQL document or RPC method name
    """

    alias: str
    url: str
    protocol: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    query: str | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "EndpointConfig":
        """Build an endpoint from a settings record.

        Accepts ``type`` as an alias for ``protocol``.

        Raises:
            ValueError: If alias, url or protocol is missing
        """
        protocol = payload.get("protocol") or payload.get("type")
        for name, value in (("alias", payload.get("alias")), ("url", payload.get("url")), ("protocol", protocol)):
            if not value:
                raise ValueError(f"Endpoint record is missing '{name}': {payload!r}")

        headers = payload.get("headers")
        if headers is None:
            headers = {}
        if not isinstance(headers, dict):
            raise ValueError(f"Endpoint '{payload['alias']}' headers must be an object")

        body = payload.get("body")
        return cls(
            alias=str(payload["alias"]),
            url=str(payload["url"]),
            protocol=str(protocol),
            method=str(payload.get("method") or "GET"),
            headers={str(k): str(v) for k, v in headers.items()},
            body=body if body is None or isinstance(body, str) else json.dumps(body),
            query=payload.get("query"),
        )

