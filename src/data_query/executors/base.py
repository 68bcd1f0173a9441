"""Shared request-shaping helpers for protocol executors."""

import json
from collections.abc import Mapping
from typing import Any

from data_query.entities import RequestDescriptor
from data_query.errors import ExecutionError
from data_query.protocols import Transport, TransportRequest, TransportResponse

JSON_CONTENT_TYPE = "application/json"


def merge_headers(caller: Mapping[str, str], injected: Mapping[str, str]) -> dict[str, str]:
    """Merge protocol-injected headers under the caller's headers.

    An injected header is only added when the caller has not already set the
    same key (compared case-insensitively).
    """
    merged = dict(caller)
    present = {key.lower() for key in merged}
    for key, value in injected.items():
        if key.lower() not in present:
            merged[key] = value
    return merged


def require_url(descriptor: RequestDescriptor, label: str) -> str:
    if not descriptor.url:
        raise ExecutionError(f"URL is required for {label} queries")
    return descriptor.url


class BaseExecutor:
    """Common plumbing for executors that send one request over a Transport.

    Subclasses set ``protocol`` and ``label`` and implement ``execute``.
    """

    protocol: str = ""
    label: str = ""

    def __init__(self, transport: Transport) -> None:
        """Initialize the executor.

        Args:
            transport: Network transport used for the outbound call
        """
        self._transport = transport

    @classmethod
    def create(cls, transport: Transport) -> "BaseExecutor":
        return cls(transport=transport)

    async def send(self, request: TransportRequest) -> TransportResponse:
        response = await self._transport.request(request)
        if response.status >= 400:
            raise ExecutionError(f"Request failed, status {response.status}")
        return response

    def decode_json(self, response: TransportResponse) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ExecutionError(f"{self.label} response is not valid JSON: {e}") from e

    async def post_json(self, descriptor: RequestDescriptor, method: str, payload: Any) -> Any:
        """Send payload as a JSON document and decode a JSON response."""
        request = TransportRequest(
            url=require_url(descriptor, self.label),
            method=method,
            headers=merge_headers(descriptor.headers, {"Content-Type": JSON_CONTENT_TYPE}),
            body=json.dumps(payload),
        )
        response = await self.send(request)
        return self.decode_json(response)
