"""Domain entities for internal representation.

These are pure dataclasses (frozen) shared by the parser, executors,
services and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .descriptor import DIRECT_ENDPOINT, QueryProtocol, RequestDescriptor
from .endpoint import EndpointConfig
from .payload import (
    EMPTY,
    EmptyPayload,
    Payload,
    StructuredPayload,
    TextPayload,
    payload_from_value,
    try_parse_json,
)
from .result import QueryResult, now_ms

__all__ = [
    "DIRECT_ENDPOINT",
    "EMPTY",
    "EmptyPayload",
    "EndpointConfig",
    "Payload",
    "QueryProtocol",
    "QueryResult",
    "RequestDescriptor",
    "StructuredPayload",
    "TextPayload",
    "now_ms",
    "payload_from_value",
    "try_parse_json",
]
