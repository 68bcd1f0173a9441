"""Query parser.

Turns the body of a ``data-query`` block into a RequestDescriptor.

Two dialects are accepted:

Reference mode, a named endpoint followed by ``key: value`` overrides::

    @weather
    body: {"city": "Tokyo"}

Direct mode, one JSON object describing the whole request::

    {"type": "graphql", "url": "https://x/gql", "query": "{a}"}

A ``query:`` line in reference mode absorbs the following lines that
contain no colon, so multi-line GraphQL documents can be written inline.
"""

from collections.abc import Sequence
from typing import Any

from data_query.entities import (
    DIRECT_ENDPOINT,
    EMPTY,
    EndpointConfig,
    Payload,
    RequestDescriptor,
    payload_from_value,
    try_parse_json,
)
from data_query.errors import ParseError

REFERENCE_MARKER = "@"


def parse_query(source: str, endpoints: Sequence[EndpointConfig]) -> RequestDescriptor:
    """Parse query block source into a descriptor.

    Args:
        source: Raw block text
        endpoints: Configured endpoint presets (never mutated)

    Returns:
        The normalized RequestDescriptor

    Raises:
        ParseError: If the source is malformed, references an unknown alias
            or lacks a required field
    """
    text = source.strip()
    if text.startswith(REFERENCE_MARKER):
        return _parse_reference(text, endpoints)
    return _parse_direct(text)


def find_endpoint(alias: str, endpoints: Sequence[EndpointConfig]) -> EndpointConfig | None:
    for endpoint in endpoints:
        if endpoint.alias == alias:
            return endpoint
    return None


def _parse_body(value: str) -> Payload:
    ok, decoded = try_parse_json(value)
    if ok:
        return payload_from_value(decoded)
    return payload_from_value(value)


def _split_pair(line: str) -> tuple[str, str]:
    key, _, value = line.partition(":")
    return key.strip(), value.strip()


def _parse_reference(text: str, endpoints: Sequence[EndpointConfig]) -> RequestDescriptor:
    lines = text.split("\n")
    alias = lines[0].strip()[len(REFERENCE_MARKER):].strip()

    endpoint = find_endpoint(alias, endpoints)
    if endpoint is None:
        raise ParseError(f'Endpoint alias "{alias}" not found: alias not found in settings')

    url = endpoint.url
    method: str | None = endpoint.method
    headers = dict(endpoint.headers)
    body: Payload = _parse_body(endpoint.body) if endpoint.body is not None else EMPTY
    query = endpoint.query
    variables: Payload = EMPTY

    i = 1
    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if not line or ":" not in line:
            continue

        key, value = _split_pair(line)

        if key == "query":
            # Continuation: keep absorbing until a line that looks like a new key
            while i < len(lines):
                next_line = lines[i].strip()
                if ":" in next_line:
                    break
                if next_line:
                    value += "\n" + next_line
                i += 1
            query = value
        elif key == "body":
            body = _parse_body(value)
        elif key == "variables":
            ok, decoded = try_parse_json(value)
            if not ok:
                raise ParseError("variables must be valid JSON")
            variables = payload_from_value(decoded)
        elif key == "headers":
            ok, decoded = try_parse_json(value)
            if not ok or not isinstance(decoded, dict):
                raise ParseError("headers must be a JSON object")
            headers.update({str(k): str(v) for k, v in decoded.items()})
        elif key == "method":
            method = value or method
        elif key == "url":
            url = value or url

    return RequestDescriptor(
        url=url,
        protocol=endpoint.protocol,
        endpoint_ref=alias,
        method=method,
        headers=headers,
        body=body,
        query=query,
        variables=variables,
    )


def _parse_direct(text: str) -> RequestDescriptor:
    ok, payload = try_parse_json(text)
    if not ok:
        raise ParseError("Invalid query format: source is neither an @alias reference nor valid JSON")
    if not isinstance(payload, dict):
        raise ParseError("Invalid query format: expected a JSON object")

    protocol = payload.get("type") or payload.get("protocol")
    if not protocol:
        raise ParseError("Invalid query format: query type is required")
    if not payload.get("url"):
        raise ParseError("Invalid query format: URL is required")

    headers = payload.get("headers")
    if headers is None:
        headers = {}
    if not isinstance(headers, dict):
        raise ParseError("Invalid query format: headers must be a JSON object")

    return RequestDescriptor(
        url=str(payload["url"]),
        protocol=str(protocol),
        endpoint_ref=DIRECT_ENDPOINT,
        method=_optional_str(payload.get("method")),
        headers={str(k): str(v) for k, v in headers.items()},
        body=payload_from_value(payload.get("body")),
        query=_optional_str(payload.get("query")),
        variables=payload_from_value(payload.get("variables")),
    )


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
