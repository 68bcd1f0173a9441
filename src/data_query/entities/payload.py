"""Payload domain entity.

Request bodies and GraphQL variables can be absent, a raw string, or a
structured JSON value. Executors branch on the variant rather than on the
Python type of the value.
"""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EmptyPayload:
    """No payload was supplied."""

    def to_value(self) -> None:
        return None


@dataclass(frozen=True)
class TextPayload:
    """A raw string payload, sent as-is."""

    text: str

    def to_value(self) -> str:
        return self.text


@dataclass(frozen=True)
class StructuredPayload:
    """A JSON-compatible value (dict, list, number, bool)."""

    value: Any

    def to_value(self) -> Any:
        return self.value

    def to_json(self) -> str:
        return json.dumps(self.value)


Payload = EmptyPayload | TextPayload | StructuredPayload

EMPTY = EmptyPayload()


def payload_from_value(value: Any) -> Payload:
    """Wrap a plain Python value in the matching payload variant.

    Args:
        value: None, a string, or any JSON-compatible value

    Returns:
        EmptyPayload, TextPayload or StructuredPayload
    """
    if value is None:
        return EMPTY
    if isinstance(value, str):
        return TextPayload(value)
    return StructuredPayload(value)


def try_parse_json(text: str) -> tuple[bool, Any]:
    """Attempt to decode text as JSON.

    Returns:
        (True, decoded value) on success, (False, None) otherwise
    """
    try:
        return True, json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return False, None
