"""Text rendering of query results.

Produces the strings a host shows for a result: the data itself, the
"Last updated" line, and the markdown snippet written when a result is
saved into a note.
"""

import json
from datetime import datetime
from typing import Any

from data_query.entities import QueryResult, try_parse_json

NO_DATA_TEXT = "No data returned"


def format_data(data: Any) -> str:
    """Render result data for display.

    Strings are returned as is and None becomes a placeholder. Everything
    else is JSON: dicts and lists with 2-space indent, scalars like
    ``true`` or ``1.5`` in their JSON spelling.
    """
    if data is None:
        return NO_DATA_TEXT
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def format_timestamp(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def format_result(result: QueryResult) -> str:
    """Render a whole result: the error text, or the formatted data."""
    if result.is_error:
        return result.error or NO_DATA_TEXT
    return format_data(result.data)


def format_for_note(result: QueryResult, saved_at: datetime | None = None) -> str:
    """Build the markdown snippet that replaces a query block in a note.

    JSON text is wrapped in a fenced json block; anything else is inserted
    verbatim. A comment records when the snapshot was taken.
    """
    text = format_data(result.data)
    ok, _ = try_parse_json(text)
    body = f"```json\n{text}\n```" if ok else text

    saved_at = saved_at or datetime.now()
    return f"<!-- Data saved on {saved_at.strftime('%Y-%m-%d %H:%M:%S')} -->\n{body}"
