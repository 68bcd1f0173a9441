"""Tests for result rendering."""

from datetime import datetime

from data_query.entities import QueryResult
from data_query.rendering import format_data, format_for_note, format_result

SAVED_AT = datetime(2026, 1, 2, 3, 4, 5)


def test_format_data_variants():
    assert format_data({"a": [1, 2]}) == '{\n  "a": [\n    1,\n    2\n  ]\n}'
    assert format_data(None) == "No data returned"
    assert format_data("plain") == "plain"
    assert format_data(42) == "42"
    assert format_data(True) == "true"
    assert format_data(1.0) == "1.0"
    assert format_data(False) == "false"


def test_format_result_prefers_error():
    assert format_result(QueryResult.failure("boom")) == "boom"
    assert format_result(QueryResult.success({"a": 1})) == '{\n  "a": 1\n}'


def test_note_snapshot_wraps_json_in_fence():
    snippet = format_for_note(QueryResult.success({"a": 1}), saved_at=SAVED_AT)

    assert snippet.startswith("<!-- Data saved on 2026-01-02 03:04:05 -->\n")
    assert snippet.endswith('```json\n{\n  "a": 1\n}\n```')


def test_note_snapshot_keeps_plain_text():
    snippet = format_for_note(QueryResult.success("hello world"), saved_at=SAVED_AT)
    assert snippet == "<!-- Data saved on 2026-01-02 03:04:05 -->\nhello world"


def test_note_snapshot_fences_json_scalars():
    snippet = format_for_note(QueryResult.success(True), saved_at=SAVED_AT)
    assert snippet == "<!-- Data saved on 2026-01-02 03:04:05 -->\n```json\ntrue\n```"
