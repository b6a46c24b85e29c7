"""Tests for numeric timestamp formatting."""
from __future__ import annotations

import pytest

from jsonlogprint.parsers.base import JsonNumber
from jsonlogprint.render.timestamps import TimestampFormat, format_timestamp


@pytest.mark.parametrize("token,fmt,expected", [
    ("1627494000", TimestampFormat.AUTO, "2021-07-28T17:40:00Z"),
    ("1729811012050", TimestampFormat.AUTO, "2024-10-24T23:03:32.050Z"),
    ("1627494000", TimestampFormat.SECONDS, "2021-07-28T17:40:00Z"),
    ("1627494000", TimestampFormat.MILLIS, "1970-01-19T20:04:54.000Z"),
    ("1729811012050", TimestampFormat.MILLIS, "2024-10-24T23:03:32.050Z"),
    ("1627494000.25", TimestampFormat.AUTO, "2021-07-28T17:40:00.250Z"),
    ("0", TimestampFormat.AUTO, "1970-01-01T00:00:00Z"),
    ("1729811012050", TimestampFormat.RAW, "1729811012050"),
])
def test_numeric_timestamps(token: str, fmt: TimestampFormat, expected: str) -> None:
    assert format_timestamp(JsonNumber(token), fmt) == expected


@pytest.mark.parametrize("token", ["1e400", "1e1000000", "-1e1000000", "99999999999999999999999", "-99999999999999"])
@pytest.mark.parametrize("fmt", [TimestampFormat.AUTO, TimestampFormat.SECONDS, TimestampFormat.MILLIS])
def test_out_of_range_prints_token(token: str, fmt: TimestampFormat) -> None:
    assert format_timestamp(JsonNumber(token), fmt) == token


def test_string_timestamp_unchanged() -> None:
    assert format_timestamp("2025-08-01T10:00:00Z") == "2025-08-01T10:00:00Z"
