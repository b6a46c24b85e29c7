"""JSON record parser — streaming, line-by-line, handles NDJSON.

Every line yields exactly one ``LogRecord``. Lines that are not JSON are
expected in real log streams (start-up banners, panics, interleaved stderr),
so a failed parse is a classification, not an error.
"""
from __future__ import annotations

import json
import logging
from typing import Iterable, Iterator

from .base import JsonNumber, LogRecord, RecordKind

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> None:
    raise ValueError(f"non-standard JSON constant {name!r}")


# Numbers stay as source tokens; NaN/Infinity are not JSON.
_DECODER = json.JSONDecoder(
    parse_int=JsonNumber,
    parse_float=JsonNumber,
    parse_constant=_reject_constant,
)


def strip_line_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


class RecordParser:
    """Parse newline-delimited JSON (NDJSON) log lines into ``LogRecord``s."""

    def parse_line(self, line: str) -> LogRecord:
        """Parse a single line. Never raises for bad content."""
        raw = strip_line_terminator(line)
        if not raw.strip():
            return LogRecord(raw_text=raw, kind=RecordKind.MALFORMED)
        try:
            value = _DECODER.decode(raw)
        except (ValueError, RecursionError) as exc:
            logger.debug("Failed to parse line as JSON: %s", exc)
            return LogRecord(raw_text=raw, kind=RecordKind.MALFORMED)
        if isinstance(value, dict):
            return LogRecord(raw_text=raw, kind=RecordKind.OBJECT, parsed=value)
        return LogRecord(raw_text=raw, kind=RecordKind.OTHER_JSON, parsed=value)

    def parse_stream(self, lines: Iterable[str]) -> Iterator[LogRecord]:
        """Stream-parse lines. Memory usage: O(1), one line at a time."""
        for line in lines:
            yield self.parse_line(line)
