"""Line renderer: turns one parsed record into styled segments.

Layout of an object record::

    <timestamp> <level> <message> key=value key2{a=1 b=2} tags[x y]
      nested{
        inner{
          deep=true
        }
        flat[1 2 3]
      }
      stacktrace=
        line one
        line two

The first line holds the recognized fields followed by every scalar or flat
``remaining`` field in source order. Values with nested structure are
deferred to indented blocks below it, then long-text fields are printed
verbatim, one indented line per line of text.
"""
from __future__ import annotations

import json
from typing import Any, Iterator

from ..classify.fields import ClassifiedFields, Field, FieldClassifier
from ..parsers.base import JsonNumber, LogRecord, RecordKind, ValueKind, is_container, value_kind
from .segments import Role, Segment
from .styles import StylePolicy
from .timestamps import TimestampFormat, format_timestamp

# Width of the level column; shorter levels are padded so messages line up.
LEVEL_WIDTH = 5

DEFAULT_INDENT = 2

_NEWLINE = Segment("\n", Role.PLAIN)
_SPACE = Segment(" ", Role.PLAIN)

_BRACKETS = {ValueKind.OBJECT: ("{", "}"), ValueKind.ARRAY: ("[", "]")}


def is_large(value: Any) -> bool:
    """True for an object or array that holds another object or array."""
    if isinstance(value, dict):
        return any(is_container(v) for v in value.values())
    if isinstance(value, list):
        return any(is_container(v) for v in value)
    return False


def _needs_quotes(text: str) -> bool:
    if not text:
        return True
    return any(c in ' "\\' or c < " " or c == "\x7f" for c in text)


def format_string(text: str) -> str:
    """Quote and escape a string value only when it would be ambiguous bare."""
    if _needs_quotes(text):
        return json.dumps(text, ensure_ascii=False)
    return text


def format_key(key: str) -> str:
    """Quote a key that would otherwise run into its value or the next field."""
    if _needs_quotes(key) or "=" in key:
        return json.dumps(key, ensure_ascii=False)
    return key


def format_scalar(value: Any) -> tuple[str, Role]:
    if isinstance(value, str):
        return format_string(value), Role.STRING
    if isinstance(value, bool):
        return ("true" if value else "false"), Role.BOOL
    if isinstance(value, JsonNumber):
        return value.token, Role.NUMBER
    if value is None:
        return "null", Role.NULL
    raise TypeError(f"not a JSON scalar: {value!r}")


def _children(value: Any) -> Iterator[tuple[str | None, Any]]:
    if isinstance(value, dict):
        yield from value.items()
    else:
        for item in value:
            yield None, item


class Renderer:
    """Render ``LogRecord``s as styled segments.

    Args:
        classifier:       Decides which fields fill the header roles.
        policy:           Style policy used by ``render_text``.
        timestamp_format: How numeric timestamps are displayed.
        indent:           Spaces per nesting level in deferred blocks.
    """

    def __init__(
        self,
        classifier: FieldClassifier | None = None,
        policy: StylePolicy | None = None,
        timestamp_format: TimestampFormat = TimestampFormat.AUTO,
        indent: int = DEFAULT_INDENT,
    ) -> None:
        self.classifier = classifier or FieldClassifier()
        self.policy = policy or StylePolicy.plain()
        self.timestamp_format = timestamp_format
        self.indent = indent

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def render(self, record: LogRecord, fields: ClassifiedFields | None = None) -> list[Segment]:
        if record.kind is RecordKind.MALFORMED:
            return [Segment(record.raw_text, Role.UNRECOGNIZED)]
        if record.kind is RecordKind.OTHER_JSON:
            return [Segment(record.raw_text, Role.for_value(value_kind(record.parsed)))]
        if fields is None:
            fields = self.classifier.classify(record.parsed)
        return self.render_fields(fields)

    def render_text(self, record: LogRecord) -> str:
        """Render a record to a string ready for the terminal, without a trailing newline."""
        return self.policy.render(self.render(record))

    # ------------------------------------------------------------------
    # Object layout
    # ------------------------------------------------------------------

    def render_fields(self, fields: ClassifiedFields) -> list[Segment]:
        items: list[list[Segment]] = []
        level_index = -1
        if fields.timestamp is not None:
            text = format_timestamp(fields.timestamp.value, self.timestamp_format)
            items.append([Segment(text, Role.TIMESTAMP)])
        if fields.level is not None:
            level_index = len(items)
            items.append([Segment(str(fields.level.value), Role.for_severity(fields.level.severity))])
        if fields.message is not None:
            items.append([Segment(str(fields.message.value), Role.MESSAGE)])

        deferred: list[Field] = []
        for field in fields.remaining:
            if is_large(field.value):
                deferred.append(field)
            else:
                items.append(self._inline(field.key, field.value, 0))

        out: list[Segment] = []
        for i, item in enumerate(items):
            if i:
                out.append(_SPACE)
            out.extend(item)
            if i == level_index and i < len(items) - 1:
                self._pad_level(out, item[0].text)

        for field in deferred:
            self._block(out, field.key, field.value)
        for field in fields.long_text:
            self._long_text(out, field.key, field.value)

        if not items and out:
            # No main line: start with the first block instead of a blank line.
            del out[0]
        return out

    def _pad_level(self, out: list[Segment], text: str) -> None:
        if len(text) < LEVEL_WIDTH:
            out.append(Segment(" " * (LEVEL_WIDTH - len(text)), Role.PLAIN))

    def _indent(self, level: int) -> Segment:
        return Segment(" " * (self.indent * level), Role.PLAIN)

    def _key(self, key: str | None, depth: int) -> list[Segment]:
        if key is None:
            return []
        return [Segment(format_key(key), Role.KEY, depth)]

    def _inline(self, key: str | None, value: Any, depth: int) -> list[Segment]:
        """Render a scalar or flat container on a single line."""
        segments = self._key(key, depth)
        if is_container(value):
            opening, closing = _BRACKETS[value_kind(value)]
            segments.append(Segment(opening, Role.BRACKET, depth))
            for i, (child_key, child) in enumerate(_children(value)):
                if i:
                    segments.append(_SPACE)
                segments.extend(self._inline(child_key, child, depth + 1))
            segments.append(Segment(closing, Role.BRACKET, depth))
            return segments
        text, role = format_scalar(value)
        if key is not None:
            segments.append(Segment("=", Role.PUNCTUATION))
        segments.append(Segment(text, role))
        return segments

    def _block(self, out: list[Segment], key: str, value: Any) -> None:
        """Render a nested value as an indented block, one child per line.

        Uses an explicit stack so nesting depth is not limited by Python's
        recursion limit.
        """
        # (key, value, depth, False) opens a value; (None, bracket, depth, True) closes one.
        stack: list[tuple[str | None, Any, int, bool]] = [(key, value, 0, False)]
        while stack:
            entry_key, entry_value, depth, is_close = stack.pop()
            out.append(_NEWLINE)
            out.append(self._indent(depth + 1))
            if is_close:
                out.append(Segment(entry_value, Role.BRACKET, depth))
                continue
            if not is_large(entry_value):
                out.extend(self._inline(entry_key, entry_value, depth))
                continue
            opening, closing = _BRACKETS[value_kind(entry_value)]
            out.extend(self._key(entry_key, depth))
            out.append(Segment(opening, Role.BRACKET, depth))
            stack.append((None, closing, depth, True))
            children = list(_children(entry_value))
            for child_key, child in reversed(children):
                stack.append((child_key, child, depth + 1, False))

    def _long_text(self, out: list[Segment], key: str, value: str) -> None:
        out.append(_NEWLINE)
        out.append(self._indent(1))
        out.extend(self._key(key, 0))
        out.append(Segment("=", Role.PUNCTUATION))
        lines = value.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        for line in lines:
            out.append(_NEWLINE)
            out.append(self._indent(2))
            out.append(Segment(line.rstrip("\r"), Role.LONG_TEXT))
