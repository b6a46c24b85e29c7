"""Styled text segments produced by the renderer."""
from __future__ import annotations

import enum
from typing import NamedTuple

from ..classify.severity import Severity
from ..parsers.base import ValueKind


class Role(enum.Enum):
    TIMESTAMP = "timestamp"
    LEVEL_TRACE = "level.trace"
    LEVEL_DEBUG = "level.debug"
    LEVEL_INFO = "level.info"
    LEVEL_WARN = "level.warn"
    LEVEL_ERROR = "level.error"
    LEVEL_FATAL = "level.fatal"
    LEVEL_UNKNOWN = "level.unknown"
    MESSAGE = "message"
    KEY = "key"
    BRACKET = "bracket"
    PUNCTUATION = "punctuation"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"
    LONG_TEXT = "long_text"
    UNRECOGNIZED = "unrecognized"
    PLAIN = "plain"

    @classmethod
    def for_severity(cls, severity: Severity) -> Role:
        return _SEVERITY_ROLES[severity]

    @classmethod
    def for_value(cls, kind: ValueKind) -> Role:
        return _VALUE_ROLES.get(kind, cls.PLAIN)


_SEVERITY_ROLES = {
    Severity.TRACE: Role.LEVEL_TRACE,
    Severity.DEBUG: Role.LEVEL_DEBUG,
    Severity.INFO: Role.LEVEL_INFO,
    Severity.WARN: Role.LEVEL_WARN,
    Severity.ERROR: Role.LEVEL_ERROR,
    Severity.FATAL: Role.LEVEL_FATAL,
    Severity.UNKNOWN: Role.LEVEL_UNKNOWN,
}

_VALUE_ROLES = {
    ValueKind.STRING: Role.STRING,
    ValueKind.NUMBER: Role.NUMBER,
    ValueKind.BOOL: Role.BOOL,
    ValueKind.NULL: Role.NULL,
}


class Segment(NamedTuple):
    """A span of text tagged with the role that decides its style.

    ``depth`` is the nesting level for keys and brackets; other roles ignore it.
    """

    text: str
    role: Role
    depth: int = 0


def plain_text(segments: list[Segment]) -> str:
    """Concatenate segment text with no styling."""
    return "".join(s.text for s in segments)
