"""Record types shared by the parser, classifier and renderer."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class JsonNumber:
    """A JSON number kept as its source token.

    Numbers are only ever displayed, so the token is never turned into an
    ``int`` or ``float``: ``1729811012050``, ``0.10`` and ``1e400`` print
    exactly as they were written.
    """

    token: str

    def __str__(self) -> str:
        return self.token


class RecordKind(enum.Enum):
    OBJECT = "object"
    OTHER_JSON = "other_json"
    MALFORMED = "malformed"


class ValueKind(enum.Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


def value_kind(value: Any) -> ValueKind:
    """Return the JSON kind of a decoded value."""
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, JsonNumber):
        return ValueKind.NUMBER
    if value is None:
        return ValueKind.NULL
    raise TypeError(f"not a decoded JSON value: {value!r}")


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


@dataclass(frozen=True)
class LogRecord:
    """One input line and what the parser made of it.

    ``parsed`` is ``None`` for malformed lines, but ``None`` is also the
    decoded form of a bare JSON ``null``; check ``kind`` to tell them apart.
    """

    raw_text: str
    kind: RecordKind
    parsed: Any = None

    @property
    def is_object(self) -> bool:
        return self.kind is RecordKind.OBJECT
