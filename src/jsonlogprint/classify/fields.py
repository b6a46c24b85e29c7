"""Field classification: pick out timestamp, level and message keys.

Roles are claimed in a fixed order (timestamp, level, message) from ordered
candidate key lists; the first candidate present in the record with a
string or number value wins. Unclaimed string values containing newlines
become long-text fields and everything else stays in ``remaining``.

Every key of the input object ends up in exactly one place::

    >>> fields = FieldClassifier().classify({"msg": "hi", "level": "info", "x": 1})
    >>> fields.message.key, fields.level.severity, [f.key for f in fields.remaining]
    ('msg', <Severity.INFO: 'INFO'>, ['x'])
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple, Sequence

from ..parsers.base import JsonNumber
from .severity import Severity, normalize_level

DEFAULT_TIMESTAMP_KEYS: tuple[str, ...] = ("timestamp", "time", "ts", "@timestamp")
DEFAULT_LEVEL_KEYS: tuple[str, ...] = ("level", "lvl", "severity", "loglevel")
DEFAULT_MESSAGE_KEYS: tuple[str, ...] = ("message", "msg")


class Field(NamedTuple):
    key: str
    value: Any


class LevelField(NamedTuple):
    key: str
    value: Any
    severity: Severity


@dataclass(frozen=True)
class ClassifiedFields:
    timestamp: Field | None = None
    level: LevelField | None = None
    message: Field | None = None
    long_text: tuple[Field, ...] = ()
    remaining: tuple[Field, ...] = ()

    @property
    def has_header(self) -> bool:
        return any(f is not None for f in (self.timestamp, self.level, self.message))

    def keys(self) -> list[str]:
        """All keys in the partition, recognized roles first."""
        keys = [f.key for f in (self.timestamp, self.level, self.message) if f is not None]
        keys.extend(f.key for f in self.long_text)
        keys.extend(f.key for f in self.remaining)
        return keys


def _claimable(value: Any) -> bool:
    return isinstance(value, (str, JsonNumber))


def _is_long_text(value: Any) -> bool:
    return isinstance(value, str) and "\n" in value


class FieldClassifier:
    """Partition a record's keys into semantic roles.

    Args:
        timestamp_keys: Candidate keys for the timestamp, highest priority first.
        level_keys:     Candidate keys for the log level.
        message_keys:   Candidate keys for the primary message.
    """

    def __init__(
        self,
        timestamp_keys: Sequence[str] = DEFAULT_TIMESTAMP_KEYS,
        level_keys: Sequence[str] = DEFAULT_LEVEL_KEYS,
        message_keys: Sequence[str] = DEFAULT_MESSAGE_KEYS,
    ) -> None:
        self.timestamp_keys = tuple(timestamp_keys)
        self.level_keys = tuple(level_keys)
        self.message_keys = tuple(message_keys)

    def _claim(
        self, obj: dict[str, Any], candidates: tuple[str, ...], claimed: set[str]
    ) -> Field | None:
        for key in candidates:
            if key in claimed or key not in obj:
                continue
            value = obj[key]
            if _claimable(value):
                claimed.add(key)
                return Field(key, value)
        return None

    def classify(self, obj: dict[str, Any]) -> ClassifiedFields:
        claimed: set[str] = set()
        timestamp = self._claim(obj, self.timestamp_keys, claimed)
        level_field = self._claim(obj, self.level_keys, claimed)
        message = self._claim(obj, self.message_keys, claimed)

        level = None
        if level_field is not None:
            level = LevelField(level_field.key, level_field.value, normalize_level(level_field.value))

        long_text: list[Field] = []
        remaining: list[Field] = []
        for key, value in obj.items():
            if key in claimed:
                continue
            if _is_long_text(value):
                long_text.append(Field(key, value))
            else:
                remaining.append(Field(key, value))

        return ClassifiedFields(
            timestamp=timestamp,
            level=level,
            message=message,
            long_text=tuple(long_text),
            remaining=tuple(remaining),
        )
