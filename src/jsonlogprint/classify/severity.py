"""Log level normalization onto a closed set of severities."""
from __future__ import annotations

import enum
from typing import Any


class Severity(str, enum.Enum):
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"
    UNKNOWN = "UNKNOWN"


# Spellings that are neither a canonical name nor a prefix of one.
_ALIASES: dict[str, Severity] = {
    "t": Severity.TRACE,
    "trc": Severity.TRACE,
    "trce": Severity.TRACE,
    "d": Severity.DEBUG,
    "dbg": Severity.DEBUG,
    "debg": Severity.DEBUG,
    "i": Severity.INFO,
    "notice": Severity.INFO,
    "w": Severity.WARN,
    "wrn": Severity.WARN,
    "e": Severity.ERROR,
    "err": Severity.ERROR,
    "eror": Severity.ERROR,
    "f": Severity.FATAL,
    "ftl": Severity.FATAL,
    "crit": Severity.FATAL,
    "critical": Severity.FATAL,
    "panic": Severity.FATAL,
    "emerg": Severity.FATAL,
    "emergency": Severity.FATAL,
    "alert": Severity.FATAL,
}

_CANONICAL = (
    Severity.TRACE,
    Severity.DEBUG,
    Severity.INFO,
    Severity.WARN,
    Severity.ERROR,
    Severity.FATAL,
)

_MIN_PREFIX = 3


def normalize_level(value: Any) -> Severity:
    """Map a level field value to a ``Severity``.

    Case-insensitive. Accepts the canonical names, the aliases above, any
    word starting with a canonical name (``warning``, ``information``) and
    any prefix of a canonical name that is at least three characters long
    (``erro``, ``inf``). Non-string values and everything else resolve to
    ``Severity.UNKNOWN``.
    """
    if not isinstance(value, str):
        return Severity.UNKNOWN
    token = value.strip().lower()
    if not token:
        return Severity.UNKNOWN
    alias = _ALIASES.get(token)
    if alias is not None:
        return alias
    for severity in _CANONICAL:
        name = severity.value.lower()
        if token.startswith(name):
            return severity
        if len(token) >= _MIN_PREFIX and name.startswith(token):
            return severity
    return Severity.UNKNOWN
