"""Epoch-number timestamp formatting.

String timestamps are printed as they are. Numeric ones are read as seconds
or milliseconds since the Unix epoch and shown as UTC ISO-8601.
"""
from __future__ import annotations

import enum
from datetime import datetime, timedelta, timezone
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any

from ..parsers.base import JsonNumber

# Seconds between 1970 and the year 3000. Larger numbers are milliseconds.
YEAR_3K_EPOCH = 32503698000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TimestampFormat(str, enum.Enum):
    AUTO = "auto"
    SECONDS = "seconds"
    MILLIS = "millis"
    RAW = "raw"


# datetime.max is 9999-12-31; anything past it cannot be shown as a date.
_MAX_MILLIS = 253402300800000


def _to_millis(number: Decimal, unit: TimestampFormat) -> int:
    if unit is TimestampFormat.SECONDS:
        number = number * 1000
    if number.copy_abs() > _MAX_MILLIS:
        raise OverflowError("timestamp out of range")
    return int(number.to_integral_value(rounding=ROUND_FLOOR))


def format_timestamp(value: Any, fmt: TimestampFormat = TimestampFormat.AUTO) -> str:
    """Return the display text of a timestamp field value."""
    if not isinstance(value, JsonNumber):
        return str(value)
    if fmt is TimestampFormat.RAW:
        return value.token
    try:
        number = Decimal(value.token)
    except InvalidOperation:
        return value.token

    unit = fmt
    if fmt is TimestampFormat.AUTO:
        unit = TimestampFormat.MILLIS if number.copy_abs() > YEAR_3K_EPOCH else TimestampFormat.SECONDS

    try:
        millis = _to_millis(number, unit)
        dt = _EPOCH + timedelta(milliseconds=millis)
    except (ArithmeticError, ValueError):
        return value.token

    if unit is TimestampFormat.SECONDS and millis % 1000 == 0:
        return dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return f"{dt:%Y-%m-%dT%H:%M:%S}.{dt.microsecond // 1000:03d}Z"
