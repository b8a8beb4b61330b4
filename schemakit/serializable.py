"""Date-only and time-only values that serialise to JSON strings."""

from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass

__all__ = [
    "DateNotJSONStringError",
    "TimeNotJSONStringError",
    "SerializableDate",
    "SerializableTime",
]

_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_TIME_RE = re.compile(r"(\d{2}):(\d{2}):(\d{2})(?:[.,](\d+))?")


class DateNotJSONStringError(ValueError):
    """Raised when a non-string JSON value is decoded as a date."""

    def __init__(self) -> None:
        super().__init__("cannot parse non-string value as a date")


class TimeNotJSONStringError(ValueError):
    """Raised when a non-string JSON value is decoded as a time."""

    def __init__(self) -> None:
        super().__init__("cannot parse non-string value as a time")


def _unquote(data: bytes | str) -> str | None:
    """Return the string inside quotes, or None if the value is not a JSON string."""
    text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    if len(text) < 2 or not (text.startswith('"') and text.endswith('"')):
        return None
    return text[1:-1]


def _is_null(data: bytes | str) -> bool:
    return data in (b"null", "null")


@dataclass(frozen=True)
class SerializableDate:
    """A calendar date written as ``YYYY-MM-DD`` in JSON."""

    value: _dt.date

    def marshal_json(self) -> bytes:
        return ('"' + self.value.strftime("%Y-%m-%d") + '"').encode("utf-8")

    @classmethod
    def unmarshal_json(cls, data: bytes | str) -> SerializableDate | None:
        """Decode a JSON value; ``null`` yields ``None``."""
        if _is_null(data):
            return None
        inner = _unquote(data)
        if inner is None:
            raise DateNotJSONStringError()
        match = _DATE_RE.fullmatch(inner)
        try:
            if match is None:
                raise ValueError(f"cannot parse {inner!r} as YYYY-MM-DD")
            year, month, day = (int(g) for g in match.groups())
            return cls(_dt.date(year, month, day))
        except ValueError as exc:
            raise ValueError(f"unable to parse date from JSON: {exc}") from exc


@dataclass(frozen=True)
class SerializableTime:
    """A time of day written as ``HH:MM:SS`` in JSON."""

    value: _dt.time

    def marshal_json(self) -> bytes:
        return ('"' + self.value.strftime("%H:%M:%S") + '"').encode("utf-8")

    @classmethod
    def unmarshal_json(cls, data: bytes | str) -> SerializableTime | None:
        """Decode a JSON value; ``null`` yields ``None``."""
        if _is_null(data):
            return None
        inner = _unquote(data)
        if inner is None:
            raise TimeNotJSONStringError()
        match = _TIME_RE.fullmatch(inner)
        try:
            if match is None:
                raise ValueError(f"cannot parse {inner!r} as HH:MM:SS")
            hour, minute, second = (int(g) for g in match.groups()[:3])
            fraction = match.group(4) or ""
            microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
            return cls(_dt.time(hour, minute, second, microsecond))
        except ValueError as exc:
            raise ValueError(f"unable to parse time from JSON: {exc}") from exc