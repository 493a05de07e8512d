"""Shared date and time utilities.

Strict parsing and formatting of the local, offset-free timestamps used on
the command line and in the schedule file.
"""
from __future__ import annotations

import datetime as _dt
import re
from typing import Any

from .constants import FMT_DISPLAY, FMT_TIMESTAMP
from .patterns import RE_TIMESTAMP

__all__ = [
    "format_display",
    "format_timestamp",
    "parse_timestamp",
]

_TIMESTAMP = re.compile(RE_TIMESTAMP)


def parse_timestamp(value: Any) -> _dt.datetime:
    """Parse ``YYYY-MM-DDTHH:MM:SS`` into a naive datetime.

    Anything else (dates only, minutes precision, fractional seconds, UTC
    offsets, a trailing ``Z``, surrounding whitespace, non-ASCII digits)
    raises ValueError instead of being coerced.

    Examples:
        '2025-05-01T10:00:00' -> datetime(2025, 5, 1, 10, 0)
        '2025-05-01T10:00'    -> ValueError
    """
    if not isinstance(value, str):
        raise ValueError(f"expected a timestamp string, got {type(value).__name__}")
    if not _TIMESTAMP.match(value):
        raise ValueError(f"invalid timestamp {value!r}; expected YYYY-MM-DDTHH:MM:SS")
    try:
        return _dt.datetime.strptime(value, FMT_TIMESTAMP)
    except ValueError as exc:
        # Well-formed but impossible, e.g. 2025-02-30T10:00:00
        raise ValueError(f"invalid timestamp {value!r}: {exc}") from exc


def format_timestamp(value: _dt.datetime) -> str:
    """Format a datetime in the durable seconds-precision form.

    The year is zero-padded by hand: strftime("%Y") does not pad years
    below 1000 on every platform, and the result must parse back.
    """
    return f"{value.year:04d}-{value:%m-%d}T{value:%H:%M:%S}"


def format_display(value: _dt.datetime, fmt: str = FMT_DISPLAY) -> str:
    """Format a datetime for human listing (minutes precision by default)."""
    return value.strftime(fmt)
