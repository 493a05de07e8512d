"""Schedule entry value type and the interval overlap rule."""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Any, Dict

from core.date_utils import format_timestamp


def intervals_overlap(s1: _dt.datetime, e1: _dt.datetime, s2: _dt.datetime, e2: _dt.datetime) -> bool:
    """Half-open test: [s1, e1) and [s2, e2) share at least one instant.

    Intervals that only touch (e1 == s2) do not overlap.
    """
    return s1 < e2 and s2 < e1


@dataclass(frozen=True)
class ScheduleEntry:
    id: int
    subject: str
    start: _dt.datetime
    end: _dt.datetime

    def overlaps(self, other: "ScheduleEntry") -> bool:
        return intervals_overlap(self.start, self.end, other.start, other.end)

    def overlaps_interval(self, start: _dt.datetime, end: _dt.datetime) -> bool:
        return intervals_overlap(self.start, self.end, start, end)

    def describe(self) -> str:
        """Short human form used in error messages: ``#1 '会議' [start, end)``."""
        return f"#{self.id} {self.subject!r} [{format_timestamp(self.start)}, {format_timestamp(self.end)})"

    def to_record(self) -> Dict[str, Any]:
        """Durable field layout (id, subject, start, end) with string timestamps."""
        return {
            "id": self.id,
            "subject": self.subject,
            "start": format_timestamp(self.start),
            "end": format_timestamp(self.end),
        }
