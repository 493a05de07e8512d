"""In-memory schedule store.

Holds the entries of one schedule file in insertion order and enforces the
two invariants every mutation must keep:

- no two entries overlap under the half-open ``[start, end)`` test;
- ids are unique.

Ids are assigned as ``max(existing) + 1`` (1 for an empty store). The counter
only moves forward for the lifetime of a store instance, so deleting the
newest entry and adding again does not hand its id back out. A fresh load
recomputes the counter from file contents.
"""
from __future__ import annotations

import datetime as _dt
import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .errors import NotFoundError, OverlapError, ValidationError
from .model import ScheduleEntry

LOG = logging.getLogger(__name__)


def _check_subject(subject: object) -> str:
    if not isinstance(subject, str) or not subject:
        raise ValidationError("subject must be a non-empty string")
    return subject


def _check_interval(start: object, end: object) -> None:
    if not isinstance(start, _dt.datetime) or not isinstance(end, _dt.datetime):
        raise ValidationError("start and end must be datetimes")
    if start >= end:
        raise ValidationError(
            f"start ({start.isoformat()}) must be before end ({end.isoformat()})",
            hint="Zero-length and inverted intervals are not allowed.",
        )


class ScheduleStore:
    def __init__(self, entries: Iterable[ScheduleEntry] = ()) -> None:
        self._entries: Dict[int, ScheduleEntry] = {}
        for entry in entries:
            self._insert_existing(entry)
        self._next_id = max(self._entries, default=0) + 1

    def _insert_existing(self, entry: ScheduleEntry) -> None:
        if isinstance(entry.id, bool) or not isinstance(entry.id, int) or entry.id < 1:
            raise ValidationError(f"entry id must be a positive integer, got {entry.id!r}")
        if entry.id in self._entries:
            raise ValidationError(f"duplicate entry id {entry.id}")
        _check_subject(entry.subject)
        _check_interval(entry.start, entry.end)
        conflict = self.find_conflict(entry.start, entry.end)
        if conflict is not None:
            raise OverlapError(conflict, f"entry #{entry.id} overlaps entry {conflict.describe()}")
        self._entries[entry.id] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return iter(self.list())

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    @property
    def next_id(self) -> int:
        return self._next_id

    def list(self) -> Tuple[ScheduleEntry, ...]:
        return tuple(self._entries.values())

    def get(self, entry_id: int) -> ScheduleEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            raise NotFoundError(entry_id) from None

    def find_conflict(self, start: _dt.datetime, end: _dt.datetime) -> Optional[ScheduleEntry]:
        """Return the first entry (in list order) overlapping ``[start, end)``."""
        for entry in self._entries.values():
            if entry.overlaps_interval(start, end):
                return entry
        return None

    def add(self, subject: str, start: _dt.datetime, end: _dt.datetime) -> ScheduleEntry:
        """Append a new entry and return it.

        Raises ValidationError for an empty subject or ``start >= end`` and
        OverlapError naming the first conflicting entry. Nothing changes on
        failure.
        """
        _check_subject(subject)
        _check_interval(start, end)
        conflict = self.find_conflict(start, end)
        if conflict is not None:
            LOG.debug("Rejected %r [%s, %s): overlaps #%d", subject, start, end, conflict.id)
            raise OverlapError(conflict)
        entry = ScheduleEntry(id=self._next_id, subject=subject, start=start, end=end)
        self._entries[entry.id] = entry
        self._next_id += 1
        LOG.debug("Added %s", entry.describe())
        return entry

    def delete(self, entry_id: int) -> ScheduleEntry:
        """Remove and return the entry with ``entry_id``; NotFoundError if absent."""
        entry = self._entries.pop(entry_id, None)
        if entry is None:
            raise NotFoundError(entry_id)
        LOG.debug("Deleted %s", entry.describe())
        return entry
