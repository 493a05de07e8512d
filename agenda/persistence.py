"""JSON persistence for the schedule store.

Document layout::

    {"schedules": [{"id": 1, "subject": "...", "start": "2025-05-01T10:00:00",
                    "end": "2025-05-01T11:00:00"}]}

``load`` turns a missing file into an empty store and re-validates the store
invariants on everything it reads. ``save`` replaces the whole file
atomically; a failed write leaves the previous file in place.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from core.date_utils import parse_timestamp
from core.textio import read_text, write_text_atomic

from .errors import OverlapError, PersistenceError, ValidationError
from .model import ScheduleEntry
from .store import ScheduleStore

__all__ = ["decode_document", "encode_document", "load", "save"]

LOG = logging.getLogger(__name__)

SCHEDULES_KEY = "schedules"
ENTRY_FIELDS = ("id", "subject", "start", "end")

PathArg = Union[str, Path]


def _decode_entry(raw: Any, index: int) -> ScheduleEntry:
    where = f"{SCHEDULES_KEY}[{index}]"
    if not isinstance(raw, dict):
        raise PersistenceError(f"expected an object, got {type(raw).__name__}", location=where)
    missing = [name for name in ENTRY_FIELDS if name not in raw]
    if missing:
        raise PersistenceError(f"missing field(s): {', '.join(missing)}", location=where)

    entry_id = raw["id"]
    if isinstance(entry_id, bool) or not isinstance(entry_id, int) or entry_id < 1:
        raise PersistenceError(f"id must be a positive integer, got {entry_id!r}", location=f"{where}.id")
    subject = raw["subject"]
    if not isinstance(subject, str) or not subject:
        raise PersistenceError("subject must be a non-empty string", location=f"{where}.subject")

    stamps = {}
    for name in ("start", "end"):
        try:
            stamps[name] = parse_timestamp(raw[name])
        except ValueError as exc:
            raise PersistenceError(str(exc), location=f"{where}.{name}") from exc
    return ScheduleEntry(id=entry_id, subject=subject, start=stamps["start"], end=stamps["end"])


def decode_document(data: Any) -> ScheduleStore:
    """Build a store from a parsed JSON document.

    Raises PersistenceError naming the offending location when the shape,
    a field, or a store invariant (unique ids, no overlaps) is violated.
    """
    if not isinstance(data, dict):
        raise PersistenceError(f"top-level value must be an object, got {type(data).__name__}")
    if SCHEDULES_KEY not in data:
        raise PersistenceError(f"missing '{SCHEDULES_KEY}' key")
    items = data[SCHEDULES_KEY]
    if not isinstance(items, list):
        raise PersistenceError(f"'{SCHEDULES_KEY}' must be a list", location=SCHEDULES_KEY)

    entries = [_decode_entry(raw, i) for i, raw in enumerate(items)]
    try:
        return ScheduleStore(entries)
    except (ValidationError, OverlapError) as exc:
        raise PersistenceError(f"inconsistent schedule: {exc.message}", location=SCHEDULES_KEY) from exc


def encode_document(store: ScheduleStore) -> Dict[str, List[Dict[str, Any]]]:
    return {SCHEDULES_KEY: [entry.to_record() for entry in store.list()]}


def load(source: PathArg) -> ScheduleStore:
    """Read the schedule file at ``source``; a missing file yields an empty store."""
    path = Path(source)
    if not path.exists():
        LOG.info("No schedule file at %s; starting with an empty schedule", path)
        return ScheduleStore()
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistenceError(f"cannot read file: {exc}", path=path) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PersistenceError(f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}", path=path) from exc
    try:
        store = decode_document(data)
    except PersistenceError as exc:
        raise PersistenceError(exc.detail, path=path, location=exc.location) from exc.__cause__
    LOG.debug("Loaded %d entries from %s", len(store), path)
    return store


def save(store: ScheduleStore, destination: PathArg) -> None:
    """Write every entry of ``store`` to ``destination``, replacing it atomically."""
    path = Path(destination)
    try:
        text = json.dumps(encode_document(store), ensure_ascii=False, indent=2) + "\n"
        write_text_atomic(path, text)
    except (OSError, TypeError, ValueError) as exc:
        raise PersistenceError(f"cannot write file: {exc}", path=path) from exc
    LOG.debug("Saved %d entries to %s", len(store), path)
