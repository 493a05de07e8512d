"""Shared test fixtures and utilities.

Common fakes, stubs, and helpers for the agenda test suite.
"""

from __future__ import annotations

import datetime as dt
import io
import json
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from agenda.model import ScheduleEntry
from agenda.store import ScheduleStore

REPO_ROOT = Path(__file__).resolve().parents[1]


# -----------------------------------------------------------------------------
# Path helpers
# -----------------------------------------------------------------------------


def repo_root() -> Path:
    return REPO_ROOT


# -----------------------------------------------------------------------------
# Schedule helpers
# -----------------------------------------------------------------------------


def at(day: int, hour: int, minute: int = 0, second: int = 0, month: int = 5, year: int = 2025) -> dt.datetime:
    """Shorthand for naive datetimes in the tests' reference month (May 2025)."""
    return dt.datetime(year, month, day, hour, minute, second)


def entry(entry_id: int, start: dt.datetime, end: dt.datetime, subject: Optional[str] = None) -> ScheduleEntry:
    return ScheduleEntry(id=entry_id, subject=subject or f"Entry {entry_id}", start=start, end=end)


def record(entry_id: int, start: str, end: str, subject: Optional[str] = None) -> Dict[str, Any]:
    """Durable JSON record for one entry."""
    return {"id": entry_id, "subject": subject or f"Entry {entry_id}", "start": start, "end": end}


def write_schedule_file(path: Path, records: List[Dict[str, Any]]) -> Path:
    path.write_text(json.dumps({"schedules": records}, ensure_ascii=False), encoding="utf-8")
    return path


def read_schedule_file(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


@dataclass
class MemoryBackend:
    """In-memory stand-in for persistence.load/save.

    Example usage:
        backend = MemoryBackend(entries=[entry(1, at(1, 10), at(1, 11))])
        env = AddProcessor(loader=backend.load, saver=backend.save).process(request)
        self.assertEqual(len(backend.saved), 1)
    """

    entries: List[ScheduleEntry] = field(default_factory=list)
    saved: List[List[ScheduleEntry]] = field(default_factory=list)
    loaded_paths: List[Path] = field(default_factory=list)

    def load(self, path: Path) -> ScheduleStore:
        self.loaded_paths.append(path)
        return ScheduleStore(self.entries)

    def save(self, store: ScheduleStore, path: Path) -> None:
        self.saved.append(list(store.list()))
        self.entries = list(store.list())


@dataclass
class CaptureProducer:
    """Producer that records envelopes instead of printing them."""

    sink: List[Any] = field(default_factory=list)

    def produce(self, result: Any) -> None:
        self.sink.append(result)


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


@contextmanager
def capture_output():
    """Capture stdout and stderr; yields (out, err) StringIO buffers."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        yield out, err
