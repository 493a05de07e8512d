"""Agenda pipeline components.

One request/processor/producer triple per command. Processors own the
load → mutate → save sequence; a save only happens after the store
operation succeeded, so a rejected command never touches the file.
"""
from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from core.cli_output import OutputFormat, OutputWriter
from core.constants import FMT_DISPLAY
from core.date_utils import format_display, parse_timestamp
from core.patterns import RE_ENTRY_ID
from core.pipeline import BaseProducer, SafeProcessor

from . import persistence
from .errors import ValidationError
from .model import ScheduleEntry
from .store import ScheduleStore

Loader = Callable[[Path], ScheduleStore]
Saver = Callable[[ScheduleStore, Path], None]

LIST_HEADERS = ["ID", "START", "END", "SUBJECT"]

_ENTRY_ID = re.compile(RE_ENTRY_ID)


def parse_entry_id(value: Union[str, int]) -> int:
    """Parse a positive entry id from CLI text; ValidationError otherwise."""
    if isinstance(value, bool):
        raise ValidationError(f"invalid id {value!r}; expected a positive integer")
    if isinstance(value, int):
        entry_id = value
    else:
        m = _ENTRY_ID.match(str(value))
        if not m:
            raise ValidationError(f"invalid id {value!r}; expected a positive integer")
        entry_id = int(m.group(1))
    if entry_id < 1:
        raise ValidationError(f"invalid id {value!r}; ids start at 1")
    return entry_id


def parse_cli_timestamp(value: str, name: str) -> _dt.datetime:
    try:
        return parse_timestamp(value)
    except ValueError as exc:
        raise ValidationError(f"{name}: {exc}", hint="Example: 2025-05-01T10:00:00") from exc


# -----------------------------------------------------------------------------
# list
# -----------------------------------------------------------------------------


@dataclass
class ListRequest:
    path: Path


@dataclass
class ListResult:
    entries: Tuple[ScheduleEntry, ...]
    path: Path


class ListProcessor(SafeProcessor[ListRequest, ListResult]):
    """Read the schedule; never writes."""

    def __init__(self, loader: Loader = persistence.load) -> None:
        self._loader = loader

    def _process_safe(self, payload: ListRequest) -> ListResult:
        store = self._loader(payload.path)
        return ListResult(entries=store.list(), path=payload.path)


class ListProducer(BaseProducer):
    def __init__(self, writer: Optional[OutputWriter] = None, display_format: str = FMT_DISPLAY) -> None:
        self.writer = writer or OutputWriter()
        self.display_format = display_format

    def _produce_success(self, payload: ListResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        fmt = self.writer.config.format
        if fmt in (OutputFormat.JSON, OutputFormat.YAML):
            self.writer.print_data([e.to_record() for e in payload.entries])
            return
        rows = [
            [str(e.id), format_display(e.start, self.display_format), format_display(e.end, self.display_format), e.subject]
            for e in payload.entries
        ]
        if fmt == OutputFormat.TABLE:
            self.writer.print_data(rows, headers=LIST_HEADERS)
            return
        self.writer.print("\t".join(LIST_HEADERS))
        for row in rows:
            self.writer.print("\t".join(row))


# -----------------------------------------------------------------------------
# add
# -----------------------------------------------------------------------------


@dataclass
class AddRequest:
    subject: str
    start: str
    end: str
    path: Path


@dataclass
class AddResult:
    entry: ScheduleEntry
    path: Path


class AddProcessor(SafeProcessor[AddRequest, AddResult]):
    """Load, add one entry, save. ValidationError/OverlapError skip the save."""

    def __init__(self, loader: Loader = persistence.load, saver: Saver = persistence.save) -> None:
        self._loader = loader
        self._saver = saver

    def _process_safe(self, payload: AddRequest) -> AddResult:
        start = parse_cli_timestamp(payload.start, "start")
        end = parse_cli_timestamp(payload.end, "end")
        store = self._loader(payload.path)
        entry = store.add(payload.subject, start, end)
        self._saver(store, payload.path)
        return AddResult(entry=entry, path=payload.path)


class AddProducer(BaseProducer):
    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self.writer = writer or OutputWriter()

    def _produce_success(self, payload: AddResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if self.writer.config.format in (OutputFormat.JSON, OutputFormat.YAML):
            self.writer.print_data({"added": payload.entry.to_record()})
            return
        self.writer.print_success(f"Added entry {payload.entry.describe()} to {payload.path}")


# -----------------------------------------------------------------------------
# delete
# -----------------------------------------------------------------------------


@dataclass
class DeleteRequest:
    entry_id: Union[str, int]
    path: Path


@dataclass
class DeleteResult:
    entry: ScheduleEntry
    path: Path


class DeleteProcessor(SafeProcessor[DeleteRequest, DeleteResult]):
    """Load, delete one entry, save. NotFoundError skips the save."""

    def __init__(self, loader: Loader = persistence.load, saver: Saver = persistence.save) -> None:
        self._loader = loader
        self._saver = saver

    def _process_safe(self, payload: DeleteRequest) -> DeleteResult:
        entry_id = parse_entry_id(payload.entry_id)
        store = self._loader(payload.path)
        entry = store.delete(entry_id)
        self._saver(store, payload.path)
        return DeleteResult(entry=entry, path=payload.path)


class DeleteProducer(BaseProducer):
    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self.writer = writer or OutputWriter()

    def _produce_success(self, payload: DeleteResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if self.writer.config.format in (OutputFormat.JSON, OutputFormat.YAML):
            self.writer.print_data({"deleted": payload.entry.to_record()})
            return
        self.writer.print_success(f"Deleted entry {payload.entry.describe()} from {payload.path}")
