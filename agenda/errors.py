"""Error kinds raised by the schedule store and its persistence adapter.

Each kind is a ``CLIError`` carrying its own exit code so the CLI layer can
report it without translating.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from core.cli_errors import CLIError, ExitCode

if TYPE_CHECKING:  # pragma: no cover
    from .model import ScheduleEntry


class ScheduleError(CLIError):
    """Base class for schedule errors."""

    def __init__(self, message: str, code: ExitCode = ExitCode.ERROR, hint: Optional[str] = None):
        super().__init__(message, code, hint)


class ValidationError(ScheduleError):
    """Malformed input: empty subject, inverted interval, bad timestamp or id."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.USAGE, hint)


class OverlapError(ScheduleError):
    """The requested interval overlaps an existing entry."""

    def __init__(self, conflict: "ScheduleEntry", message: Optional[str] = None):
        self.conflict = conflict
        super().__init__(
            message or f"overlaps existing entry {conflict.describe()}",
            ExitCode.CONFLICT,
            "Entries may touch (one ends when the next starts) but not overlap.",
        )


class NotFoundError(ScheduleError):
    """No entry has the requested id."""

    def __init__(self, entry_id: int):
        self.entry_id = entry_id
        super().__init__(f"no entry with id {entry_id}", ExitCode.NOT_FOUND, "Run 'list' to see current ids.")


class PersistenceError(ScheduleError):
    """Reading or writing the schedule file failed."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        location: Optional[str] = None,
    ):
        self.path = Path(path) if path is not None else None
        self.location = location
        self.detail = message
        parts = []
        if self.path is not None:
            parts.append(str(self.path))
        if location:
            parts.append(location)
        prefix = ": ".join(parts)
        super().__init__(f"{prefix}: {message}" if prefix else message, ExitCode.IO_ERROR)
