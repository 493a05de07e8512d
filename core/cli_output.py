"""Output formatting for CLI commands.

Commands hand plain data (records, rows) to an ``OutputWriter``; the format
chosen with ``--output`` decides how it is rendered.
"""
from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass, is_dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence, TextIO

from .yamlio import dump_yaml_text


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


@dataclass
class OutputConfig:
    format: OutputFormat = OutputFormat.TEXT
    verbose: bool = False
    quiet: bool = False
    file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        # Resolved per call so redirected stdout is honoured
        return self.file or sys.stdout


def to_plain(data: Any) -> Any:
    """Dataclasses, enums and tuples → dicts, values and lists for JSON/YAML."""
    if is_dataclass(data) and not isinstance(data, type):
        return to_plain(asdict(data))
    if isinstance(data, dict):
        return {k: to_plain(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_plain(v) for v in data]
    if isinstance(data, Enum):
        return data.value
    return data


def render_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> List[str]:
    """Left-aligned ``a | b`` columns under a header and a dashed rule."""
    cells = [[str(v) for v in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, val in enumerate(row[:len(widths)]):
            widths[i] = max(widths[i], len(val))

    def line(values: Sequence[str]) -> str:
        return " | ".join(v.ljust(widths[i]) if i < len(widths) else v for i, v in enumerate(values)).rstrip()

    head = line(list(headers))
    return [head, "-" * len(head)] + [line(row) for row in cells]


class OutputWriter:
    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    @property
    def format(self) -> OutputFormat:
        return self.config.format

    @property
    def structured(self) -> bool:
        """True for machine-readable formats (JSON/YAML)."""
        return self.config.format in (OutputFormat.JSON, OutputFormat.YAML)

    def print(self, *args, **kwargs) -> None:
        """Print to the configured stream unless --quiet."""
        if self.config.quiet:
            return
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def print_success(self, message: str) -> None:
        self.print(message)

    def print_data(self, data: Any, headers: Optional[Sequence[str]] = None) -> None:
        """Render data in the configured format.

        TABLE expects rows (sequences or dicts) plus ``headers``; dict rows
        take their headers from the first row when none are given.
        """
        fmt = self.config.format
        if fmt == OutputFormat.JSON:
            self.print(json.dumps(to_plain(data), indent=2, ensure_ascii=False, default=str))
        elif fmt == OutputFormat.YAML:
            self.print(dump_yaml_text(to_plain(data)), end="")
        elif fmt == OutputFormat.TABLE:
            self._print_table(data, headers)
        elif isinstance(data, dict):
            for key, value in data.items():
                self.print(f"{key}: {value}")
        elif isinstance(data, (list, tuple)):
            for item in data:
                self.print(item)
        else:
            self.print(data)

    def _print_table(self, data: Any, headers: Optional[Sequence[str]]) -> None:
        rows = list(data) if isinstance(data, (list, tuple)) else [data]
        if headers is None and rows and isinstance(rows[0], dict):
            headers = list(rows[0])
        if not headers:
            for row in rows:
                self.print(" | ".join(str(v) for v in row) if isinstance(row, (list, tuple)) else row)
            return
        as_cells = [[row.get(h, "") for h in headers] if isinstance(row, dict) else row for row in rows]
        for text in render_table(headers, as_cells):
            self.print(text)
