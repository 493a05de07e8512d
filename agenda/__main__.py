"""Agenda CLI

Keeps a personal schedule in a single JSON file:

  agenda list
  agenda add "Team sync" 2025-05-01T10:00:00 2025-05-01T11:00:00
  agenda delete 3

Entries may not overlap; two entries may touch (one ends exactly when the
next starts). Failed commands leave the file untouched and exit non-zero.
"""
from __future__ import annotations

import argparse
from typing import List, Optional

from core.cli_framework import CLIApp
from core.cli_output import OutputWriter
from core.pipeline import run_pipeline

from . import __version__
from .config import AgendaConfig, resolve_config
from .pipeline import (
    AddProcessor,
    AddProducer,
    AddRequest,
    DeleteProcessor,
    DeleteProducer,
    DeleteRequest,
    ListProcessor,
    ListProducer,
    ListRequest,
)


app = CLIApp(
    "agenda",
    "Personal schedule: list, add (no overlaps) and delete entries in a JSON file.",
    version=__version__,
)
app.global_argument("--file", "-f", help="Schedule file (default: $AGENDA_FILE, config 'file', or ./schedules.json)")
app.global_argument("--config", help="YAML config file (default: $AGENDA_CONFIG or ~/.config/agenda/config.yaml)")


def _config_from_args(args: argparse.Namespace) -> AgendaConfig:
    return resolve_config(file=getattr(args, "file", None), config=getattr(args, "config", None))


def _writer(args: argparse.Namespace) -> OutputWriter:
    return getattr(args, "_output", None) or OutputWriter()


@app.command("list", help="List all entries", aliases=["ls"])
def cmd_list(args: argparse.Namespace) -> int:
    cfg = _config_from_args(args)
    request = ListRequest(path=cfg.schedule_file)
    return run_pipeline(request, ListProcessor(), ListProducer(_writer(args), cfg.display_format))


@app.command("add", help="Add an entry; rejected if it overlaps an existing one")
@app.argument("subject", help="What the entry is for")
@app.argument("start", help="Start time, YYYY-MM-DDTHH:MM:SS")
@app.argument("end", help="End time, YYYY-MM-DDTHH:MM:SS (after start)")
def cmd_add(args: argparse.Namespace) -> int:
    cfg = _config_from_args(args)
    request = AddRequest(subject=args.subject, start=args.start, end=args.end, path=cfg.schedule_file)
    return run_pipeline(request, AddProcessor(), AddProducer(_writer(args)))


@app.command("delete", help="Delete an entry by id", aliases=["rm"])
@app.argument("id", help="Entry id as shown by 'list'")
def cmd_delete(args: argparse.Namespace) -> int:
    cfg = _config_from_args(args)
    request = DeleteRequest(entry_id=args.id, path=cfg.schedule_file)
    return run_pipeline(request, DeleteProcessor(), DeleteProducer(_writer(args)))


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI."""
    return app.run(argv)


if __name__ == "__main__":
    raise SystemExit(main())
