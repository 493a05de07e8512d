"""Shared constants for the agenda CLI.

Timestamp formats, default file names and config search paths live here so
the store, the persistence adapter and the CLI agree on them.
"""

from __future__ import annotations

import os

# -----------------------------------------------------------------------------
# Timestamp formats
# -----------------------------------------------------------------------------

# Durable and CLI input format: seconds precision, no offset
FMT_TIMESTAMP = "%Y-%m-%dT%H:%M:%S"

# Default human display format for `list`
FMT_DISPLAY = "%Y-%m-%d %H:%M"


# -----------------------------------------------------------------------------
# Files and environment
# -----------------------------------------------------------------------------

APP_NAME = "agenda"

DEFAULT_SCHEDULE_FILE = "schedules.json"

ENV_SCHEDULE_FILE = "AGENDA_FILE"
ENV_CONFIG_FILE = "AGENDA_CONFIG"


def _config_roots() -> list[str]:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    roots = [os.path.expanduser(xdg)] if xdg else []
    roots.append(os.path.expanduser("~/.config"))
    return roots


def config_file_paths() -> list[str]:
    """Candidate config.yaml locations, most specific first, without repeats."""
    paths: list[str] = []
    for root in _config_roots():
        candidate = os.path.join(root, APP_NAME, "config.yaml")
        if candidate not in paths:
            paths.append(candidate)
    return paths
