"""Resolve where the schedule lives and how it is displayed.

Schedule file precedence: ``--file`` > ``$AGENDA_FILE`` > ``file:`` in the
YAML config > ``schedules.json`` in the working directory.

Config file precedence: ``--config`` > ``$AGENDA_CONFIG`` > the first
existing ``agenda/config.yaml`` under ``$XDG_CONFIG_HOME`` or ``~/.config``.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from core.cli_errors import ConfigError
from core.constants import (
    DEFAULT_SCHEDULE_FILE,
    ENV_CONFIG_FILE,
    ENV_SCHEDULE_FILE,
    FMT_DISPLAY,
    config_file_paths,
)
from core.yamlio import load_config

LOG = logging.getLogger(__name__)

KNOWN_KEYS = ("file", "display_format")


@dataclass
class AgendaConfig:
    schedule_file: Path
    display_format: str = FMT_DISPLAY
    config_path: Optional[Path] = None


def find_config_file(explicit: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Return the config file to read, or None when there is none."""
    environ = os.environ if env is None else env
    if explicit:
        return Path(explicit).expanduser()
    from_env = environ.get(ENV_CONFIG_FILE)
    if from_env:
        return Path(from_env).expanduser()
    for candidate in config_file_paths():
        if os.path.exists(candidate):
            return Path(candidate)
    return None


def _read_config(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    try:
        data = load_config(str(path))
    except Exception as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping (dict)")
    for key in KNOWN_KEYS:
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"config {path}: '{key}' must be a string")
    unknown = sorted(set(data) - set(KNOWN_KEYS))
    if unknown:
        LOG.warning("Ignoring unknown config keys in %s: %s", path, ", ".join(map(str, unknown)))
    return data


def resolve_config(
    file: Optional[str] = None,
    config: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> AgendaConfig:
    """Combine CLI options, environment and the YAML config file."""
    environ = os.environ if env is None else env
    config_path = find_config_file(config, environ)
    data = _read_config(config_path)

    schedule_file = file or environ.get(ENV_SCHEDULE_FILE) or data.get("file") or DEFAULT_SCHEDULE_FILE
    resolved = AgendaConfig(
        schedule_file=Path(schedule_file).expanduser(),
        display_format=data.get("display_format") or FMT_DISPLAY,
        config_path=config_path,
    )
    LOG.debug("Using schedule file %s (config: %s)", resolved.schedule_file, config_path or "none")
    return resolved
