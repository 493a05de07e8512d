"""YAML helpers for the agenda config file and ``--output yaml``."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

__all__ = ["load_config", "dump_yaml_text"]


def _require_yaml():
    try:
        import yaml  # type: ignore

        return yaml
    except ImportError as exc:  # pragma: no cover - runtime guard
        raise RuntimeError("PyYAML not installed. Run: pip install pyyaml") from exc


def load_config(path: Optional[Union[str, Path]]) -> Any:
    """Parsed YAML document at ``path``; ``{}`` when the file is absent or blank.

    The root is not checked: a list or scalar comes back unchanged and the
    caller decides how to report it.
    """
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    data = _require_yaml().safe_load(text)
    return {} if data is None else data


def dump_yaml_text(data: Any) -> str:
    """Block-style YAML, keys in insertion order, unicode kept as is."""
    return _require_yaml().safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
