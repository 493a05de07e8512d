"""Text file helpers: plain reads and atomic replace-on-write."""
from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

__all__ = ["read_text", "write_text_atomic"]

LOG = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file."""
    return Path(path).read_text(encoding="utf-8")


def _file_mode(target: Path) -> int:
    """Permission bits for ``target``: its current ones, else the umask default."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text_atomic(path: PathLike, text: str) -> None:
    """Replace ``path`` with ``text`` in one step.

    The content goes to a temporary file in the same directory, is flushed
    and fsynced, then renamed over the target with ``os.replace``. Readers
    see either the old file or the new one, never a partial write. On any
    failure the temporary file is removed and the exception propagates.
    An existing file keeps its permission bits.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    mode = _file_mode(target)
    fd, tmp = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp, mode)
        os.replace(tmp, target)
    except BaseException:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise
    LOG.debug("Wrote %d bytes to %s", len(text.encode("utf-8")), target)
