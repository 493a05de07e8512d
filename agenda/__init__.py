"""Agenda package.

Small personal schedule kept in one JSON file: list entries, add a named
time interval (rejected when it overlaps an existing one) and delete by id.

Public CLI entry lives in agenda.__main__.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
