"""CLI exit codes and error reporting.

Every failure a command can surface carries one exit code, so scripts
driving the CLI can branch on the kind of failure without parsing text.
"""
from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, TextIO


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    CONFIG_ERROR = 3
    NOT_FOUND = 6
    CONFLICT = 8
    IO_ERROR = 9
    INTERRUPTED = 130  # Ctrl+C


@dataclass
class CLIError(Exception):
    """Error meant for the user: a message, an exit code and an optional hint."""
    message: str
    code: ExitCode = ExitCode.ERROR
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class ConfigError(CLIError):
    """Configuration file or environment is unusable."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.CONFIG_ERROR, hint)


def error_lines(message: Optional[str], hint: Optional[str] = None) -> List[str]:
    """``Error:``/``Hint:`` lines in the shape every command prints them."""
    lines = []
    if message:
        lines.append(f"Error: {message}")
    if hint:
        lines.append(f"Hint: {hint}")
    return lines


def report(message: Optional[str], hint: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    out = stream or sys.stderr
    for line in error_lines(message, hint):
        print(line, file=out)


def handle_error(error: BaseException, verbose: bool = False) -> int:
    """Report ``error`` on stderr and return the exit code to use.

    Unexpected exceptions get ``ExitCode.ERROR``; with ``verbose`` their
    traceback is printed too.
    """
    if isinstance(error, CLIError):
        report(error.message, error.hint)
        return int(error.code)
    if isinstance(error, KeyboardInterrupt):
        print("\nInterrupted.", file=sys.stderr)
        return int(ExitCode.INTERRUPTED)
    report(str(error) or type(error).__name__)
    if verbose:
        traceback.print_exception(type(error), error, error.__traceback__)
    return int(ExitCode.ERROR)
