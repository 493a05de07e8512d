"""Decorator-driven argparse front end.

Commands are plain functions taking the parsed namespace and returning an
exit code. ``CLIApp.run`` wires logging and the output writer, then maps
any exception escaping a command onto an ``ExitCode``.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .cli_errors import ExitCode, handle_error
from .cli_output import OutputConfig, OutputFormat, OutputWriter


CommandFunc = Callable[[argparse.Namespace], int]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

LOG = logging.getLogger(__name__)


@dataclass
class Argument:
    flags: tuple
    options: Dict[str, Any] = field(default_factory=dict)

    def attach(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(*self.flags, **self.options)


@dataclass
class CommandDef:
    name: str
    func: CommandFunc
    help: str = ""
    description: str = ""
    arguments: List[Argument] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)

    def attach(self, subparsers: Any) -> None:
        sub = subparsers.add_parser(
            self.name,
            help=self.help,
            description=self.description or self.help,
            aliases=self.aliases,
        )
        for arg in self.arguments:
            arg.attach(sub)
        sub.set_defaults(_cmd_func=self.func)


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


class CLIApp:
    """A named CLI with subcommands.

        app = CLIApp("agenda", "Personal schedule")

        @app.command("delete", aliases=["rm"])
        @app.argument("id")
        def cmd_delete(args):
            ...
            return 0
    """

    def __init__(self, name: str, description: str = "", *, version: Optional[str] = None):
        self.name = name
        self.description = description
        self.version = version
        self._commands: Dict[str, CommandDef] = {}
        self._globals: List[Argument] = []
        # @argument runs before @command; collected here until then
        self._pending: List[Argument] = []

    def command(self, name: str, *, help: str = "", description: str = "",
                aliases: Optional[List[str]] = None) -> Callable[[CommandFunc], CommandFunc]:
        def register(func: CommandFunc) -> CommandFunc:
            # Decorators apply bottom-up; restore source order
            arguments = self._pending[::-1]
            self._pending = []
            self._commands[name] = CommandDef(name, func, help, description, arguments, list(aliases or []))
            return func
        return register

    def argument(self, *flags: str, **options: Any) -> Callable[[CommandFunc], CommandFunc]:
        """Queue an argument for the command decorated just above."""
        def queue(func: CommandFunc) -> CommandFunc:
            self._pending.append(Argument(flags, options))
            return func
        return queue

    def global_argument(self, *flags: str, **options: Any) -> None:
        """Option accepted before the command name, e.g. ``--file``."""
        self._globals.append(Argument(flags, options))

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=self.name, description=self.description)
        if self.version:
            parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {self.version}")
        parser.add_argument("--verbose", "-v", action="store_true", help="debug logging on stderr")
        parser.add_argument("--quiet", "-q", action="store_true", help="suppress normal output")
        parser.add_argument(
            "--output", "-o",
            choices=[f.value for f in OutputFormat],
            default=OutputFormat.TEXT.value,
            help="output format (default: text)",
        )
        for arg in self._globals:
            arg.attach(parser)
        if self._commands:
            subparsers = parser.add_subparsers(dest="command", metavar="<command>")
            for cmd in self._commands.values():
                cmd.attach(subparsers)
        return parser

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Parse ``argv``, dispatch, and return the process exit code."""
        parser = self.build_parser()
        args = parser.parse_args(argv)
        configure_logging(args.verbose)
        args._output = OutputWriter(OutputConfig(
            format=OutputFormat(args.output),
            verbose=args.verbose,
            quiet=args.quiet,
        ))
        func = getattr(args, "_cmd_func", None)
        if func is None:
            parser.print_help()
            return int(ExitCode.USAGE)
        return self._dispatch(func, args)

    @staticmethod
    def _dispatch(func: CommandFunc, args: argparse.Namespace) -> int:
        LOG.debug("running command %s", args.command)
        try:
            return int(func(args))
        except (Exception, KeyboardInterrupt) as exc:
            return handle_error(exc, verbose=args.verbose)
