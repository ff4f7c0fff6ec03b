"""CLI application entry point and command routing for kit.

Architecture notes
------------------
* No subsystem logic lives here.  The parser is generated from
  :data:`~kit_cli.cli.commands.COMMANDS` and the selected action runs
  on a fresh asyncio event loop, one command per process.
* Unknown flags are reported on stderr and otherwise ignored; they do
  not change the exit code.
* Argument errors are routed through the error normalizer like any
  other operational failure, so they exit 1 instead of argparse's 2.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from kit_cli.cli import exit_codes
from kit_cli.cli.commands import COMMANDS, CommandContext, removed_option_in
from kit_cli.cli.console import err_console
from kit_cli.cli.errors import handle_error
from kit_cli.core.models import Command
from kit_cli.core.registry import SubsystemRegistry
from kit_cli.core.settings import Settings
from kit_cli.exceptions import UsageError
from kit_cli.infra.subsystems import default_registry
from kit_cli.utils import log
from kit_cli.version import __version__

LOG = logging.getLogger(__name__)

PROG = "kit"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Parser that raises :class:`UsageError` instead of exiting with 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, hint=f"Run '{PROG} --help' for usage.")


def _add_command(subparsers: argparse._SubParsersAction, command: Command) -> None:
    sub = subparsers.add_parser(
        command.name,
        help=command.description,
        description=command.description,
        allow_abbrev=False,
    )
    for option in command.options:
        help_text = option.help
        if option.default is not None:
            help_text = f"{help_text} (default: {option.default})"

        if option.type is bool:
            sub.add_argument(
                *option.flags,
                dest=option.dest,
                action="store_true",
                default=bool(option.default),
                help=help_text,
            )
            continue

        kwargs: dict[str, object] = {
            "dest": option.dest,
            "type": option.type,
            "default": option.default,
            "help": help_text,
        }
        if option.const is not None:
            kwargs.update(nargs="?", const=option.const)
        sub.add_argument(*option.flags, **kwargs)

    sub.set_defaults(handler=command.action)


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with one sub-parser per verb."""
    parser = _ArgumentParser(
        prog=PROG,
        description="Develop, build, preview and package Kit apps.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    for command in COMMANDS:
        _add_command(subparsers, command)
    return parser


def _report_unknown(extras: Sequence[str]) -> None:
    for arg in extras:
        if arg.startswith("-") and arg != "-":
            flag = arg.split("=", 1)[0]
            err_console.print(f"Unknown option: {flag}", style="dim", markup=False)
        else:
            LOG.debug("Ignoring extra argument %r", arg)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    registry: SubsystemRegistry | None = None,
    settings: Settings | None = None,
    cwd: str | os.PathLike[str] | None = None,
) -> int:
    """Run the kit CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    registry:
        Subsystem registry; built from settings and installed entry points
        when ``None``.
    settings:
        Run settings; read from ``os.environ`` when ``None``.
    cwd:
        Project directory; the process working directory when ``None``.

    Returns
    -------
    int
        OS process exit code.  Failing commands do not return: the
        error normalizer exits the process (or re-raises syntax errors).
    """
    if settings is None:
        settings = Settings.from_environ(os.environ)
    log.init(settings.log_level)

    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    try:
        args, extras = parser.parse_known_args(argv)
    except UsageError as exc:
        handle_error(removed_option_in(argv) or exc)

    _report_unknown(extras)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    ctx = CommandContext(
        registry=default_registry(settings) if registry is None else registry,
        settings=settings,
        cwd=Path(cwd) if cwd is not None else Path.cwd(),
    )
    asyncio.run(args.handler(args, ctx))
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Entry point of the ``kit`` console script."""
    try:
        code = main()
        sys.exit(code)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
