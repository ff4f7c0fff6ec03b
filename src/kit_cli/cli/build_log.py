"""The ``log`` object handed to the builder and the adapter.

Every line is indented by two spaces so subsystem output nests under the
CLI's own messages.  ``minor`` and ``info`` are silent unless the build
runs with ``--verbose``.
"""

from __future__ import annotations

import textwrap

from kit_cli.cli.console import console, err_console


def _indent(message: str) -> str:
    return textwrap.indent(message, "  ", lambda _line: True)


class BuildLogger:
    """Callable logger satisfying :class:`~kit_cli.core.protocols.BuildLog`."""

    def __init__(self, *, verbose: bool = False) -> None:
        self.verbose: bool = verbose

    def __call__(self, message: str) -> None:
        console.print(_indent(message), markup=False)

    def success(self, message: str) -> None:
        console.print(_indent(f"✔ {message}"), style="green", markup=False)

    def error(self, message: str) -> None:
        err_console.print(_indent(message), style="bold red", markup=False)

    def warn(self, message: str) -> None:
        console.print(_indent(message), style="bold yellow", markup=False)

    def minor(self, message: str) -> None:
        if self.verbose:
            console.print(_indent(message), style="dim", markup=False)

    def info(self, message: str) -> None:
        if self.verbose:
            self(message)
