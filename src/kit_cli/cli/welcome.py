"""Connectivity report printed once ``dev`` or ``preview`` is serving.

Besides telling the operator where the server answers, the report warns
whenever the server is reachable from other machines, and louder still
when the dev server's filesystem restrictions make local files
reachable too.  It is printed on every successful start and has no
switch to turn it off.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from rich.markup import escape

from kit_cli.cli.console import console
from kit_cli.core.exposure import is_exposed, relative_paths, reportable_interfaces
from kit_cli.core.models import InterfaceRecord, ServerBinding
from kit_cli.infra.browser import launch
from kit_cli.infra.interfaces import network_interfaces
from kit_cli.version import __version__

LOOSE_FS_WARNING = (
    "Serving with server.fs.strict: false. Note that all files on your "
    "machine will be accessible to anyone on your network."
)
ALLOW_LIST_WARNING = (
    "Note that all files in the following directories will be accessible "
    "to anyone on your network: "
)
HOST_HINT = "Use --host to expose server to other devices on this network"


def welcome(
    binding: ServerBinding,
    *,
    cwd: str | os.PathLike[str] | None = None,
    interfaces: Iterable[InterfaceRecord] | None = None,
) -> None:
    """Print the banner and one line per reportable IPv4 address.

    Parameters
    ----------
    binding:
        The started server.  ``loose`` and ``allow`` are only ever set
        for the dev server.
    cwd:
        Base directory for rendering the allow-list; the allow-list
        warning is skipped without it.
    interfaces:
        Interface snapshot; taken from the OS when ``None``.
    """
    if binding.open:
        launch(binding.port, binding.https)

    console.print(f"\n  [bold cyan]Kit v{__version__}[/bold cyan]\n")

    protocol = binding.protocol
    exposed = is_exposed(binding.host)
    records = network_interfaces() if interfaces is None else interfaces

    for record in reportable_interfaces(records):
        if record.internal:
            console.print(
                f"  [dim]local:  [/dim] {protocol}//[bold]localhost:{binding.port}[/bold]"
            )
        elif exposed:
            console.print(
                f"  [dim]network:[/dim] {protocol}//"
                f"[bold]{escape(record.address)}:{binding.port}[/bold]"
            )
            _print_filesystem_warning(binding, cwd)
        else:
            console.print("  [dim]network: not exposed[/dim]")

    if not exposed:
        console.print(f"\n  {HOST_HINT}")

    console.print("\n")


def _print_filesystem_warning(
    binding: ServerBinding,
    cwd: str | os.PathLike[str] | None,
) -> None:
    if binding.loose:
        console.print(f"\n  {LOOSE_FS_WARNING}", style="yellow", markup=False)
    elif binding.allow and cwd is not None:
        dirs = ", ".join(relative_paths(binding.allow, cwd))
        console.print(f"\n  {ALLOW_LIST_WARNING}{dirs}", style="yellow", markup=False)
