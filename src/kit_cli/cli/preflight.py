"""Pre-flight checks that run before any configuration is loaded.

These are the only places besides the error normalizer allowed to end
the process: they run ahead of the command's subsystem so the operator
gets an actionable message instead of a bind failure deep in a server.
"""

from __future__ import annotations

import asyncio
import sys

from rich.markup import escape

from kit_cli.cli import exit_codes
from kit_cli.cli.console import err_console
from kit_cli.infra import ports


async def check_port(port: int) -> None:
    """Return if *port* is free, otherwise explain who holds it and exit 1."""
    if await asyncio.to_thread(ports.is_port_free, port):
        return

    err_console.print(f"Port {port} is occupied", style="bold red")

    owner = await asyncio.to_thread(ports.blame, port)
    if owner:
        err_console.print(
            f"Terminate process [bold]{escape(owner)}[/bold] or specify a "
            "different port with [bold]--port[/bold]\n"
        )
    else:
        err_console.print(
            "Terminate the process occupying the port or specify a "
            "different port with [bold]--port[/bold]\n"
        )

    sys.exit(exit_codes.GENERAL_ERROR)
