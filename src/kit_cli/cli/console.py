"""Rich consoles shared by the CLI layer.

``console`` carries reports (banners, connectivity lines, build hints)
on stdout.  ``err_console`` carries diagnostics and fatal errors on
stderr; nothing about a failure is ever written to stdout.

Both resolve ``sys.stdout``/``sys.stderr`` at print time, so output
redirection (and pytest's ``capsys``) is honoured.
"""

from __future__ import annotations

from rich.console import Console

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)
