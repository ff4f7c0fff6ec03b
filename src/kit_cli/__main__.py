"""Allow ``python -m kit_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m kit_cli`` behaves identically to the ``kit`` console
script.
"""

from __future__ import annotations

from kit_cli.cli.app import cli

if __name__ == "__main__":
    cli()
