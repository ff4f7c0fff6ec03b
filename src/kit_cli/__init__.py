"""kit-cli: command-line entry point for the Kit web application toolchain.

Dispatches ``dev``, ``build``, ``preview``, ``package`` and ``sync`` to
framework subsystems that are loaded lazily on demand.
"""

from kit_cli.version import __version__

__all__: list[str] = ["__version__"]
