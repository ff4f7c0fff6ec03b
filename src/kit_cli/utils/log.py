"""Logging configuration for kit-cli.

Diagnostics go to stderr through the standard :mod:`logging` module.
User-facing reports never go through logging; the CLI layer renders
those with Rich.
"""

from __future__ import annotations

import functools
import logging
import sys

DEFAULT_LEVEL = "WARNING"
_FORMAT = "%(asctime)s | %(levelname)s | %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_from_name(name: str | None) -> int:
    """Map a level name such as ``"debug"`` to its numeric value.

    Unknown or empty names fall back to :data:`DEFAULT_LEVEL`.
    """
    mapping = logging.getLevelNamesMapping()
    return mapping.get((name or "").upper(), mapping[DEFAULT_LEVEL])


@functools.cache
def _install_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    logging.getLogger("kit_cli").addHandler(handler)
    return handler


def init(level: str | None = None) -> None:
    """Route ``kit_cli`` log records to stderr at *level*.

    Safe to call repeatedly; the handler is installed once.
    """
    _install_handler()
    logging.getLogger("kit_cli").setLevel(level_from_name(level))
