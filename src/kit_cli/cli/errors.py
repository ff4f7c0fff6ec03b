"""Error normalizer: the single exit point for failed commands.

Every command action routes its failures through :func:`handle_error`.
It makes exactly one terminal decision per failure:

* errors named ``SyntaxError`` are re-raised untouched, so the
  interpreter reports the broken source (usually the project's config
  file) with its own formatting;
* everything else is printed to stderr (message, optional hint, and the
  traceback unless it is a usage error) and the process exits with
  :data:`~kit_cli.cli.exit_codes.GENERAL_ERROR`.
"""

from __future__ import annotations

import json
import sys
import traceback
from typing import NoReturn

from rich.markup import escape

from kit_cli.cli import exit_codes
from kit_cli.cli.console import err_console
from kit_cli.exceptions import KitError, UsageError


class ThrownValueError(Exception):
    """Wraps a raised value that was not an exception to begin with.

    ``name`` records the original value's own error name when it had one.
    """

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name: str = name or type(self).__name__


def _render(value: object) -> str:
    # default=repr runs arbitrary __repr__ code, so anything can escape here.
    try:
        return json.dumps(value, default=repr)
    except Exception:  # noqa: BLE001
        pass
    try:
        return repr(value)
    except Exception:  # noqa: BLE001
        return f"<unrepresentable {type(value).__name__}>"


def coalesce_to_error(value: object) -> BaseException:
    """Turn any raised value into an exception.  Never raises.

    Exceptions pass through unchanged.  Error-like objects exposing
    ``name`` and ``message`` keep both.  Anything else gets its JSON
    rendering (or ``repr``) as the message.
    """
    if isinstance(value, BaseException):
        return value

    name = getattr(value, "name", None)
    message = getattr(value, "message", None)
    if isinstance(name, str) and message is not None:
        return ThrownValueError(str(message), name=name)

    return ThrownValueError(_render(value))


def error_name(error: BaseException) -> str:
    """Class name of *error*, or the carried name for wrapped values."""
    if isinstance(error, ThrownValueError):
        return error.name
    return type(error).__name__


def format_stack(error: BaseException) -> str:
    """Traceback frames of *error*, without the header and message lines."""
    if error.__traceback__ is None:
        return ""
    return "".join(traceback.format_tb(error.__traceback__)).rstrip()


def handle_error(value: object) -> NoReturn:
    """Report *value* and exit 1, or re-raise it if it is a syntax error."""
    error = coalesce_to_error(value)

    if error_name(error) == "SyntaxError":
        raise error

    message = str(error) or type(error).__name__
    err_console.print(f"> {escape(message)}", style="bold red")
    if isinstance(error, KitError) and error.hint:
        err_console.print(error.hint, style="yellow", markup=False)

    stack = "" if isinstance(error, UsageError) else format_stack(error)
    if stack:
        err_console.print(stack, style="dim", markup=False)

    sys.exit(exit_codes.GENERAL_ERROR)
