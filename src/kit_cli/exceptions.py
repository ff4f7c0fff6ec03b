"""Custom exception hierarchy for kit-cli.

Errors raised by this package inherit from :class:`KitError`.  Errors
raised by the framework subsystems are not wrapped: they travel as-is to
the CLI error normalizer, which decides how to report them.

Hierarchy
---------
KitError
├── UsageError
│   └── RemovedOptionError
└── SubsystemLoadError
"""

from __future__ import annotations


class KitError(Exception):
    """Base exception for all kit-cli errors.

    Carries an optional *hint* that the error normalizer prints below
    the message.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line usage ----------------------------------------------------

class UsageError(KitError):
    """Raised when the command line cannot be honoured as given."""


class RemovedOptionError(UsageError):
    """Raised when a flag that is still declared but no longer supported is used."""

    def __init__(self, flag: str, replacement: str) -> None:
        super().__init__(f"{flag} is no longer supported — use {replacement} instead")
        self.flag: str = flag
        self.replacement: str = replacement


# --- Subsystems ------------------------------------------------------------

class SubsystemLoadError(KitError):
    """Raised when a framework subsystem cannot be resolved or imported."""

    def __init__(self, subsystem: str, message: str, *, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.subsystem: str = subsystem
