"""Domain models for kit-cli.

All value objects are **frozen** dataclasses.  They carry no I/O and are
built either by the infra layer (interface snapshots) or from the
results returned by framework subsystems.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from kit_cli.utils.mappings import get_path

PLACEHOLDER_MAC = "00:00:00:00:00:00"
"""Hardware address reported for non-physical or disabled adapters."""


# ---------------------------------------------------------------------------
# Command table
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Option:
    """A declared command-line option."""

    flags: tuple[str, ...]
    """Short and/or long spellings, e.g. ``("-p", "--port")``."""

    help: str

    default: Any = None

    type: type = str
    """``str``, ``int`` or ``bool``.  Boolean options are plain switches."""

    const: Any = None
    """Value used when a non-boolean option is given without an argument."""

    @property
    def dest(self) -> str:
        """Namespace attribute name derived from the longest flag."""
        longest = max(self.flags, key=len)
        return longest.lstrip("-").replace("-", "_")


@dataclass(frozen=True, slots=True)
class Command:
    """A verb, its declared options, and the coroutine that runs it."""

    name: str
    description: str
    options: tuple[Option, ...]
    action: Callable[..., Awaitable[Any]]


# ---------------------------------------------------------------------------
# Server binding
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ServerBinding:
    """Where a started server listens and how it is configured."""

    port: int
    host: str | None = None
    https: bool = False
    open: bool = False
    loose: bool = False
    """``True`` when the server's filesystem strict mode is disabled."""

    allow: tuple[str, ...] = field(default_factory=tuple)
    """Filesystem paths explicitly allowed to be served."""

    @property
    def protocol(self) -> str:
        return "https:" if self.https else "http:"

    @classmethod
    def from_dev_result(
        cls,
        result: Any,
        *,
        https: bool = False,
        open_browser: bool = False,
    ) -> ServerBinding:
        """Build a binding from the dev starter's result.

        The CLI flags *https* and *open_browser* win over the server config when
        set; the server config can only switch them on.
        """
        allow = get_path(result, "server_config", "fs", "allow", default=())
        return cls(
            port=int(get_path(result, "address_info", "port")),
            host=get_path(result, "address_info", "address"),
            https=bool(https or get_path(result, "server_config", "https", default=False)),
            open=bool(open_browser or get_path(result, "server_config", "open", default=False)),
            loose=get_path(result, "server_config", "fs", "strict") is False,
            allow=tuple(str(path) for path in allow),
        )


# ---------------------------------------------------------------------------
# Network interfaces
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InterfaceRecord:
    """One address bound to a local network interface."""

    name: str
    family: str
    """``"IPv4"`` or ``"IPv6"``."""

    address: str
    internal: bool
    """``True`` for loopback-class addresses."""

    mac: str = PLACEHOLDER_MAC
