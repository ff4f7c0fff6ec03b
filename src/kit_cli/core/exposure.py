"""Pure classification rules behind the network exposure report.

No I/O here: the infra layer supplies interface snapshots and the CLI
layer prints what these helpers decide.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator

from kit_cli.core.models import PLACEHOLDER_MAC, InterfaceRecord

LOOPBACK_HOSTS: frozenset[str] = frozenset({"localhost", "127.0.0.1"})


def is_exposed(host: str | None) -> bool:
    """Return ``True`` when a server bound to *host* is reachable from the LAN."""
    return host is not None and host not in LOOPBACK_HOSTS


def reportable_interfaces(
    interfaces: Iterable[InterfaceRecord],
) -> Iterator[InterfaceRecord]:
    """Yield the IPv4 entries worth reporting, in enumeration order.

    IPv6 entries are dropped.  External entries carrying the placeholder
    hardware address belong to virtual or disabled adapters and are
    dropped as well.
    """
    for record in interfaces:
        if record.family != "IPv4":
            continue
        if not record.internal and record.mac == PLACEHOLDER_MAC:
            continue
        yield record


def relative_paths(paths: Iterable[str], cwd: str | os.PathLike[str]) -> list[str]:
    """Render *paths* relative to *cwd* for display."""
    return [os.path.relpath(path, cwd) for path in paths]
