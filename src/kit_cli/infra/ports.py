"""Infrastructure: TCP port availability and ownership lookup.

Rules
-----
* Availability is probed by binding the port, never by connecting.
* Ownership lookup is best-effort; permission errors and platform
  limitations yield ``None`` instead of raising.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import logging
import socket
import sys

import psutil

LOG = logging.getLogger(__name__)


def is_port_free(port: int, host: str = "") -> bool:
    """Return ``True`` if a TCP listener could bind *port* right now.

    The probe socket is closed before returning.  An empty *host* binds
    all IPv4 interfaces, which is what a server started on that port
    would compete with.  Connections lingering in TIME_WAIT do not
    count as the port being bound.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        # Windows SO_REUSEADDR would let the probe share a live listener.
        if sys.platform != "win32":
            probe.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            probe.bind((host, port))
            probe.listen(1)
        except OSError as exc:
            LOG.debug("Port %s is not bindable: %s", port, exc)
            return False
    return True


def blame(port: int) -> str | None:
    """Name the process listening on *port*, or ``None`` if it cannot be told."""
    try:
        connections = psutil.net_connections(kind="tcp")
    except (psutil.Error, OSError) as exc:
        LOG.debug("Cannot list TCP connections: %s", exc)
        return None

    for conn in connections:
        if conn.status != psutil.CONN_LISTEN or not conn.laddr:
            continue
        if conn.laddr.port != port or not conn.pid:
            continue
        try:
            return psutil.Process(conn.pid).name()
        except psutil.Error as exc:
            LOG.debug("Cannot inspect process %s: %s", conn.pid, exc)
            return None
    return None
