"""Infrastructure: best-effort browser launch.

The launch is fire-and-forget.  The spawned process is never waited on,
its exit status is never read, and a failure to spawn is only logged at
debug level: opening a browser is not part of any command's contract.
"""

from __future__ import annotations

import logging
import platform
import subprocess

LOG = logging.getLogger(__name__)


def open_command(system: str | None = None, release: str | None = None) -> str:
    """Return the shell command that opens a URL on this platform.

    Parameters
    ----------
    system:
        ``platform.system()`` value; detected when ``None``.
    release:
        Kernel release string; detected when ``None``.  A Linux kernel
        whose release mentions ``microsoft`` runs under Windows interop.
    """
    system = (system if system is not None else platform.system()).lower()
    if system == "windows":
        return "start"
    if system == "linux":
        release = release if release is not None else platform.release()
        if "microsoft" in release.lower():
            return "cmd.exe /c start"
        return "xdg-open"
    return "open"


def local_url(port: int, https: bool) -> str:
    scheme = "https" if https else "http"
    return f"{scheme}://localhost:{port}"


def launch(port: int, https: bool) -> None:
    """Open ``http(s)://localhost:<port>`` in the default browser."""
    command = f"{open_command()} {local_url(port, https)}"
    try:
        subprocess.Popen(
            command,
            shell=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        LOG.debug("Browser launch failed (%s): %s", command, exc)
