"""Protocols (interfaces) for the framework subsystems kit-cli drives.

kit-cli implements none of these.  The concrete callables live in the
framework packages and are resolved lazily through
:class:`~kit_cli.core.registry.SubsystemRegistry`.  Every callable may be
a plain function or a coroutine function; the dispatcher awaits whatever
comes back when it is awaitable.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class BuildLog(Protocol):
    """The ``log`` object handed to the builder and the adapter."""

    def __call__(self, message: str) -> None: ...  # pragma: no cover

    def success(self, message: str) -> None: ...  # pragma: no cover

    def error(self, message: str) -> None: ...  # pragma: no cover

    def warn(self, message: str) -> None: ...  # pragma: no cover

    def minor(self, message: str) -> None: ...  # pragma: no cover

    def info(self, message: str) -> None: ...  # pragma: no cover


class ConfigLoader(Protocol):
    """Load the project configuration.

    The returned structure must expose at least ``kit.adapter``, either
    as nested mappings or as attributes.  Malformed configuration files
    should surface as :class:`SyntaxError`.
    """

    def __call__(self, *, cwd: Path, mode: str | None) -> Any: ...  # pragma: no cover


class DevServer(Protocol):
    """Start the development server.

    Returns ``{"address_info": {"address", "port"}, "server_config":
    {"https", "open", "fs": {"strict", "allow"}}}``.
    """

    def __call__(
        self,
        *,
        cwd: Path,
        port: int | None,
        host: str | None,
        https: bool,
        config: Any,
    ) -> Any: ...  # pragma: no cover


class PreviewServer(Protocol):
    """Serve an already-built app."""

    def __call__(
        self,
        *,
        port: int,
        host: str | None,
        config: Any,
        https: bool,
    ) -> Any: ...  # pragma: no cover


class Builder(Protocol):
    """Create a production build; returns ``{"build_data", "prerendered"}``."""

    def __call__(self, config: Any, *, log: BuildLog) -> Any: ...  # pragma: no cover


class Adapter(Protocol):
    """Turn build output into a deployment-target specific artefact."""

    def __call__(
        self,
        config: Any,
        build_data: Any,
        prerendered: Any,
        *,
        log: BuildLog,
    ) -> Any: ...  # pragma: no cover


class ConfigTask(Protocol):
    """A subsystem that only needs the configuration (packager, sync tool)."""

    def __call__(self, config: Any) -> Any: ...  # pragma: no cover
