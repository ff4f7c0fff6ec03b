"""Lazy registry of framework subsystems.

Each subsystem is registered as a zero-argument factory.  Factories run
only when :meth:`SubsystemRegistry.load` is called for their name, so a
verb never imports the modules of another verb.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from kit_cli.exceptions import SubsystemLoadError

SUBSYSTEMS: tuple[str, ...] = (
    "config",
    "dev",
    "build",
    "adapt",
    "preview",
    "package",
    "sync",
)
"""Names of every subsystem the dispatcher may ask for."""

Factory = Callable[[], Any]


class SubsystemRegistry:
    """Mapping of subsystem name to the factory that produces it.

    Parameters
    ----------
    factories:
        Initial ``name -> factory`` entries.
    """

    def __init__(self, factories: Mapping[str, Factory] | None = None) -> None:
        self._factories: dict[str, Factory] = dict(factories or {})

    def register(self, name: str, factory: Factory) -> None:
        """Register (or replace) the factory for *name*."""
        self._factories[name] = factory

    def provide(self, name: str, value: Any) -> None:
        """Register an already-built subsystem."""
        self._factories[name] = lambda: value

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def load(self, name: str) -> Any:
        """Invoke the factory for *name* and return the subsystem.

        Raises
        ------
        SubsystemLoadError
            If nothing is registered under *name*.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise SubsystemLoadError(
                name,
                f"No {name} subsystem is installed",
                hint=(
                    "Install the framework package that provides it, or point "
                    f"KIT_SUBSYSTEM_{name.upper()} at a module:attribute target."
                ),
            )
        return factory()
