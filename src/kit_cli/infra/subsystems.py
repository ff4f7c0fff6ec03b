"""Infrastructure: resolve framework subsystems to importable callables.

A subsystem comes from, in order of precedence:

1. a ``KIT_SUBSYSTEM_<NAME>=module:attribute`` override in the settings;
2. an entry point named ``<name>`` in the ``kit_cli.subsystems`` group.

Nothing is imported here until the registry asks for a subsystem.
Import failures are re-raised as :class:`SubsystemLoadError`; a
:class:`SyntaxError` inside the imported code is left to propagate so
the interpreter reports it with its own formatting.
"""

from __future__ import annotations

import functools
import importlib
import logging
from importlib.metadata import EntryPoint, entry_points
from typing import Any

from kit_cli.core.registry import SUBSYSTEMS, SubsystemRegistry
from kit_cli.core.settings import Settings
from kit_cli.exceptions import SubsystemLoadError

LOG = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "kit_cli.subsystems"


def load_target(name: str, target: str) -> Any:
    """Import ``module:attribute`` (attribute may be dotted) and return it."""
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise SubsystemLoadError(
            name,
            f"Invalid target {target!r} for the {name} subsystem",
            hint="Use the form module:attribute, e.g. mykit.dev:start.",
        )

    LOG.debug("Loading %s subsystem from %s", name, target)
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise SubsystemLoadError(
            name,
            f"Could not load the {name} subsystem from {target}: {exc}",
        ) from exc

    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise SubsystemLoadError(
                name,
                f"{module_name} has no attribute {attribute!r} for the {name} subsystem",
            ) from exc
    return obj


def load_entry_point(name: str, entry_point: EntryPoint) -> Any:
    """Load *entry_point*, mapping import failures to :class:`SubsystemLoadError`."""
    LOG.debug("Loading %s subsystem from entry point %s", name, entry_point.value)
    try:
        return entry_point.load()
    except (ImportError, AttributeError) as exc:
        raise SubsystemLoadError(
            name,
            f"Could not load the {name} subsystem from {entry_point.value}: {exc}",
        ) from exc


def default_registry(settings: Settings) -> SubsystemRegistry:
    """Build the registry used by the ``kit`` console script."""
    registry = SubsystemRegistry()
    installed = {ep.name: ep for ep in entry_points(group=ENTRY_POINT_GROUP)}
    for name in SUBSYSTEMS:
        target = settings.subsystems.get(name)
        if target:
            registry.register(name, functools.partial(load_target, name, target))
        elif name in installed:
            registry.register(name, functools.partial(load_entry_point, name, installed[name]))
    return registry
