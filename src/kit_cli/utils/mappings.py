"""Nested lookups over collaborator results.

Framework subsystems hand back either plain mappings or objects with
attributes; :func:`get_path` reads both the same way.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_MISSING = object()


def _step(data: Any, key: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(key, _MISSING)
    return getattr(data, key, _MISSING)


def get_path(data: Any, *path: str, default: Any = None) -> Any:
    """Retrieve a value from nested mappings or attributes.

    Returns *default* when any segment is missing or resolves to ``None``.

    Example:
        get_path({"kit": {"adapter": "node"}}, "kit", "adapter") returns "node"
    """
    current = data
    for key in path:
        if current is None:
            return default
        current = _step(current, key)
        if current is _MISSING:
            return default
    return default if current is None else current
