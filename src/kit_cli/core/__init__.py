"""Core layer: domain models, settings, and pure decision rules.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from kit_cli.core.exposure import is_exposed, reportable_interfaces
from kit_cli.core.models import Command, InterfaceRecord, Option, ServerBinding
from kit_cli.core.registry import SUBSYSTEMS, SubsystemRegistry
from kit_cli.core.settings import Settings

__all__: list[str] = [
    "Command",
    "InterfaceRecord",
    "Option",
    "SUBSYSTEMS",
    "ServerBinding",
    "Settings",
    "SubsystemRegistry",
    "is_exposed",
    "reportable_interfaces",
]
