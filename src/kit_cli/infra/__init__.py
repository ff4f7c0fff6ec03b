"""Infrastructure layer: the operating system and the framework packages.

This layer probes ports, enumerates network interfaces, spawns the
browser, and imports framework subsystems.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from kit_cli.infra.browser import launch, open_command
from kit_cli.infra.interfaces import network_interfaces
from kit_cli.infra.ports import blame, is_port_free
from kit_cli.infra.subsystems import default_registry, load_target

__all__: list[str] = [
    "blame",
    "default_registry",
    "is_port_free",
    "launch",
    "load_target",
    "network_interfaces",
    "open_command",
]
