"""Shared pytest fixtures and configuration for the kit-cli test suite.

Guidelines
----------
* No real framework subsystems: every subsystem is a mock registered
  in a :class:`~kit_cli.core.registry.SubsystemRegistry`.
* No real browser and no real interface enumeration in CLI tests.
* Tests must not depend on OS state.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from kit_cli.core.models import InterfaceRecord
from kit_cli.core.registry import SubsystemRegistry
from kit_cli.core.settings import Settings

LAN_ADDRESS = "192.168.1.5"


def _dev_result(address: str = "localhost", port: int = 5173) -> dict[str, Any]:
    return {
        "address_info": {"address": address, "port": port},
        "server_config": {
            "https": False,
            "open": False,
            "fs": {"strict": True, "allow": []},
        },
    }


class FakeFramework:
    """Stand-in subsystems wired into a registry, with call recording."""

    def __init__(self) -> None:
        self.config: dict[str, Any] = {"kit": {"adapter": None}}
        self.load_config = MagicMock(side_effect=lambda **_: self.config)
        self.dev = MagicMock(return_value=_dev_result())
        self.build = MagicMock(
            return_value={"build_data": {"app": "data"}, "prerendered": {"pages": []}},
        )
        self.adapt = MagicMock(return_value=None)
        self.preview = MagicMock(return_value=None)
        self.package = MagicMock(return_value=None)
        self.sync = MagicMock(return_value=None)

    def dev_serves_on(self, address: str, port: int = 5173, **fs: Any) -> None:
        result = _dev_result(address, port)
        result["server_config"]["fs"].update(fs)
        self.dev.return_value = result

    @property
    def registry(self) -> SubsystemRegistry:
        subsystems = {
            "config": self.load_config,
            "dev": self.dev,
            "build": self.build,
            "adapt": self.adapt,
            "preview": self.preview,
            "package": self.package,
            "sync": self.sync,
        }
        registry = SubsystemRegistry()
        for name, subsystem in subsystems.items():
            registry.provide(name, subsystem)
        return registry


@pytest.fixture
def framework() -> FakeFramework:
    return FakeFramework()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def interfaces() -> list[InterfaceRecord]:
    return [
        InterfaceRecord(name="lo", family="IPv4", address="127.0.0.1", internal=True),
        InterfaceRecord(name="lo", family="IPv6", address="::1", internal=True),
        InterfaceRecord(
            name="eth0",
            family="IPv4",
            address=LAN_ADDRESS,
            internal=False,
            mac="aa:bb:cc:dd:ee:ff",
        ),
    ]


@pytest.fixture(autouse=True)
def fake_network(
    monkeypatch: pytest.MonkeyPatch,
    interfaces: list[InterfaceRecord],
) -> MagicMock:
    """Pin the interface snapshot and stub out the browser launch.

    Returns the launch mock.
    """
    launch = MagicMock()
    monkeypatch.setattr("kit_cli.cli.welcome.network_interfaces", lambda: interfaces)
    monkeypatch.setattr("kit_cli.cli.welcome.launch", launch)
    return launch
