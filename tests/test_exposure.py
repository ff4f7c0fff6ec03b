"""Tests for the exposure classification rules (core/exposure.py).

Pure functions; no I/O, no mocking required.
"""

from __future__ import annotations

import os

import pytest

from kit_cli.core.exposure import is_exposed, relative_paths, reportable_interfaces
from kit_cli.core.models import PLACEHOLDER_MAC, InterfaceRecord


def _iface(
    address: str,
    *,
    family: str = "IPv4",
    internal: bool = False,
    mac: str = "aa:bb:cc:dd:ee:ff",
) -> InterfaceRecord:
    return InterfaceRecord(name="eth0", family=family, address=address, internal=internal, mac=mac)


class TestIsExposed:
    @pytest.mark.parametrize("host", ["localhost", "127.0.0.1", None])
    def test_loopback_or_unset_is_not_exposed(self, host: str | None) -> None:
        assert is_exposed(host) is False

    @pytest.mark.parametrize("host", ["0.0.0.0", "192.168.1.5", "::", "my-laptop.local", ""])
    def test_any_other_host_is_exposed(self, host: str) -> None:
        assert is_exposed(host) is True


class TestReportableInterfaces:
    def test_ipv6_is_dropped(self) -> None:
        records = [_iface("fe80::1", family="IPv6"), _iface("::1", family="IPv6", internal=True)]
        assert list(reportable_interfaces(records)) == []

    def test_external_placeholder_mac_is_dropped(self) -> None:
        records = [_iface("172.17.0.1", mac=PLACEHOLDER_MAC)]
        assert list(reportable_interfaces(records)) == []

    def test_internal_placeholder_mac_is_kept(self) -> None:
        loopback = _iface("127.0.0.1", internal=True, mac=PLACEHOLDER_MAC)
        assert list(reportable_interfaces([loopback])) == [loopback]

    def test_order_is_preserved(self) -> None:
        first = _iface("127.0.0.1", internal=True)
        second = _iface("192.168.1.5")
        third = _iface("10.0.0.7")
        assert list(reportable_interfaces([first, second, third])) == [first, second, third]


class TestRelativePaths:
    def test_paths_are_relative_to_cwd(self, tmp_path: os.PathLike[str]) -> None:
        cwd = os.fspath(tmp_path)
        paths = [os.path.join(cwd, "src", "lib"), os.path.join(cwd, "static")]
        assert relative_paths(paths, cwd) == [
            os.path.join("src", "lib"),
            "static",
        ]

    def test_outside_cwd_walks_up(self, tmp_path: os.PathLike[str]) -> None:
        cwd = os.path.join(os.fspath(tmp_path), "app")
        sibling = os.path.join(os.fspath(tmp_path), "shared")
        assert relative_paths([sibling], cwd) == [os.path.join("..", "shared")]
