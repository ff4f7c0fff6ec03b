"""Infrastructure: snapshot of the local network interfaces."""

from __future__ import annotations

import ipaddress
import socket

import psutil

from kit_cli.core.models import PLACEHOLDER_MAC, InterfaceRecord

_FAMILIES: dict[int, str] = {
    socket.AF_INET: "IPv4",
    socket.AF_INET6: "IPv6",
}


def _normalize_mac(mac: str | None) -> str:
    """Lower-case, colon-separated hardware address (Windows uses dashes)."""
    if not mac:
        return PLACEHOLDER_MAC
    return mac.replace("-", ":").lower()


def _is_internal(address: str) -> bool:
    # Scoped IPv6 addresses carry a "%zone" suffix.
    try:
        return ipaddress.ip_address(address.split("%", 1)[0]).is_loopback
    except ValueError:
        return False


def network_interfaces() -> list[InterfaceRecord]:
    """Return one :class:`InterfaceRecord` per IPv4/IPv6 address.

    Addresses of other families (link-layer entries) only contribute the
    interface's hardware address.
    """
    records: list[InterfaceRecord] = []
    for name, addresses in psutil.net_if_addrs().items():
        mac = next(
            (addr.address for addr in addresses if addr.family == psutil.AF_LINK),
            None,
        )
        for addr in addresses:
            family = _FAMILIES.get(addr.family)
            if family is None:
                continue
            records.append(
                InterfaceRecord(
                    name=name,
                    family=family,
                    address=addr.address,
                    internal=_is_internal(addr.address),
                    mac=_normalize_mac(mac),
                )
            )
    return records
