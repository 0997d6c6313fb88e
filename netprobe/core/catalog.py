# ==============================================================================
# FILE: core/catalog.py
# PURPOSE: Read-once snapshot of the host's network interfaces.
# ==============================================================================
import ipaddress
import socket
from typing import Dict, Iterable, List, Mapping, Optional

import psutil

from .data_models import AddressFamily, InterfaceRecord
from .validator import is_ipv4_address

LOOPBACK_NAMES = ("lo", "lo0")


def _is_loopback_address(address: str) -> bool:
    try:
        return ipaddress.ip_address(address.split("%", 1)[0]).is_loopback
    except ValueError:
        return False


class InterfaceCatalog:
    """Interface name -> address records, read once and never re-polled.

    Build it from a plain mapping (handy for tests and for callers that
    enumerate interfaces themselves) or from the OS with `from_system()`.
    """

    def __init__(self, interfaces: Mapping[str, Iterable[InterfaceRecord]],
                 up: Optional[Mapping[str, bool]] = None):
        self._interfaces: Dict[str, List[InterfaceRecord]] = {
            name: list(records) for name, records in interfaces.items()
        }
        self._up = dict(up or {})

    @classmethod
    def from_system(cls) -> "InterfaceCatalog":
        """Snapshots psutil.net_if_addrs() and psutil.net_if_stats()."""
        interfaces_addrs = psutil.net_if_addrs()
        interfaces_stats = psutil.net_if_stats()

        interfaces: Dict[str, List[InterfaceRecord]] = {}
        for iface_name, addrs in interfaces_addrs.items():
            mac = ""
            for addr in addrs:
                if addr.family == psutil.AF_LINK:
                    mac = addr.address
                    break

            records = []
            for addr in addrs:
                if addr.family == socket.AF_INET:
                    family = AddressFamily.IPV4
                elif addr.family == socket.AF_INET6:
                    family = AddressFamily.IPV6
                else:
                    continue
                records.append(InterfaceRecord(
                    address=addr.address,
                    netmask=addr.netmask,
                    family=family,
                    mac=mac,
                    internal=_is_loopback_address(addr.address),
                    interface_name=iface_name,
                ))
            interfaces[iface_name] = records

        up = {name: stats.isup for name, stats in interfaces_stats.items()}
        return cls(interfaces, up=up)

    def __contains__(self, name) -> bool:
        return name in self._interfaces

    def __len__(self) -> int:
        return len(self._interfaces)

    def names(self) -> List[str]:
        return list(self._interfaces)

    def records(self, name: str) -> List[InterfaceRecord]:
        return list(self._interfaces.get(name, []))

    def is_up(self, name: str) -> bool:
        """Interfaces without stats are reported as up when they carry addresses."""
        if name in self._up:
            return self._up[name]
        return bool(self._interfaces.get(name))

    def loopback_name(self) -> Optional[str]:
        for name, records in self._interfaces.items():
            if records and all(record.internal for record in records):
                return name
        for name in self._interfaces:
            if name in LOOPBACK_NAMES or name.startswith("Loopback"):
                return name
        return None

    def external_names(self) -> List[str]:
        loopback = self.loopback_name()
        return [name for name in self._interfaces if name != loopback]

    def first_ipv4(self, name: Optional[str]) -> Optional[InterfaceRecord]:
        if name is None:
            return None
        for record in self._interfaces.get(name, []):
            if is_ipv4_address(record.address):
                return record
        return None

    def loopback_record(self) -> Optional[InterfaceRecord]:
        return self.first_ipv4(self.loopback_name())
