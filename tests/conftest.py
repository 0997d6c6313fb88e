import asyncio
import logging
from typing import Iterable, List, Optional
from urllib.parse import urlparse

import pytest
from netprobe.core.catalog import InterfaceCatalog
from netprobe.core.data_models import AddressFamily, InterfaceRecord, ProbeFailureKind, ProbeResult


def make_record(interface_name: str, address: str, internal: bool = False, **kwargs) -> InterfaceRecord:
    family = AddressFamily.IPV6 if ":" in address else AddressFamily.IPV4
    return InterfaceRecord(
        address=address,
        netmask=kwargs.pop("netmask", "255.255.255.0" if family == AddressFamily.IPV4 else "ffff:ffff:ffff:ffff::"),
        family=family,
        mac=kwargs.pop("mac", "00:11:22:33:44:55"),
        internal=internal,
        interface_name=interface_name,
    )


def make_catalog(**interfaces: Iterable[str]) -> InterfaceCatalog:
    """Builds a catalog from name=[addresses]; any interface named lo* is internal."""
    mapping = {}
    for name, addresses in interfaces.items():
        internal = name.startswith("lo")
        mapping[name] = [make_record(name, address, internal=internal) for address in addresses]
    return InterfaceCatalog(mapping)


class FakeHeadRequest:
    """Scripted stand-in for the aiohttp HEAD capability.

    Either answers from a list of outcomes (True = answered, False = refused),
    repeating the last one, or from a set of ports that have a live listener.
    """

    def __init__(self, outcomes: Optional[List[bool]] = None, busy_ports: Iterable[int] = ()):
        self.outcomes = list(outcomes or [])
        self.busy_ports = set(busy_ports)
        self.calls: List[str] = []
        self.gate: Optional[asyncio.Event] = None

    async def __call__(self, url: str) -> ProbeResult:
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        if self.outcomes:
            ok = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        else:
            ok = urlparse(url).port in self.busy_ports
        if ok:
            return ProbeResult.success(url, 200)
        return ProbeResult.failed(url, ProbeFailureKind.REFUSED, "Connection refused")


@pytest.fixture
def linux_catalog() -> InterfaceCatalog:
    return make_catalog(
        lo=["127.0.0.1", "::1"],
        wlp2s0=["192.168.1.20"],
        enp3s0=["10.0.0.5", "fe80::1"],
        docker0=["172.17.0.1"],
    )


@pytest.fixture
def fake_head() -> FakeHeadRequest:
    return FakeHeadRequest()


@pytest.fixture(autouse=True)
def reset_netprobe_logger():
    """configure_logger() binds handlers to the captured stdout of one test; drop them afterwards."""
    yield
    logger = logging.getLogger("netprobe")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
