import socket
from collections import namedtuple

import psutil
from netprobe.core.catalog import InterfaceCatalog
from netprobe.core.data_models import AddressFamily

from .conftest import make_catalog, make_record

snicaddr = namedtuple("snicaddr", ["family", "address", "netmask", "broadcast", "ptp"])
snicstats = namedtuple("snicstats", ["isup", "duplex", "speed", "mtu"])


class TestInterfaceCatalog:
    def test_names_keep_order(self, linux_catalog):
        assert linux_catalog.names() == ["lo", "wlp2s0", "enp3s0", "docker0"]
        assert len(linux_catalog) == 4
        assert "enp3s0" in linux_catalog
        assert "tun0" not in linux_catalog

    def test_loopback_lookup(self, linux_catalog):
        assert linux_catalog.loopback_name() == "lo"
        assert linux_catalog.external_names() == ["wlp2s0", "enp3s0", "docker0"]
        record = linux_catalog.loopback_record()
        assert record.address == "127.0.0.1"
        assert record.internal

    def test_loopback_by_name_when_not_flagged(self):
        catalog = InterfaceCatalog({
            "en0": [make_record("en0", "192.168.0.3")],
            "lo0": [make_record("lo0", "127.0.0.1", internal=False)],
        })
        assert catalog.loopback_name() == "lo0"

    def test_wlo_is_not_loopback(self):
        catalog = make_catalog(lo=["127.0.0.1"], wlo1=["192.168.0.8"])
        assert catalog.external_names() == ["wlo1"]

    def test_first_ipv4_skips_ipv6(self):
        catalog = make_catalog(wlan0=["fe80::2", "192.168.0.9"])
        assert catalog.first_ipv4("wlan0").address == "192.168.0.9"
        assert catalog.first_ipv4("missing") is None
        assert catalog.first_ipv4(None) is None

    def test_records_are_copies(self, linux_catalog):
        linux_catalog.records("enp3s0").clear()
        assert len(linux_catalog.records("enp3s0")) == 2

    def test_from_system(self, monkeypatch):
        addrs = {
            "lo": [
                snicaddr(socket.AF_INET, "127.0.0.1", "255.0.0.0", None, None),
                snicaddr(psutil.AF_LINK, "00:00:00:00:00:00", None, None, None),
            ],
            "eth0": [
                snicaddr(socket.AF_INET, "10.1.2.3", "255.255.0.0", "10.1.255.255", None),
                snicaddr(socket.AF_INET6, "fe80::abcd%eth0", "ffff:ffff:ffff:ffff::", None, None),
                snicaddr(psutil.AF_LINK, "aa:bb:cc:dd:ee:ff", None, None, None),
            ],
        }
        stats = {
            "lo": snicstats(True, 0, 0, 65536),
            "eth0": snicstats(False, 2, 1000, 1500),
        }
        monkeypatch.setattr(psutil, "net_if_addrs", lambda: addrs)
        monkeypatch.setattr(psutil, "net_if_stats", lambda: stats)

        catalog = InterfaceCatalog.from_system()

        assert catalog.names() == ["lo", "eth0"]
        assert catalog.loopback_name() == "lo"
        ipv4, ipv6 = catalog.records("eth0")
        assert ipv4.address == "10.1.2.3"
        assert ipv4.family == AddressFamily.IPV4
        assert ipv4.mac == "aa:bb:cc:dd:ee:ff"
        assert ipv4.interface_name == "eth0"
        assert not ipv4.internal
        assert ipv6.family == AddressFamily.IPV6
        assert catalog.records("lo")[0].internal
        assert catalog.is_up("lo")
        assert not catalog.is_up("eth0")

    def test_is_up_without_stats(self, linux_catalog):
        assert linux_catalog.is_up("enp3s0")
        assert not linux_catalog.is_up("missing")
