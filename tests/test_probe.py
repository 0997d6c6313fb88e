import pytest
from netprobe.core.data_models import MonitorStatus
from netprobe.core.errors import InvalidPreference, NoInterfaceFound
from netprobe.probe import DEFAULT_PORT, DEFAULT_RETRY_WINDOW_MS, NetworkProbe

from .conftest import FakeHeadRequest


@pytest.fixture
def probe(linux_catalog):
    return NetworkProbe(catalog=linux_catalog, head_request=FakeHeadRequest(busy_ports={3000}))


class TestNetworkProbe:
    def test_defaults(self, probe):
        assert probe.port == DEFAULT_PORT
        assert probe.retry_window_ms == DEFAULT_RETRY_WINDOW_MS
        assert not probe.verbose
        assert probe.netface is None

    def test_auto_detect(self, probe):
        record = probe.auto_detect()
        assert record.interface_name == "enp3s0"
        assert probe.netface == record
        assert probe.url == "http://10.0.0.5:3000"

    def test_prefer(self, probe):
        probe.prefer("base")
        assert probe.auto_detect().address == "0.0.0.0"
        with pytest.raises(InvalidPreference):
            probe.prefer(5)

    @pytest.mark.asyncio
    async def test_safe_port_requires_detection(self, probe):
        with pytest.raises(NoInterfaceFound):
            await probe.use_safe_port()

    @pytest.mark.asyncio
    async def test_use_safe_port(self, probe):
        probe.auto_detect()
        assert await probe.use_safe_port() == 3001
        assert probe.port == 3001
        assert probe.url == "http://10.0.0.5:3001"

    @pytest.mark.asyncio
    async def test_use_safe_port_from_explicit_port(self, probe):
        probe.auto_detect()
        assert await probe.use_safe_port(4000) == 4000

    @pytest.mark.asyncio
    async def test_live_check(self, probe):
        probe.auto_detect()
        assert (await probe.live_check()).ok
        probe.port = 3005
        assert not (await probe.live_check()).ok

    @pytest.mark.asyncio
    async def test_live_check_lifecycle(self, probe):
        probe.auto_detect()
        probe.init_live_check()
        assert probe.monitor.status == MonitorStatus.UP
        assert probe.monitor.config.url == "http://10.0.0.5:3000"
        probe.stop_live_check()
        probe.stop_live_check()
        assert probe.monitor.status == MonitorStatus.STOPPED


class TestFromEnv:
    def test_reads_environment(self, monkeypatch, linux_catalog):
        monkeypatch.setenv("NETPROBE_PORT", "8080")
        monkeypatch.setenv("NETPROBE_VERBOSE", "yes")
        monkeypatch.setenv("NETPROBE_PREFERENCE", "wlp")
        monkeypatch.setenv("NETPROBE_RETRY_WINDOW_MS", "250")
        probe = NetworkProbe.from_env(catalog=linux_catalog, head_request=FakeHeadRequest())
        assert probe.port == 8080
        assert probe.verbose
        assert probe.retry_window_ms == 250
        assert probe.auto_detect().address == "192.168.1.20"

    def test_arguments_win(self, monkeypatch, linux_catalog):
        monkeypatch.setenv("NETPROBE_PORT", "8080")
        monkeypatch.setenv("NETPROBE_VERBOSE", "1")
        probe = NetworkProbe.from_env(port=9000, verbose=False, catalog=linux_catalog)
        assert probe.port == 9000
        assert not probe.verbose

    def test_defaults_without_environment(self, monkeypatch, linux_catalog):
        for name in ("NETPROBE_PORT", "NETPROBE_VERBOSE", "NETPROBE_PREFERENCE", "NETPROBE_RETRY_WINDOW_MS"):
            monkeypatch.delenv(name, raising=False)
        probe = NetworkProbe.from_env(catalog=linux_catalog)
        assert probe.port == DEFAULT_PORT
        assert probe.selector.preference is None


class TestConstructorValidation:
    @pytest.mark.parametrize("port", [-1, 65536, "3000", True])
    def test_bad_port(self, linux_catalog, port):
        with pytest.raises(ValueError):
            NetworkProbe(port=port, catalog=linux_catalog)

    @pytest.mark.parametrize("retry_window_ms", [0, -5, 1.5])
    def test_bad_retry_window(self, linux_catalog, retry_window_ms):
        with pytest.raises(ValueError):
            NetworkProbe(retry_window_ms=retry_window_ms, catalog=linux_catalog)

    def test_bad_environment(self, monkeypatch, linux_catalog):
        monkeypatch.setenv("NETPROBE_RETRY_WINDOW_MS", "-1")
        with pytest.raises(ValueError):
            NetworkProbe.from_env(catalog=linux_catalog)
