# ==============================================================================
# FILE: probe.py
# PURPOSE: One object tying selection, safe-port acquisition and liveness together.
# ==============================================================================
import logging
from typing import Optional

from .core.catalog import InterfaceCatalog
from .core.data_models import MAX_PORT, InterfaceRecord, MissingPreferencePolicy, ProbeConfig, ProbeResult
from .core.errors import NoInterfaceFound
from .core.http import AiohttpHeadRequest, HeadRequest
from .core.monitor import FallbackCallback, LivenessMonitor, NotifyCallback
from .core.prober import PortProber
from .core.selector import InterfaceSelector
from .env_var import NetProbeEnvVar, resolve_bool_env_var, resolve_int_env_var, resolve_str_env_var

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_RETRY_WINDOW_MS = 5000


class NetworkProbe:
    """Auto-detects an interface, finds a safe port on it and watches it stay live.

    Example:
        probe = NetworkProbe(port=3000, verbose=True)
        record = probe.auto_detect()
        port = await probe.use_safe_port()
        # ... bind the HTTP server to record.address:port ...
        probe.init_live_check()
    """

    def __init__(self, port: int = DEFAULT_PORT, on_fallback: Optional[FallbackCallback] = None,
                 verbose: bool = False, on_notify: Optional[NotifyCallback] = None,
                 preference: Optional[str] = None, retry_window_ms: int = DEFAULT_RETRY_WINDOW_MS,
                 catalog: Optional[InterfaceCatalog] = None, head_request: Optional[HeadRequest] = None,
                 missing_policy: MissingPreferencePolicy = MissingPreferencePolicy.LOCALHOST_ALIAS):
        if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= MAX_PORT:
            raise ValueError(f"Port must be an integer between 0 and {MAX_PORT}, got {port!r}")
        if isinstance(retry_window_ms, bool) or not isinstance(retry_window_ms, int) or retry_window_ms <= 0:
            raise ValueError(f"Retry window must be a positive number of milliseconds, got {retry_window_ms!r}")
        self.port = port
        self.verbose = verbose
        self.retry_window_ms = retry_window_ms
        self.on_fallback = on_fallback
        self.on_notify = on_notify
        self.catalog = catalog if catalog is not None else InterfaceCatalog.from_system()
        self.head_request = head_request or AiohttpHeadRequest()
        self.selector = InterfaceSelector(self.catalog, preference=preference, missing_policy=missing_policy)
        self.prober = PortProber(self.head_request)
        self.monitor = LivenessMonitor(self.head_request)

    @classmethod
    def from_env(cls, port: Optional[int] = None, verbose: Optional[bool] = None,
                 preference: Optional[str] = None, retry_window_ms: Optional[int] = None,
                 **kwargs) -> "NetworkProbe":
        """Builds a probe from NETPROBE_* variables; explicit arguments win."""
        return cls(
            port=resolve_int_env_var(NetProbeEnvVar.NETPROBE_PORT, port, DEFAULT_PORT),
            verbose=resolve_bool_env_var(NetProbeEnvVar.NETPROBE_VERBOSE, verbose, False),
            preference=resolve_str_env_var(NetProbeEnvVar.NETPROBE_PREFERENCE, preference),
            retry_window_ms=resolve_int_env_var(
                NetProbeEnvVar.NETPROBE_RETRY_WINDOW_MS, retry_window_ms, DEFAULT_RETRY_WINDOW_MS
            ),
            **kwargs,
        )

    @property
    def netface(self) -> Optional[InterfaceRecord]:
        return self.selector.chosen

    @property
    def url(self) -> str:
        record = self._require_netface()
        return f"http://{record.address}:{self.port}"

    def prefer(self, face: str) -> None:
        self.selector.prefer(face)

    def auto_detect(self) -> InterfaceRecord:
        return self.selector.select()

    async def use_safe_port(self, port: Optional[int] = None) -> int:
        """Finds the first free port from `port` (default: self.port) and keeps it."""
        record = self._require_netface()
        starting_port = self.port if port is None else port
        self.port = await self.prober.find_safe_port(record.address, starting_port)
        return self.port

    def probe_config(self) -> ProbeConfig:
        record = self._require_netface()
        return ProbeConfig(
            address=record.address,
            port=self.port,
            retry_interval_ms=self.retry_window_ms,
            verbose=self.verbose,
        )

    async def live_check(self) -> ProbeResult:
        """Probes the chosen address and port once, outside the monitor."""
        url = self.url
        result = await self.head_request(url)
        if result.ok:
            logger.debug(f"{url} is live")
        else:
            logger.debug(f"{url} heartbeat failed: {result.error}")
        return result

    def init_live_check(self) -> None:
        self.monitor.start(self.probe_config(), self.on_fallback, self.on_notify)

    def stop_live_check(self) -> None:
        self.monitor.stop()

    def _require_netface(self) -> InterfaceRecord:
        record = self.selector.chosen
        if record is None or not record.address:
            raise NoInterfaceFound("Invalid netface. Use auto_detect() to choose a network interface first")
        return record
