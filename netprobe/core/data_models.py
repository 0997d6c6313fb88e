# ==============================================================================
# FILE: core/data_models.py
# PURPOSE: Defines the shared data structures for selection, probing and monitoring.
# ==============================================================================
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional

LOCALHOST_ALIAS = "localhost"
BASE_ALIAS = "0.0.0.0"
MAX_PORT = 65535


class AddressFamily(str, Enum):
    IPV4 = "IPv4"
    IPV6 = "IPv6"


class MissingPreferencePolicy(str, Enum):
    """What to do when a `localhost`/`base` preference matches no interface."""

    FALLBACK = "fallback"
    LOCALHOST_ALIAS = "localhost-alias"


class MonitorStatus(str, Enum):
    STOPPED = "stopped"
    UP = "up"
    DOWN = "down"


class ProbeFailureKind(str, Enum):
    REFUSED = "refused"
    TIMEOUT = "timeout"
    OTHER = "other"


@dataclass(frozen=True)
class InterfaceRecord:
    """One address entry of a named network interface."""

    address: str
    netmask: Optional[str] = None
    family: AddressFamily = AddressFamily.IPV4
    mac: str = ""
    internal: bool = False
    interface_name: str = ""

    def with_address(self, address: str) -> "InterfaceRecord":
        return replace(self, address=address)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["family"] = self.family.value
        return data


@dataclass
class SelectionState:
    chosen_interface: Optional[InterfaceRecord] = None
    preference: Optional[str] = None
    missing_policy: MissingPreferencePolicy = MissingPreferencePolicy.LOCALHOST_ALIAS


@dataclass(frozen=True)
class ProbeConfig:
    """Immutable snapshot handed to the liveness monitor on start."""

    address: str
    port: int
    retry_interval_ms: int = 5000
    max_silent_failures: int = 3
    verbose: bool = False
    timeout_s: float = 2.0

    def __post_init__(self):
        if not self.address:
            raise ValueError("ProbeConfig.address must not be empty")
        if not 0 <= self.port <= MAX_PORT:
            raise ValueError(f"Port {self.port} is outside 0-{MAX_PORT}")
        if self.retry_interval_ms <= 0:
            raise ValueError("retry_interval_ms must be positive")
        if self.max_silent_failures < 1:
            raise ValueError("max_silent_failures must be at least 1")

    @property
    def url(self) -> str:
        return f"http://{self.address}:{self.port}"


@dataclass
class MonitorState:
    is_up: bool = True
    consecutive_failures: int = 0
    running: bool = False

    @property
    def status(self) -> MonitorStatus:
        if not self.running:
            return MonitorStatus.STOPPED
        return MonitorStatus.UP if self.is_up else MonitorStatus.DOWN


@dataclass(frozen=True)
class ProbeResult:
    url: str
    ok: bool
    status_code: Optional[int] = None
    failure: Optional[ProbeFailureKind] = None
    error: Optional[str] = field(default=None, compare=False)

    @classmethod
    def success(cls, url: str, status_code: Optional[int] = None) -> "ProbeResult":
        return cls(url=url, ok=True, status_code=status_code)

    @classmethod
    def failed(cls, url: str, kind: ProbeFailureKind, error: Optional[str] = None) -> "ProbeResult":
        return cls(url=url, ok=False, failure=kind, error=error)
