from .catalog import InterfaceCatalog
from .data_models import (
    AddressFamily,
    InterfaceRecord,
    MissingPreferencePolicy,
    MonitorState,
    MonitorStatus,
    ProbeConfig,
    ProbeFailureKind,
    ProbeResult,
    SelectionState,
)
from .errors import InvalidPreference, NetProbeError, NoInterfaceFound, PortRangeExhausted
from .http import AiohttpHeadRequest, HeadRequest, head_request
from .monitor import LivenessMonitor
from .prober import PortProber, find_safe_port
from .selector import InterfaceSelector, WIRED_PREFIXES
from .validator import is_ipv4_address

__all__ = [
    "AddressFamily",
    "AiohttpHeadRequest",
    "HeadRequest",
    "InterfaceCatalog",
    "InterfaceRecord",
    "InterfaceSelector",
    "InvalidPreference",
    "LivenessMonitor",
    "MissingPreferencePolicy",
    "MonitorState",
    "MonitorStatus",
    "NetProbeError",
    "NoInterfaceFound",
    "PortProber",
    "PortRangeExhausted",
    "ProbeConfig",
    "ProbeFailureKind",
    "ProbeResult",
    "SelectionState",
    "WIRED_PREFIXES",
    "find_safe_port",
    "head_request",
    "is_ipv4_address",
]
