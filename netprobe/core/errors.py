# ==============================================================================
# FILE: core/errors.py
# PURPOSE: Errors surfaced to callers of selection and port acquisition.
# ==============================================================================
from typing import Optional


class NetProbeError(Exception):
    """Base class for fatal netprobe errors."""


class NoInterfaceFound(NetProbeError):
    def __init__(self, message: Optional[str] = None, interface: Optional[str] = None):
        self.interface = interface
        if message is None:
            if interface:
                message = f"Network interface {interface} has no IPv4 address"
            else:
                message = "No network interface with an IPv4 address was found"
        super().__init__(message)


class PortRangeExhausted(NetProbeError):
    def __init__(self, starting_port: int):
        self.starting_port = starting_port
        super().__init__(f"No free port found between {starting_port} and 65535")


class InvalidPreference(NetProbeError, TypeError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Interface preference must be a non-empty string, got {value!r}")
