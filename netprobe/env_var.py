"""Environment variable configuration."""

from __future__ import annotations

import os
from enum import Enum

__all__ = [
    "NetProbeEnvVar",
    "resolve_bool_env_var",
    "resolve_int_env_var",
    "resolve_str_env_var",
]


class NetProbeEnvVar(Enum):
    """Environment variables read by netprobe."""

    NETPROBE_PREFERENCE = "NETPROBE_PREFERENCE"
    """Interface-name prefix to prefer, or one of the `localhost` / `base` aliases."""

    NETPROBE_PORT = "NETPROBE_PORT"
    """Port the safe-port search starts from."""

    NETPROBE_VERBOSE = "NETPROBE_VERBOSE"
    """Emit diagnostic notices for every monitor state change."""

    NETPROBE_RETRY_WINDOW_MS = "NETPROBE_RETRY_WINDOW_MS"
    """Milliseconds between two liveness probes."""


_TRUTHY_VALUES = {"1", "true", "yes", "on"}
_FALSY_VALUES = {"0", "false", "no", "off"}


def resolve_bool_env_var(
    env_var: NetProbeEnvVar, override: bool | None = None, fallback: bool | None = None
) -> bool | None:
    """Resolve a boolean environment variable.

    Args:
        env_var: The environment variable to resolve.
        override: Optional override supplied by the caller.
        fallback: Default value if the environment variable is not set.
    """

    if override is not None:
        return override

    env_value = os.getenv(env_var.value)
    if env_value is None:
        return fallback

    normalized = env_value.strip().lower()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False

    raise ValueError(f"{env_var.value} can be only true or false, but got {env_value}")


def resolve_int_env_var(
    env_var: NetProbeEnvVar, override: int | None = None, fallback: int | None = None
) -> int | None:
    """Resolve an integer environment variable.

    Args:
        env_var: The environment variable to resolve.
        override: Optional override supplied by the caller.
        fallback: Default value if the environment variable is not set.
    """

    if override is not None:
        return override

    env_value = os.getenv(env_var.value)
    if env_value is None:
        return fallback

    try:
        return int(env_value.strip())
    except ValueError as exc:
        raise ValueError(f"{env_var.value} must be an integer, but got {env_value}") from exc


def resolve_str_env_var(
    env_var: NetProbeEnvVar, override: str | None = None, fallback: str | None = None
) -> str | None:
    """Resolve a string environment variable; empty values count as unset."""

    if override is not None:
        return override

    env_value = os.getenv(env_var.value)
    if env_value is None or not env_value.strip():
        return fallback
    return env_value.strip()
