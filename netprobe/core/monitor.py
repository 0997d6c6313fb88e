# ==============================================================================
# FILE: core/monitor.py
# PURPOSE: Periodic liveness probe with up/down tracking and fallback callbacks.
# ==============================================================================
import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from .data_models import MonitorState, MonitorStatus, ProbeConfig, ProbeFailureKind, ProbeResult
from .http import AiohttpHeadRequest, HeadRequest

logger = logging.getLogger(__name__)

FallbackCallback = Callable[[], None]
NotifyCallback = Callable[[str], None]


def _noop(*args) -> None:
    return None


class LivenessMonitor:
    """Probes http://address:port every `retry_interval_ms` while running.

    The first failure after being up flips the monitor to down, calls the
    fallback once and emits an offline notice. Further failures in the same
    down-episode are reported until `max_silent_failures` is reached, then
    probing carries on silently. The next success emits a back-online notice
    and resets the failure count. Notices are only delivered in verbose mode.
    """

    def __init__(self, head_request: Optional[HeadRequest] = None):
        self._head_request = head_request
        self._probe: Optional[HeadRequest] = head_request
        self._config: Optional[ProbeConfig] = None
        self._state = MonitorState(running=False)
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._on_fallback: FallbackCallback = _noop
        self._on_notify: NotifyCallback = _noop

    @property
    def config(self) -> Optional[ProbeConfig]:
        return self._config

    @property
    def state(self) -> MonitorState:
        return replace(self._state)

    @property
    def status(self) -> MonitorStatus:
        return self._state.status

    @property
    def running(self) -> bool:
        return self._state.running

    def start(self, config: ProbeConfig, on_fallback: Optional[FallbackCallback] = None,
              on_notify: Optional[NotifyCallback] = None) -> None:
        """Schedules the periodic probe on the running event loop, restarting if needed."""
        loop = asyncio.get_running_loop()
        self.stop()

        self._config = config
        self._on_fallback = on_fallback or _noop
        self._on_notify = on_notify or _noop
        self._probe = self._head_request or AiohttpHeadRequest(timeout=config.timeout_s)
        self._state = MonitorState(is_up=True, consecutive_failures=0, running=True)
        self._generation += 1
        self._task = loop.create_task(self._run(self._generation))
        logger.debug(f"Liveness monitor started for {config.url} every {config.retry_interval_ms}ms")

    def stop(self) -> None:
        """Cancels the periodic probe. Safe to call any number of times."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.debug("Liveness monitor stopped")
        self._state.running = False

    async def _run(self, generation: int) -> None:
        interval = self._config.retry_interval_ms / 1000
        while self._state.running and generation == self._generation:
            await asyncio.sleep(interval)
            await self.tick()

    async def tick(self) -> ProbeResult:
        """Runs one probe and applies the resulting state transition."""
        if self._config is None or self._probe is None:
            raise RuntimeError("Liveness monitor has not been started")
        config = self._config
        generation = self._generation
        try:
            result = await self._probe(config.url)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Liveness probe for {config.url} raised {e!r}", exc_info=True)
            result = ProbeResult.failed(config.url, ProbeFailureKind.OTHER, str(e))

        # stop() or a restart may have happened while the request was in flight
        if not self._state.running or generation != self._generation:
            return result

        if result.ok:
            self._on_success(config)
        else:
            self._on_failure(config, result)
        return result

    def _on_success(self, config: ProbeConfig) -> None:
        if self._state.is_up:
            return
        self._state.is_up = True
        self._state.consecutive_failures = 0
        logger.info(f"{config.url} is reachable again")
        self._notify(config, f"Network is back online @ {config.url}")

    def _on_failure(self, config: ProbeConfig, result: ProbeResult) -> None:
        self._state.consecutive_failures += 1
        count = self._state.consecutive_failures
        kind = result.failure.value if result.failure else "other"

        if self._state.is_up:
            self._state.is_up = False
            logger.info(f"{config.url} went offline ({kind})")
            self._call(self._on_fallback)
            self._notify(
                config,
                f"Network is offline... http heartbeat to {config.url} failed ({kind}) "
                f"DT: {datetime.now().isoformat(timespec='seconds')}",
            )
        elif count <= config.max_silent_failures:
            self._notify(
                config,
                f"Network is offline... ({count} attempts) "
                f"Retrying heartbeat in {config.retry_interval_ms / 1000:g} seconds",
            )
        elif count == config.max_silent_failures + 1:
            logger.info(f"{config.url} still offline after {count} attempts, retrying silently")

    def _notify(self, config: ProbeConfig, message: str) -> None:
        if config.verbose:
            self._call(self._on_notify, message)

    @staticmethod
    def _call(callback, *args) -> None:
        try:
            callback(*args)
        except Exception:
            logger.exception("Liveness monitor callback failed")
