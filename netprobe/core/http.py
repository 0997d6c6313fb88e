# ==============================================================================
# FILE: core/http.py
# PURPOSE: HEAD-request capability used for port probing and liveness checks.
# ==============================================================================
import asyncio
import logging
from typing import Awaitable, Callable

import aiohttp

from .data_models import ProbeFailureKind, ProbeResult

logger = logging.getLogger(__name__)

HeadRequest = Callable[[str], Awaitable[ProbeResult]]


class AiohttpHeadRequest:
    """Sends one HEAD request per call and reports the outcome as a ProbeResult.

    Any HTTP answer counts as success, whatever its status code: something is
    listening. Network errors are classified and returned, never raised.
    """

    def __init__(self, timeout: float = 2.0):
        self.timeout = timeout

    async def __call__(self, url: str) -> ProbeResult:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.head(url, allow_redirects=False) as resp:
                    return ProbeResult.success(url, resp.status)
        except (asyncio.TimeoutError, aiohttp.ServerTimeoutError) as e:
            return self._failed(url, ProbeFailureKind.TIMEOUT, e)
        except (aiohttp.ClientConnectorError, ConnectionRefusedError) as e:
            return self._failed(url, ProbeFailureKind.REFUSED, e)
        except (aiohttp.ClientError, OSError) as e:
            return self._failed(url, ProbeFailureKind.OTHER, e)

    @staticmethod
    def _failed(url: str, kind: ProbeFailureKind, error: Exception) -> ProbeResult:
        logger.debug(f"HEAD {url} failed ({kind.value}): {error!r}")
        return ProbeResult.failed(url, kind, str(error) or type(error).__name__)


async def head_request(url: str, timeout: float = 2.0) -> ProbeResult:
    return await AiohttpHeadRequest(timeout=timeout)(url)
