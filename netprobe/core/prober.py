# ==============================================================================
# FILE: core/prober.py
# PURPOSE: Finds the lowest port on an address with no HTTP listener answering.
# ==============================================================================
import logging
from typing import Optional

from .data_models import MAX_PORT
from .errors import PortRangeExhausted
from .http import AiohttpHeadRequest, HeadRequest

logger = logging.getLogger(__name__)


class PortProber:
    """Probes ports upward from a starting port, one request at a time.

    The probe only sends outbound requests and never binds, so another
    process may still grab the returned port before the caller binds it.
    Bind straight away.
    """

    def __init__(self, head_request: Optional[HeadRequest] = None):
        self.head_request = head_request or AiohttpHeadRequest()

    async def find_safe_port(self, address: str, starting_port: int) -> int:
        if not address:
            raise ValueError("Invalid address. Select a network interface before probing ports")
        if isinstance(starting_port, bool) or not isinstance(starting_port, int):
            raise TypeError(f"Port must be an integer, got {starting_port!r}")
        if starting_port < 0:
            raise PortRangeExhausted(starting_port)

        port = starting_port
        while port <= MAX_PORT:
            result = await self.head_request(f"http://{address}:{port}")
            if not result.ok:
                logger.debug(f"Port {port} on {address} is free ({result.failure.value})")
                return port
            logger.info(f"EADDRINUSE: port {port} on {address} is already in use, trying {port + 1}")
            port += 1
        raise PortRangeExhausted(starting_port)


async def find_safe_port(address: str, starting_port: int,
                         head_request: Optional[HeadRequest] = None) -> int:
    return await PortProber(head_request).find_safe_port(address, starting_port)
