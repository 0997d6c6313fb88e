# FILE: web/api.py
# PURPOSE: The FastAPI app netprobe serves on the selected address and port.
# It answers the liveness probe and reports selection and monitor state.


import json
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse, PlainTextResponse

from ..probe import NetworkProbe

logger = logging.getLogger(__name__)

BROADCAST_INTERVAL_S = 2


class ConnectionManager:
    """Websocket clients that receive the periodic status broadcast."""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast(self, message: str) -> None:
        for connection in list(self.active_connections):
            try:
                await connection.send_text(message)
            except (WebSocketDisconnect, RuntimeError, OSError) as e:
                logger.debug(f"Dropping status subscriber: {e!r}")
                self.disconnect(connection)


def status_payload(probe: NetworkProbe) -> Dict[str, Any]:
    record = probe.netface
    state = probe.monitor.state
    return {
        'type': 'status',
        'interface': record.to_dict() if record else None,
        'preference': probe.selector.preference,
        'port': probe.port,
        'url': f"http://{record.address}:{probe.port}" if record else None,
        'monitor': {
            'status': state.status.value,
            'consecutive_failures': state.consecutive_failures,
        },
    }


def create_app(probe: NetworkProbe, start_monitor: bool = True) -> FastAPI:
    manager = ConnectionManager()

    async def broadcast_status():
        while True:
            await manager.broadcast(json.dumps(status_payload(probe)))
            await asyncio.sleep(BROADCAST_INTERVAL_S)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        broadcaster = asyncio.create_task(broadcast_status())
        if start_monitor:
            probe.init_live_check()
        try:
            yield
        finally:
            probe.stop_live_check()
            broadcaster.cancel()

    app = FastAPI(lifespan=lifespan)
    app.state.probe = probe
    app.state.manager = manager

    @app.api_route("/", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    async def get_root():
        return "ok"

    @app.get("/api/status", response_class=JSONResponse)
    async def api_status():
        return status_payload(probe)

    @app.get("/api/interfaces", response_class=JSONResponse)
    async def api_interfaces():
        catalog = probe.catalog
        loopback = catalog.loopback_name()
        return [
            {
                'name': name,
                'up': catalog.is_up(name),
                'loopback': name == loopback,
                'records': [record.to_dict() for record in catalog.records(name)],
            }
            for name in catalog.names()
        ]

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await manager.connect(websocket)
        try:
            await websocket.send_text(json.dumps(status_payload(probe)))
            while True: await websocket.receive_text()
        except WebSocketDisconnect: manager.disconnect(websocket)

    return app
