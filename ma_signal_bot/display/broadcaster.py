"""Websocket fan-out of snapshots to browser dashboards."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional, Set

import websockets

from ma_signal_bot.config.constants import DEFAULT_WS_HOST, DEFAULT_WS_PORT
from ma_signal_bot.display.console import snapshot_to_dict
from ma_signal_bot.logging.display_log import get_display_logger
from ma_signal_bot.strategy.ma_crossover import TickSnapshot

logger = get_display_logger()


class SnapshotBroadcaster:
    """Serves ws://host:port and pushes every snapshot to connected clients."""

    def __init__(self, host: str = DEFAULT_WS_HOST, port: int = DEFAULT_WS_PORT) -> None:
        self.host = host
        self.port = port
        self.connected: Set[Any] = set()
        self._server: Optional[Any] = None

    async def handler(self, ws: Any) -> None:
        self.connected.add(ws)
        try:
            await ws.wait_closed()
        finally:
            self.connected.discard(ws)

    async def start(self) -> None:
        self._server = await websockets.serve(self.handler, self.host, self.port)
        logger.info("websocket dashboard feed on ws://%s:%d", self.host, self.port)

    async def broadcast(self, snapshot: TickSnapshot) -> None:
        """Send the snapshot to all clients; a failed send only logs."""
        if not self.connected:
            return
        data = json.dumps(snapshot_to_dict(snapshot))
        clients = list(self.connected)
        results = await asyncio.gather(
            *(ws.send(data) for ws in clients),
            return_exceptions=True,
        )
        for ws, result in zip(clients, results):
            if isinstance(result, Exception):
                logger.warning("websocket send failed: %s", result)

    async def close(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None
