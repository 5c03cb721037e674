"""Connection Groups — which WebSocket connections listen to which order group.

Invariants:
    - Membership changes and snapshot reads are serialized by one asyncio.Lock
    - Empty groups are dropped
    - send() delivers {"method", "data"} frames; a failed send drops that connection everywhere
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any

from starlette.websockets import WebSocket, WebSocketDisconnect

from graphql_demos.bytedefence.shared.domain_types import order_group

logger = logging.getLogger(__name__)


class ConnectionGroups:
    def __init__(self):
        self._groups: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def join(self, websocket: WebSocket, order_id: str) -> str:
        group = order_group(order_id)
        async with self._lock:
            self._groups[group].add(websocket)
        logger.debug("Connection joined group", extra={"group": group})
        return group

    async def leave(self, websocket: WebSocket, order_id: str) -> str:
        group = order_group(order_id)
        async with self._lock:
            self._discard(websocket, group)
        return group

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            for group in list(self._groups):
                self._discard(websocket, group)

    async def members(self, group: str) -> list[WebSocket]:
        async with self._lock:
            return list(self._groups.get(group, ()))

    async def send(self, group: str, method: str, data: Any) -> int:
        """Send one frame to every member of the group. Returns the delivery count."""
        delivered = 0
        for websocket in await self.members(group):
            try:
                await websocket.send_json({"method": method, "data": data})
                delivered += 1
            except (WebSocketDisconnect, RuntimeError, OSError) as e:
                logger.warning(
                    f"Dropping connection after failed send: {e}",
                    extra={"group": group, "method": method},
                )
                await self.disconnect(websocket)
        return delivered

    def _discard(self, websocket: WebSocket, group: str) -> None:
        members = self._groups.get(group)
        if members is None:
            return
        members.discard(websocket)
        if not members:
            del self._groups[group]
