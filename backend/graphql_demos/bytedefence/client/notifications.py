"""Notification Client — listens to the relay's order groups over a WebSocket.

Invariants:
    - Handlers are registered per relay method (OrderCreated / OrderUpdated / OrderDeleted,
      and the Joined / Left / Error acknowledgments)
    - join_order_group() connects on first use; leave_order_group() only sends while connected
    - Joined groups are re-joined after every reconnect
    - A dropped connection is retried once per entry in reconnect_delays, then given up
    - A failing handler is logged and never stops the receive loop

Design Decisions:
    - The bearer token travels as the access_token query parameter, the form browsers can send
"""

import asyncio
import inspect
import json
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, Sequence
from urllib.parse import urlencode

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from graphql_demos.bytedefence.shared.domain_types import (
    ORDER_CREATED, ORDER_DELETED, ORDER_UPDATED,
)

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[None] | None]

DEFAULT_RECONNECT_DELAYS = (0.0, 2.0, 10.0, 30.0)


def to_websocket_url(url: str) -> str:
    if url.startswith("https://"):
        return "wss://" + url[len("https://"):]
    if url.startswith("http://"):
        return "ws://" + url[len("http://"):]
    return url


class NotificationClient:
    def __init__(
        self,
        hub_url: str,
        token_provider: Callable[[], str | None] | None = None,
        reconnect_delays: Sequence[float] = DEFAULT_RECONNECT_DELAYS,
    ):
        self.hub_url = to_websocket_url(hub_url)
        self._token_provider = token_provider
        self._reconnect_delays = tuple(reconnect_delays)
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self._order_ids: set[str] = set()
        self._connection = None
        self._receiver: asyncio.Task | None = None
        self._stopping = False

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def on(self, method: str, handler: Handler) -> None:
        self._handlers[method].append(handler)

    def on_order_created(self, handler: Handler) -> None:
        self.on(ORDER_CREATED, handler)

    def on_order_updated(self, handler: Handler) -> None:
        self.on(ORDER_UPDATED, handler)

    def on_order_deleted(self, handler: Handler) -> None:
        self.on(ORDER_DELETED, handler)

    def connection_url(self) -> str:
        token = self._token_provider() if self._token_provider else None
        if not token:
            return self.hub_url
        separator = "&" if "?" in self.hub_url else "?"
        return f"{self.hub_url}{separator}{urlencode({'access_token': token})}"

    async def start(self) -> None:
        if self._receiver is not None:
            return
        self._stopping = False
        self._connection = await websockets.connect(self.connection_url())
        self._receiver = asyncio.create_task(self._receive_loop())
        logger.info(f"Connected to notification hub {self.hub_url}")

    async def stop(self) -> None:
        self._stopping = True
        receiver, self._receiver = self._receiver, None
        connection, self._connection = self._connection, None
        if connection is not None:
            await connection.close()
        if receiver is not None:
            receiver.cancel()
            await asyncio.gather(receiver, return_exceptions=True)

    async def join_order_group(self, order_id: str) -> None:
        if self._receiver is None:
            await self.start()
        self._order_ids.add(order_id)
        if self._connection is not None:
            await self._send("join", order_id)

    async def leave_order_group(self, order_id: str) -> None:
        self._order_ids.discard(order_id)
        if self._connection is not None:
            await self._send("leave", order_id)

    async def __aenter__(self) -> "NotificationClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def _send(self, action: str, order_id: str) -> None:
        await self._connection.send(json.dumps({"action": action, "orderId": order_id}))

    async def _receive_loop(self) -> None:
        while not self._stopping:
            try:
                async for raw in self._connection:
                    await self._dispatch(raw)
            except ConnectionClosed as e:
                logger.warning(f"Notification hub connection lost: {e}")
            if self._stopping:
                return
            self._connection = None
            if not await self._reconnect():
                self._receiver = None
                return

    async def _reconnect(self) -> bool:
        for attempt, delay in enumerate(self._reconnect_delays, start=1):
            await asyncio.sleep(delay)
            if self._stopping:
                return False
            try:
                self._connection = await websockets.connect(self.connection_url())
            except (OSError, WebSocketException) as e:
                logger.warning(f"Reconnect attempt {attempt} failed: {e}")
                continue
            for order_id in sorted(self._order_ids):
                await self._send("join", order_id)
            logger.info(f"Reconnected to notification hub after {attempt} attempt(s)")
            return True
        logger.error("Gave up reconnecting to the notification hub")
        return False

    async def _dispatch(self, raw: str | bytes) -> None:
        try:
            frame = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring non-JSON frame from notification hub")
            return
        if not isinstance(frame, dict):
            return
        method = frame.get("method")
        for handler in list(self._handlers.get(method, ())):
            try:
                result = handler(frame.get("data"))
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"Notification handler for {method} failed")
