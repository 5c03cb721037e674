"""Notification Forwarder — pushes order events to the relay's broadcast endpoint.

Invariants:
    - Each event targets group "order-{id}" with method OrderCreated / OrderUpdated / OrderDeleted
    - Delivery failures (non-2xx or transport errors) are logged as warnings and never raised
    - Mode "Local" forwards over HTTP; every other mode is a no-op

Design Decisions:
    - One shared httpx.AsyncClient per forwarder, closed from the app lifespan
"""

import logging
from typing import Any, Protocol

import httpx

from graphql_demos.bytedefence.api.config import Settings
from graphql_demos.bytedefence.shared.domain_types import (
    ORDER_CREATED, ORDER_DELETED, ORDER_UPDATED, order_group,
)
from graphql_demos.bytedefence.shared.schemas import OrderDTO

logger = logging.getLogger(__name__)


class NotificationService(Protocol):
    async def broadcast_order_created(self, order: OrderDTO) -> None: ...

    async def broadcast_order_updated(self, order: OrderDTO) -> None: ...

    async def broadcast_order_deleted(self, order_id: str) -> None: ...

    async def aclose(self) -> None: ...


class NoOpNotificationService:
    async def broadcast_order_created(self, order: OrderDTO) -> None:
        return None

    async def broadcast_order_updated(self, order: OrderDTO) -> None:
        return None

    async def broadcast_order_deleted(self, order_id: str) -> None:
        return None

    async def aclose(self) -> None:
        return None


class LocalNotificationService:
    """POST {method, group, data} to {hub_url}/api/broadcast."""

    def __init__(
        self,
        hub_url: str,
        access_key: str | None = None,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {access_key}"} if access_key else None
        self._client = httpx.AsyncClient(
            base_url=hub_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def broadcast_order_created(self, order: OrderDTO) -> None:
        await self._send(ORDER_CREATED, order_group(order.id), _order_payload(order))

    async def broadcast_order_updated(self, order: OrderDTO) -> None:
        await self._send(ORDER_UPDATED, order_group(order.id), _order_payload(order))

    async def broadcast_order_deleted(self, order_id: str) -> None:
        await self._send(ORDER_DELETED, order_group(order_id), {"id": order_id})

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, group: str, data: Any) -> None:
        try:
            response = await self._client.post(
                "/api/broadcast", json={"method": method, "group": group, "data": data},
            )
        except httpx.HTTPError as e:
            logger.warning(
                f"Broadcast {method} failed: {e}",
                extra={"method": method, "group": group},
            )
            return
        if not response.is_success:
            logger.warning(
                f"Broadcast {method} failed with {response.status_code}",
                extra={"method": method, "group": group, "status_code": response.status_code},
            )


def _order_payload(order: OrderDTO) -> dict:
    return order.model_dump(mode="json", by_alias=True)


def build_notification_service(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
) -> NotificationService:
    mode = (settings.notification_mode or "").strip().lower()
    if mode == "local":
        logger.info(f"Forwarding order notifications to {settings.notification_hub_url}")
        return LocalNotificationService(
            settings.notification_hub_url,
            access_key=settings.notification_access_key,
            timeout=settings.notification_timeout_seconds,
            transport=transport,
        )
    logger.info(f"Order notifications disabled (mode={settings.notification_mode!r})")
    return NoOpNotificationService()
