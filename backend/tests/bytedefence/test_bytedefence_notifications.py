"""Notification forwarding to the relay's broadcast endpoint."""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from graphql_demos.bytedefence.api.config import Settings
from graphql_demos.bytedefence.api.services.notifications import (
    LocalNotificationService, NoOpNotificationService, build_notification_service,
)
from graphql_demos.bytedefence.shared.domain_types import OrderStatus
from graphql_demos.bytedefence.shared.schemas import OrderDTO


def _order() -> OrderDTO:
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    return OrderDTO(
        id="order-9", title="Kit", status=OrderStatus.DRAFT,
        created_at=now, updated_at=now, total=Decimal("10.00"),
    )


@pytest.fixture
def captured():
    return []


@pytest.fixture
def forwarder(captured):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"status": "sent"})
    return LocalNotificationService(
        "http://relay.test/", access_key="secret", transport=httpx.MockTransport(handler),
    )


async def test_created_event_payload(forwarder, captured):
    await forwarder.broadcast_order_created(_order())
    await forwarder.aclose()

    request = captured[0]
    assert request.url == "http://relay.test/api/broadcast"
    assert request.headers["authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body["method"] == "OrderCreated"
    assert body["group"] == "order-order-9"
    assert body["data"]["status"] == "DRAFT"
    assert body["data"]["total"] == 10.0


async def test_updated_and_deleted_events(forwarder, captured):
    await forwarder.broadcast_order_updated(_order())
    await forwarder.broadcast_order_deleted("order-9")
    await forwarder.aclose()

    bodies = [json.loads(r.content) for r in captured]
    assert [b["method"] for b in bodies] == ["OrderUpdated", "OrderDeleted"]
    assert bodies[1] == {"method": "OrderDeleted", "group": "order-order-9", "data": {"id": "order-9"}}


async def test_non_success_status_is_logged_not_raised(caplog):
    service = LocalNotificationService(
        "http://relay.test", transport=httpx.MockTransport(lambda r: httpx.Response(503)),
    )
    with caplog.at_level(logging.WARNING):
        await service.broadcast_order_deleted("order-1")
    await service.aclose()
    assert "failed with 503" in caplog.text


async def test_transport_error_is_logged_not_raised(caplog):
    def handler(request):
        raise httpx.ConnectError("relay down", request=request)

    service = LocalNotificationService("http://relay.test", transport=httpx.MockTransport(handler))
    with caplog.at_level(logging.WARNING):
        await service.broadcast_order_created(_order())
    await service.aclose()
    assert "Broadcast OrderCreated failed" in caplog.text


def test_no_authorization_header_without_access_key():
    service = LocalNotificationService("http://relay.test")
    assert "authorization" not in service._client.headers


@pytest.mark.parametrize("mode", ["Local", "local", " LOCAL "])
def test_local_mode_builds_forwarder(mode):
    service = build_notification_service(Settings(notification_mode=mode))
    assert isinstance(service, LocalNotificationService)


@pytest.mark.parametrize("mode", ["None", "Azure", ""])
def test_other_modes_disable_forwarding(mode):
    service = build_notification_service(Settings(notification_mode=mode))
    assert isinstance(service, NoOpNotificationService)
