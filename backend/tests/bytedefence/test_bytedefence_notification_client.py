"""Notification client — joins, handlers and reconnects against a running relay."""

import asyncio

import httpx
import pytest
import uvicorn

import graphql_demos.bytedefence.relay.main as relay_main
from graphql_demos.bytedefence.client.notifications import NotificationClient, to_websocket_url
from graphql_demos.bytedefence.relay.hub import ConnectionGroups

TIMEOUT = 5


@pytest.fixture
async def relay_url(monkeypatch):
    monkeypatch.setattr(relay_main, "groups", ConnectionGroups())
    config = uvicorn.Config(
        relay_main.app, host="127.0.0.1", port=0, lifespan="off", log_level="warning",
    )
    server = uvicorn.Server(config)
    task = asyncio.create_task(server.serve())
    for _ in range(500):
        if server.started:
            break
        await asyncio.sleep(0.01)
    port = server.servers[0].sockets[0].getsockname()[1]
    yield f"http://127.0.0.1:{port}"
    server.should_exit = True
    await task


@pytest.fixture
async def hub(relay_url):
    client = NotificationClient(f"{relay_url}/hubs/notifications", reconnect_delays=(0, 0.1))
    yield client
    await client.stop()


async def _broadcast(relay_url: str, method: str, group: str, data=None) -> None:
    async with httpx.AsyncClient(base_url=relay_url) as http:
        res = await http.post("/api/broadcast", json={"method": method, "group": group, "data": data})
        assert res.json() == {"status": "sent"}


def _queue_for(client: NotificationClient, method: str) -> asyncio.Queue:
    queue: asyncio.Queue = asyncio.Queue()
    client.on(method, queue.put_nowait)
    return queue


def test_http_urls_become_websocket_urls():
    assert to_websocket_url("http://localhost:5000/hubs/notifications") == "ws://localhost:5000/hubs/notifications"
    assert to_websocket_url("https://relay.example/hubs/notifications") == "wss://relay.example/hubs/notifications"
    assert to_websocket_url("ws://already") == "ws://already"


def test_token_is_sent_as_query_parameter():
    client = NotificationClient("http://relay/hubs/notifications", token_provider=lambda: "tok 1")
    assert client.connection_url() == "ws://relay/hubs/notifications?access_token=tok+1"
    assert NotificationClient("http://relay/hub", token_provider=lambda: None).connection_url() == "ws://relay/hub"


async def test_leave_before_connecting_is_a_noop(hub):
    await hub.leave_order_group("42")
    assert not hub.is_connected


async def test_join_connects_and_receives_order_events(hub, relay_url):
    joined = _queue_for(hub, "Joined")
    updated: asyncio.Queue = asyncio.Queue()

    async def on_updated(data):
        await updated.put(data)

    hub.on_order_updated(on_updated)
    await hub.join_order_group("42")

    assert hub.is_connected
    assert await asyncio.wait_for(joined.get(), TIMEOUT) == {"group": "order-42"}
    await _broadcast(relay_url, "OrderUpdated", "order-42", {"id": "42", "title": "New"})
    assert await asyncio.wait_for(updated.get(), TIMEOUT) == {"id": "42", "title": "New"}


async def test_leave_stops_delivery(hub, relay_url):
    joined = _queue_for(hub, "Joined")
    left = _queue_for(hub, "Left")
    deleted: asyncio.Queue = asyncio.Queue()
    hub.on_order_deleted(deleted.put_nowait)

    await hub.join_order_group("42")
    await asyncio.wait_for(joined.get(), TIMEOUT)
    await hub.leave_order_group("42")
    assert await asyncio.wait_for(left.get(), TIMEOUT) == {"group": "order-42"}

    await _broadcast(relay_url, "OrderDeleted", "order-42", {"id": "42"})
    await hub.join_order_group("43")
    await asyncio.wait_for(joined.get(), TIMEOUT)
    assert deleted.empty()


async def test_failing_handler_does_not_stop_delivery(hub, relay_url):
    def broken(data):
        raise ValueError("handler bug")

    hub.on_order_created(broken)
    created = _queue_for(hub, "OrderCreated")
    joined = _queue_for(hub, "Joined")
    await hub.join_order_group("9")
    await asyncio.wait_for(joined.get(), TIMEOUT)

    await _broadcast(relay_url, "OrderCreated", "order-9", {"id": "9"})
    await _broadcast(relay_url, "OrderCreated", "order-9", {"id": "9", "again": True})
    assert await asyncio.wait_for(created.get(), TIMEOUT) == {"id": "9"}
    assert await asyncio.wait_for(created.get(), TIMEOUT) == {"id": "9", "again": True}


async def test_reconnects_and_rejoins_groups(hub, relay_url):
    joined = _queue_for(hub, "Joined")
    updated = _queue_for(hub, "OrderUpdated")
    await hub.join_order_group("42")
    await asyncio.wait_for(joined.get(), TIMEOUT)

    [server_side] = await relay_main.groups.members("order-42")
    await server_side.close()

    assert await asyncio.wait_for(joined.get(), TIMEOUT) == {"group": "order-42"}
    assert hub.is_connected
    await _broadcast(relay_url, "OrderUpdated", "order-42", {"id": "42"})
    assert await asyncio.wait_for(updated.get(), TIMEOUT) == {"id": "42"}


async def test_stop_disconnects(hub):
    await hub.join_order_group("1")
    await hub.stop()
    assert not hub.is_connected
