"""Wire the ByteDefence client from settings: auth and orders share one httpx.AsyncClient."""

from dataclasses import dataclass

import httpx

from graphql_demos.bytedefence.client.auth_client import AuthClient
from graphql_demos.bytedefence.client.config import Settings, get_settings
from graphql_demos.bytedefence.client.notifications import NotificationClient
from graphql_demos.bytedefence.client.order_client import OrderApiClient
from graphql_demos.bytedefence.client.token_store import (
    JsonFileTokenStore, MemoryTokenStore, TokenStore,
)


@dataclass
class ByteDefenceClient:
    http: httpx.AsyncClient
    auth: AuthClient
    orders: OrderApiClient
    notifications: NotificationClient

    async def aclose(self) -> None:
        await self.notifications.stop()
        await self.http.aclose()

    async def __aenter__(self) -> "ByteDefenceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def build_client(
    settings: Settings | None = None,
    store: TokenStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ByteDefenceClient:
    settings = settings or get_settings()
    if store is None:
        store = JsonFileTokenStore(settings.token_file) if settings.token_file else MemoryTokenStore()
    http = httpx.AsyncClient(
        base_url=settings.api_url, timeout=settings.timeout_seconds, transport=transport,
    )
    auth = AuthClient(http, store)
    return ByteDefenceClient(
        http=http,
        auth=auth,
        orders=OrderApiClient(http, auth, settings.graphql_endpoint),
        notifications=NotificationClient(settings.hub_url, token_provider=auth.get_token),
    )
