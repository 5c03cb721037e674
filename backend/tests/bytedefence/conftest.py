"""ByteDefence test fixtures — seeded SQLite database, services and an HTTP client.

Invariants:
    - Every test gets a fresh SQLite file with the demo users and orders
    - Notifications are captured in memory instead of reaching a relay
    - Bearer tokens are minted by the same AuthService settings the app uses
"""

import pytest
from httpx import ASGITransport, AsyncClient

import graphql_demos.bytedefence.api.database as db_module
from graphql_demos.bytedefence.api.config import Settings
from graphql_demos.bytedefence.api.db.base import Base
from graphql_demos.bytedefence.api.dependencies import get_order_service
from graphql_demos.bytedefence.api.graphql.context import GraphQLContext
from graphql_demos.bytedefence.api.main import app
from graphql_demos.bytedefence.api.seed import seed_demo_data
from graphql_demos.bytedefence.api.services.auth_service import DEMO_ACCOUNTS, AuthService
from graphql_demos.bytedefence.api.services.order_service import OrderService
from graphql_demos.common.database import DatabaseSessionManager


class RecordingNotifications:
    """Captures broadcasts as (method, order_id) tuples."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def broadcast_order_created(self, order) -> None:
        self.sent.append(("OrderCreated", order.id))

    async def broadcast_order_updated(self, order) -> None:
        self.sent.append(("OrderUpdated", order.id))

    async def broadcast_order_deleted(self, order_id: str) -> None:
        self.sent.append(("OrderDeleted", order_id))

    async def aclose(self) -> None:
        return None


@pytest.fixture
async def db_manager(tmp_path, monkeypatch):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'bytedefence.db'}")
    await manager.create_all(Base.metadata)
    await seed_demo_data(manager)
    monkeypatch.setattr(db_module, "db_manager", manager)
    yield manager
    await manager.dispose()


@pytest.fixture
def notifications():
    return RecordingNotifications()


@pytest.fixture
def order_service(db_manager, notifications):
    return OrderService(notifications)


@pytest.fixture
def auth_service():
    return AuthService(Settings())


@pytest.fixture
def admin_user():
    return DEMO_ACCOUNTS["admin"].user


@pytest.fixture
def analyst_user():
    return DEMO_ACCOUNTS["user"].user


@pytest.fixture
def token_for(auth_service):
    def _token(username: str) -> str:
        return auth_service.create_token(DEMO_ACCOUNTS[username].user)[0]
    return _token


@pytest.fixture
def context_for(auth_service, order_service):
    """GraphQLContext for direct schema.execute calls; None means anonymous."""
    def _context(username: str | None) -> GraphQLContext:
        principal = None
        if username is not None:
            token = auth_service.create_token(DEMO_ACCOUNTS[username].user)[0]
            principal = auth_service.validate_token(token)
        return GraphQLContext(
            principal=principal, auth_service=auth_service, order_service=order_service,
        )
    return _context


@pytest.fixture
async def client(order_service):
    app.dependency_overrides[get_order_service] = lambda: order_service
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def graphql(client, token_for):
    async def _post(query: str, variables: dict | None = None, user: str = "admin") -> dict:
        body = {"query": query}
        if variables is not None:
            body["variables"] = variables
        res = await client.post(
            "/api/graphql", json=body, headers={"Authorization": f"Bearer {token_for(user)}"},
        )
        assert res.status_code == 200, res.text
        return res.json()
    return _post
