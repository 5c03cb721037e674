"""BookStore test fixtures — seeded SQLite database + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite file seeded with the demo catalogue
    - The module-level db_manager is patched so resolvers use the test database
    - graphql() posts one operation and returns the decoded JSON body

Design Decisions:
    - File-backed SQLite in tmp_path: concurrent resolvers open separate connections
      and must all see the same data
"""

import pytest
from httpx import ASGITransport, AsyncClient

import graphql_demos.bookstore.database as db_module
from graphql_demos.bookstore.db.base import Base
from graphql_demos.bookstore.events import TopicEventBus
from graphql_demos.bookstore.graphql.context import BookStoreContext
from graphql_demos.bookstore.main import app
from graphql_demos.bookstore.seed import seed_demo_data
from graphql_demos.common.database import DatabaseSessionManager
from graphql_demos.common.security import Principal

DEMO_TOKEN = "demo-bearer-token-2024"


@pytest.fixture
async def db_manager(tmp_path, monkeypatch):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'bookstore.db'}")
    await manager.create_all(Base.metadata)
    await seed_demo_data(manager)
    monkeypatch.setattr(db_module, "db_manager", manager)
    yield manager
    await manager.dispose()


@pytest.fixture
async def client(db_manager):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {DEMO_TOKEN}"}


@pytest.fixture
def graphql(client):
    async def _post(query: str, variables: dict | None = None, headers: dict | None = None) -> dict:
        body = {"query": query}
        if variables is not None:
            body["variables"] = variables
        res = await client.post("/api/graphql", json=body, headers=headers or {})
        assert res.status_code == 200, res.text
        return res.json()
    return _post


@pytest.fixture
def event_bus():
    return TopicEventBus()


@pytest.fixture
def authed_context(event_bus):
    return BookStoreContext(
        principal=Principal(subject="tester", name="Tester", roles=("User",)),
        event_bus=event_bus,
    )
