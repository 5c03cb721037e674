"""Demo data for an empty ByteDefence database: two users and two orders with items."""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select

from graphql_demos.bytedefence.api.models import Order, OrderItem, User
from graphql_demos.bytedefence.api.services.auth_service import DEMO_ACCOUNTS
from graphql_demos.bytedefence.shared.domain_types import OrderStatus
from graphql_demos.common.database import DatabaseSessionManager

logger = logging.getLogger(__name__)


def build_demo_orders(now: datetime) -> list[Order]:
    return [
        Order(
            id="order-1",
            title="Network refresh",
            status=OrderStatus.PENDING.value,
            created_at=now - timedelta(days=3),
            updated_at=now - timedelta(days=1),
            created_by_user_id="user-admin",
            items=[
                OrderItem(id="item-1", name="Firewall appliance", quantity=2, price=Decimal("1200")),
                OrderItem(id="item-2", name="Switch stack", quantity=4, price=Decimal("750")),
            ],
        ),
        Order(
            id="order-2",
            title="SOC tooling uplift",
            status=OrderStatus.APPROVED.value,
            created_at=now - timedelta(days=10),
            updated_at=now - timedelta(days=2),
            created_by_user_id="user-analyst",
            items=[
                OrderItem(id="item-3", name="SIEM license", quantity=50, price=Decimal("15")),
                OrderItem(id="item-4", name="SOAR playbook build", quantity=1, price=Decimal("5500")),
            ],
        ),
    ]


async def seed_demo_data(manager: DatabaseSessionManager) -> bool:
    """Insert demo users and orders when the users table is empty. Returns True if seeded."""
    async with manager.session() as db:
        existing = await db.scalar(select(func.count()).select_from(User))
        if existing:
            return False

        db.add_all(
            User(
                id=account.user.id,
                username=account.user.username,
                display_name=account.user.display_name,
                role=account.user.role.value,
            )
            for account in DEMO_ACCOUNTS.values()
        )
        await db.flush()
        orders = build_demo_orders(datetime.now(timezone.utc))
        db.add_all(orders)
        await db.commit()

    logger.info(f"Seeded ByteDefence demo data: {len(DEMO_ACCOUNTS)} users, {len(orders)} orders")
    return True
