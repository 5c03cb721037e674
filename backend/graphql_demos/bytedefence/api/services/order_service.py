"""Order Service — order persistence, statistics and change notifications.

Invariants:
    - Every method opens its own session; get_orders() runs its two reads concurrently
    - Orders are returned as OrderDTO with items and creator loaded, total computed
    - Writes commit first, then re-read the order, then broadcast the change
    - update/add_item on a missing order raise OrderNotFoundError ("Order {id} not found")
    - delete_order() returns False for a missing order and never raises for it

Design Decisions:
    - Item reconciliation is a pure diff (core/reconcile_items.py) applied to the
      ORM collection; delete-orphan cascade removes dropped items
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Sequence

from sqlalchemy import func, select

from graphql_demos.bytedefence.api.core.order_stats import build_statistics
from graphql_demos.bytedefence.api.core.reconcile_items import reconcile_items
from graphql_demos.bytedefence.api.database import get_db_manager
from graphql_demos.bytedefence.api.models import Order, OrderItem
from graphql_demos.bytedefence.api.services.notifications import (
    NoOpNotificationService, NotificationService,
)
from graphql_demos.bytedefence.shared.schemas import (
    AddOrderItemInput, CreateOrderInput, OrderDTO, OrderItemDTO,
    OrderStatistics, UpdateOrderInput, UserDTO,
)
from graphql_demos.common.database import DatabaseSessionManager
from graphql_demos.common.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)


class OrderNotFoundError(ResourceNotFoundError):
    def __init__(self, order_id: str):
        super().__init__(
            "Order", order_id, code="ORDER_NOT_FOUND", message=f"Order {order_id} not found",
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def to_order_dto(order: Order) -> OrderDTO:
    creator = order.created_by
    return OrderDTO(
        id=order.id,
        title=order.title,
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
        total=order.total,
        created_by=UserDTO(
            id=creator.id,
            username=creator.username,
            display_name=creator.display_name,
            role=creator.role,
        ) if creator else None,
        items=[
            OrderItemDTO(
                id=item.id,
                name=item.name,
                quantity=item.quantity,
                price=item.price,
                line_total=item.line_total,
            )
            for item in order.items
        ],
    )


class OrderService:
    def __init__(
        self,
        notifications: NotificationService | None = None,
        manager_getter: Callable[[], DatabaseSessionManager] = get_db_manager,
    ):
        self.notifications = notifications or NoOpNotificationService()
        self._manager_getter = manager_getter

    def _session(self):
        return self._manager_getter().session()

    # ─── Reads ──────────────────────────────────────────────────

    async def get_orders(
        self, conditions: Sequence = (), ordering: Sequence = (),
    ) -> list[OrderDTO]:
        """Orders newest-first (unless ordering given), fetched alongside statistics."""
        orders, stats = await asyncio.gather(
            self._list_orders(conditions, ordering), self.get_statistics(),
        )
        logger.info(
            f"Order stats: {stats.total} orders", extra={"stats": stats.model_dump()},
        )
        return orders

    async def _list_orders(self, conditions: Sequence, ordering: Sequence) -> list[OrderDTO]:
        stmt = select(Order).where(*conditions)
        stmt = stmt.order_by(*ordering) if ordering else stmt.order_by(Order.created_at.desc())
        async with self._session() as db:
            rows = (await db.scalars(stmt)).all()
            return [to_order_dto(row) for row in rows]

    async def get_order(self, order_id: str) -> OrderDTO | None:
        async with self._session() as db:
            row = await db.get(Order, order_id)
            return to_order_dto(row) if row else None

    async def get_statistics(self) -> OrderStatistics:
        stmt = select(Order.status, func.count(Order.id)).group_by(Order.status)
        async with self._session() as db:
            grouped = (await db.execute(stmt)).all()
        return build_statistics((status, count) for status, count in grouped)

    # ─── Writes ─────────────────────────────────────────────────

    async def create_order(self, data: CreateOrderInput, current_user: UserDTO) -> OrderDTO:
        now = _utc_now()
        order = Order(
            id=_new_id(),
            title=data.title,
            status=data.status.value,
            created_at=now,
            updated_at=now,
            created_by_user_id=current_user.id,
            items=[
                OrderItem(id=_new_id(), name=i.name, quantity=i.quantity, price=i.price)
                for i in data.items
            ],
        )
        async with self._session() as db:
            db.add(order)
            await db.commit()

        logger.info(f"Order created: {order.id}", extra={"order_id": order.id})
        created = await self._reload(order.id)
        await self.notifications.broadcast_order_created(created)
        return created

    async def update_order(self, data: UpdateOrderInput, current_user: UserDTO) -> OrderDTO:
        async with self._session() as db:
            order = await db.get(Order, data.id)
            if order is None:
                raise OrderNotFoundError(data.id)

            order.title = data.title
            order.status = data.status.value
            order.updated_at = _utc_now()

            plan = reconcile_items(order.items, data.items)
            for item in plan.to_remove:
                order.items.remove(item)
            for item, entry in plan.to_update:
                item.name = entry.name
                item.quantity = entry.quantity
                item.price = entry.price
            for item_id, entry in plan.to_add:
                order.items.append(OrderItem(
                    id=item_id, name=entry.name, quantity=entry.quantity, price=entry.price,
                ))
            await db.commit()

        logger.info(
            f"Order updated by {current_user.username}: removed {len(plan.to_remove)}, "
            f"updated {len(plan.to_update)}, added {len(plan.to_add)} items",
            extra={"order_id": data.id},
        )
        updated = await self._reload(data.id)
        await self.notifications.broadcast_order_updated(updated)
        return updated

    async def delete_order(self, order_id: str) -> bool:
        async with self._session() as db:
            order = await db.get(Order, order_id)
            if order is None:
                return False
            await db.delete(order)
            await db.commit()

        logger.info(f"Order deleted: {order_id}", extra={"order_id": order_id})
        await self.notifications.broadcast_order_deleted(order_id)
        return True

    async def add_order_item(self, data: AddOrderItemInput, current_user: UserDTO) -> OrderDTO:
        async with self._session() as db:
            order = await db.get(Order, data.order_id)
            if order is None:
                raise OrderNotFoundError(data.order_id)
            order.items.append(OrderItem(
                id=_new_id(), name=data.name, quantity=data.quantity, price=data.price,
            ))
            order.updated_at = _utc_now()
            await db.commit()

        updated = await self._reload(data.order_id)
        await self.notifications.broadcast_order_updated(updated)
        return updated

    async def _reload(self, order_id: str) -> OrderDTO:
        order = await self.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order
