"""GraphQL Object Types — Order, OrderItem, User and statistics projected from DTOs.

Invariants:
    - Money fields are exposed as Float; the service computes them as Decimal
    - Enum values are the member names (DRAFT, PENDING, ... / USER, ADMIN)
"""

from datetime import datetime

import strawberry

from graphql_demos.bytedefence.shared import schemas
from graphql_demos.bytedefence.shared.domain_types import OrderStatus as OrderStatusValue
from graphql_demos.bytedefence.shared.domain_types import UserRole as UserRoleValue

OrderStatus = strawberry.enum(OrderStatusValue, name="OrderStatus")
UserRole = strawberry.enum(UserRoleValue, name="UserRole")


@strawberry.type
class User:
    id: strawberry.ID
    username: str
    display_name: str
    role: UserRole

    @classmethod
    def from_dto(cls, dto: schemas.UserDTO) -> "User":
        return cls(
            id=strawberry.ID(dto.id),
            username=dto.username,
            display_name=dto.display_name,
            role=dto.role,
        )


@strawberry.type
class OrderItem:
    id: strawberry.ID
    name: str
    quantity: int
    price: float
    line_total: float

    @classmethod
    def from_dto(cls, dto: schemas.OrderItemDTO) -> "OrderItem":
        line_total = dto.line_total if dto.line_total is not None else dto.price * dto.quantity
        return cls(
            id=strawberry.ID(dto.id),
            name=dto.name,
            quantity=dto.quantity,
            price=float(dto.price),
            line_total=float(line_total),
        )


@strawberry.type(description="Represents a purchase order with nested items.")
class Order:
    id: strawberry.ID
    title: str
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    items: list[OrderItem]
    created_by: User | None
    total: float = strawberry.field(description="Computed total of all order items")

    @classmethod
    def from_dto(cls, dto: schemas.OrderDTO) -> "Order":
        return cls(
            id=strawberry.ID(dto.id),
            title=dto.title,
            status=dto.status,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
            items=[OrderItem.from_dto(item) for item in dto.items],
            created_by=User.from_dto(dto.created_by) if dto.created_by else None,
            total=float(dto.total),
        )


@strawberry.type
class OrderStatistics:
    draft: int
    pending: int
    approved: int
    completed: int
    cancelled: int
    total: int

    @classmethod
    def from_dto(cls, dto: schemas.OrderStatistics) -> "OrderStatistics":
        return cls(
            draft=dto.draft,
            pending=dto.pending,
            approved=dto.approved,
            completed=dto.completed,
            cancelled=dto.cancelled,
            total=dto.total,
        )
