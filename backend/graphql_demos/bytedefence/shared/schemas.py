"""ByteDefence Schemas — Pydantic DTOs shared by the API boundary and the client.

Invariants:
    - JSON field names are camelCase (alias_generator); Python names stay snake_case
    - Order title and item name: required, at most 120 characters
    - Item quantity >= 1, price >= 0.01
    - CreateOrderInput.status defaults to Draft; UpdateOrderInput.status to Pending
    - OrderStatistics.total is always the sum of the per-status counts

Design Decisions:
    - Money is Decimal in Python, a JSON number on the wire
    - Enums serialize to their GraphQL names so DTOs can be sent as GraphQL variables
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import (
    BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer,
    computed_field, field_validator,
)
from pydantic.alias_generators import to_camel

from graphql_demos.bytedefence.shared.domain_types import OrderStatus, UserRole

MAX_NAME_LENGTH = 120

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Price = Annotated[Money, Field(ge=Decimal("0.01"))]
WireOrderStatus = Annotated[
    OrderStatus,
    BeforeValidator(OrderStatus.parse),
    PlainSerializer(lambda v: v.name, return_type=str, when_used="json"),
]
WireUserRole = Annotated[
    UserRole,
    BeforeValidator(UserRole.parse),
    PlainSerializer(lambda v: v.name, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _require_text(value: str, label: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{label} is required")
    return value


# ─── Inputs ─────────────────────────────────────────────────────

class CreateOrderItemInput(CamelModel):
    name: str = Field(max_length=MAX_NAME_LENGTH)
    quantity: int = Field(ge=1)
    price: Price

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        return _require_text(v, "Name")


class UpdateOrderItemInput(CreateOrderItemInput):
    """Item in an update; id None (or blank) means a new item."""
    id: str | None = None


class AddOrderItemInput(CreateOrderItemInput):
    order_id: str = Field(min_length=1)


class CreateOrderInput(CamelModel):
    title: str = Field(max_length=MAX_NAME_LENGTH)
    status: WireOrderStatus = OrderStatus.DRAFT
    items: list[CreateOrderItemInput] = []

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        return _require_text(v, "Title")


class UpdateOrderInput(CamelModel):
    id: str = Field(min_length=1)
    title: str = Field(max_length=MAX_NAME_LENGTH)
    status: WireOrderStatus = OrderStatus.PENDING
    items: list[UpdateOrderItemInput] = []

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        return _require_text(v, "Title")


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


# ─── Outputs ────────────────────────────────────────────────────

class UserDTO(CamelModel):
    id: str
    username: str
    display_name: str
    role: WireUserRole


class OrderItemDTO(CamelModel):
    id: str
    name: str
    quantity: int
    price: Money
    line_total: Money | None = None


class OrderDTO(CamelModel):
    id: str
    title: str
    status: WireOrderStatus
    created_at: datetime
    updated_at: datetime
    total: Money = Decimal("0")
    created_by: UserDTO | None = None
    items: list[OrderItemDTO] = []


class OrderStatistics(CamelModel):
    draft: int = 0
    pending: int = 0
    approved: int = 0
    completed: int = 0
    cancelled: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return self.draft + self.pending + self.approved + self.completed + self.cancelled


class AuthResult(CamelModel):
    token: str
    expires_at_utc: datetime
    user: UserDTO
