"""Mutation Resolvers — role-guarded order writes.

Invariants:
    - createOrder / updateOrder / addOrderItem require role User
    - deleteOrder requires role Admin and returns false for an unknown id
    - GraphQL inputs are re-validated as pydantic DTOs before reaching the service
"""

import strawberry
from strawberry.types import Info

from graphql_demos.bytedefence.api.graphql.permissions import RequireAdmin, RequireUser
from graphql_demos.bytedefence.api.graphql.types import Order, OrderStatus
from graphql_demos.bytedefence.shared import schemas
from graphql_demos.bytedefence.shared.domain_types import OrderStatus as OrderStatusValue
from graphql_demos.common.errors import AuthenticationError


@strawberry.input
class CreateOrderItemInput:
    name: str
    quantity: int
    price: float


@strawberry.input
class UpdateOrderItemInput:
    name: str
    quantity: int
    price: float
    id: strawberry.ID | None = None


@strawberry.input
class CreateOrderInput:
    title: str
    status: OrderStatus = OrderStatusValue.DRAFT
    items: list[CreateOrderItemInput] = strawberry.field(default_factory=list)


@strawberry.input
class UpdateOrderInput:
    id: strawberry.ID
    title: str
    status: OrderStatus = OrderStatusValue.PENDING
    items: list[UpdateOrderItemInput] = strawberry.field(default_factory=list)


@strawberry.input
class AddOrderItemInput:
    order_id: strawberry.ID
    name: str
    quantity: int
    price: float


def _current_user(info: Info) -> schemas.UserDTO:
    user = info.context.auth_service.get_user_from_principal(info.context.principal)
    if user is None:
        raise AuthenticationError()
    return user


@strawberry.type
class Mutation:
    @strawberry.mutation(permission_classes=[RequireUser])
    async def create_order(self, info: Info, input: CreateOrderInput) -> Order:
        user = _current_user(info)
        data = schemas.CreateOrderInput.model_validate(strawberry.asdict(input))
        return Order.from_dto(await info.context.order_service.create_order(data, user))

    @strawberry.mutation(permission_classes=[RequireUser])
    async def update_order(self, info: Info, input: UpdateOrderInput) -> Order:
        user = _current_user(info)
        data = schemas.UpdateOrderInput.model_validate(strawberry.asdict(input))
        return Order.from_dto(await info.context.order_service.update_order(data, user))

    @strawberry.mutation(permission_classes=[RequireAdmin])
    async def delete_order(self, info: Info, id: strawberry.ID) -> bool:
        return await info.context.order_service.delete_order(str(id))

    @strawberry.mutation(permission_classes=[RequireUser])
    async def add_order_item(self, info: Info, input: AddOrderItemInput) -> Order:
        user = _current_user(info)
        data = schemas.AddOrderItemInput.model_validate(strawberry.asdict(input))
        return Order.from_dto(await info.context.order_service.add_order_item(data, user))
