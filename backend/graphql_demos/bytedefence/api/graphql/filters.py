"""Filter and sort inputs for the orders query."""

import strawberry

from graphql_demos.bytedefence.api.graphql.types import OrderStatus
from graphql_demos.bytedefence.api.models import Order
from graphql_demos.common.graphql_filters import (
    IdOperationFilterInput, SortEnumType, StringOperationFilterInput,
)


@strawberry.input
class OrderStatusOperationFilterInput:
    eq: OrderStatus | None = None
    neq: OrderStatus | None = None
    in_: list[OrderStatus] | None = strawberry.field(default=None, name="in")


@strawberry.input
class OrderFilterInput:
    id: IdOperationFilterInput | None = None
    title: StringOperationFilterInput | None = None
    status: OrderStatusOperationFilterInput | None = None
    created_by_user_id: IdOperationFilterInput | None = None


@strawberry.input
class OrderSortInput:
    title: SortEnumType | None = None
    status: SortEnumType | None = None
    created_at: SortEnumType | None = None
    updated_at: SortEnumType | None = None


ORDER_FILTER_COLUMNS = {
    "id": Order.id,
    "title": Order.title,
    "status": Order.status,
    "created_by_user_id": Order.created_by_user_id,
}
ORDER_SORT_COLUMNS = {
    "title": Order.title,
    "status": Order.status,
    "created_at": Order.created_at,
    "updated_at": Order.updated_at,
}
