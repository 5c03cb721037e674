"""Query Resolvers — order reads and the current user.

Invariants:
    - orders() defaults to newest first when no order argument is given
    - me() raises AuthenticationError when the principal maps to no known user
"""

import strawberry
from strawberry.types import Info

from graphql_demos.bytedefence.api.graphql.filters import (
    ORDER_FILTER_COLUMNS, ORDER_SORT_COLUMNS, OrderFilterInput, OrderSortInput,
)
from graphql_demos.bytedefence.api.graphql.types import Order, OrderStatistics, User
from graphql_demos.common.errors import AuthenticationError
from graphql_demos.common.graphql_filters import order_clauses, where_conditions


@strawberry.type
class Query:
    @strawberry.field
    async def orders(
        self,
        info: Info,
        where: OrderFilterInput | None = None,
        order: list[OrderSortInput] | None = None,
    ) -> list[Order]:
        dtos = await info.context.order_service.get_orders(
            where_conditions(where, ORDER_FILTER_COLUMNS),
            order_clauses(order, ORDER_SORT_COLUMNS),
        )
        return [Order.from_dto(dto) for dto in dtos]

    @strawberry.field
    async def order(self, info: Info, id: strawberry.ID) -> Order | None:
        dto = await info.context.order_service.get_order(str(id))
        return Order.from_dto(dto) if dto else None

    @strawberry.field
    async def order_stats(self, info: Info) -> OrderStatistics:
        return OrderStatistics.from_dto(await info.context.order_service.get_statistics())

    @strawberry.field
    def me(self, info: Info) -> User:
        user = info.context.auth_service.get_user_from_principal(info.context.principal)
        if user is None:
            raise AuthenticationError()
        return User.from_dto(user)
