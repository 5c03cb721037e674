from dataclasses import dataclass

from graphql_demos.bytedefence.api.services.auth_service import AuthService
from graphql_demos.bytedefence.api.services.order_service import OrderService
from graphql_demos.common.security import Principal


@dataclass
class GraphQLContext:
    """Per-request context: the bearer principal plus the services resolvers call."""

    principal: Principal | None
    auth_service: AuthService
    order_service: OrderService
