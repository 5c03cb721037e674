"""GraphQL route — strawberry's FastAPI router with a bearer-aware context getter.

Invariants:
    - The Authorization header is optional; an invalid token leaves the principal unset
    - The same context getter serves HTTP requests and WebSocket subscriptions
"""

from fastapi import Depends
from starlette.requests import HTTPConnection
from strawberry.fastapi import GraphQLRouter

from graphql_demos.bookstore.auth import JwtAuthenticationService
from graphql_demos.bookstore.graphql.context import BookStoreContext
from graphql_demos.bookstore.graphql.schema import schema
from graphql_demos.bookstore.routes.token import get_auth_service


async def get_context(
    connection: HTTPConnection,
    auth: JwtAuthenticationService = Depends(get_auth_service),
) -> BookStoreContext:
    principal = auth.principal_from_header(connection.headers.get("authorization"))
    return BookStoreContext(principal=principal)


def build_graphql_router(graphiql: bool = True) -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        path="/api/graphql",
        context_getter=get_context,
        graphql_ide="graphiql" if graphiql else None,
    )
