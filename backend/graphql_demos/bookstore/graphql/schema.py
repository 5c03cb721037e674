"""Assembled BookStore schema: queries, authenticated mutations and subscriptions."""

import strawberry

from graphql_demos.bookstore.graphql.mutations import Mutation
from graphql_demos.bookstore.graphql.queries import Query
from graphql_demos.bookstore.graphql.subscriptions import Subscription
from graphql_demos.common.graphql_errors import ErrorCodeExtension

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
    extensions=[ErrorCodeExtension],
)
