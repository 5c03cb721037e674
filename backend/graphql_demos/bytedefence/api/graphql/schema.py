"""Assembled ByteDefence schema: order queries and role-guarded mutations."""

import strawberry

from graphql_demos.bytedefence.api.graphql.errors import ByteDefenceErrorFilter
from graphql_demos.bytedefence.api.graphql.mutations import Mutation
from graphql_demos.bytedefence.api.graphql.queries import Query

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[ByteDefenceErrorFilter],
)
