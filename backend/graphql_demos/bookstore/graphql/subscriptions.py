"""Subscription Resolvers — forward event-bus topics to GraphQL subscribers."""

from typing import AsyncGenerator

import strawberry
from strawberry.types import Info

from graphql_demos.bookstore.events import (
    ON_BOOK_CREATED, ON_BOOK_DELETED, ON_BOOK_UPDATED, ON_REVIEW_ADDED,
)
from graphql_demos.bookstore.graphql.types import Book, Review


@strawberry.type
class Subscription:
    @strawberry.subscription
    async def on_book_created(self, info: Info) -> AsyncGenerator[Book, None]:
        async for book in info.context.event_bus.subscribe(ON_BOOK_CREATED):
            yield book

    @strawberry.subscription
    async def on_book_updated(self, info: Info) -> AsyncGenerator[Book, None]:
        async for book in info.context.event_bus.subscribe(ON_BOOK_UPDATED):
            yield book

    @strawberry.subscription(description="Emits the id of each deleted book.")
    async def on_book_deleted(self, info: Info) -> AsyncGenerator[str, None]:
        async for book_id in info.context.event_bus.subscribe(ON_BOOK_DELETED):
            yield book_id

    @strawberry.subscription
    async def on_review_added(self, info: Info) -> AsyncGenerator[Review, None]:
        async for review in info.context.event_bus.subscribe(ON_REVIEW_ADDED):
            yield review
