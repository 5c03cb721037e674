"""Query Resolvers — read-only projections of the BookStore catalogue.

Invariants:
    - Every resolver opens its own session; concurrent resolvers never share one
    - where/order arguments are optional; omitted means all rows in storage order
    - concurrentData runs its three list queries with asyncio.gather
"""

import asyncio
import logging
from datetime import datetime, timezone

import strawberry
from sqlalchemy import select

from graphql_demos.bookstore.database import get_db_manager
from graphql_demos.bookstore.domain_types import BookStatus as BookStatusValue
from graphql_demos.bookstore.graphql.filters import (
    AUTHOR_FILTER_COLUMNS, AUTHOR_SORT_COLUMNS,
    BOOK_FILTER_COLUMNS, BOOK_SORT_COLUMNS,
    REVIEW_FILTER_COLUMNS, REVIEW_SORT_COLUMNS,
    AuthorFilterInput, AuthorSortInput,
    BookFilterInput, BookSortInput,
    ReviewFilterInput, ReviewSortInput,
)
from graphql_demos.bookstore.graphql.types import Author, Book, ConcurrentData, Review
from graphql_demos.bookstore.models import Author as AuthorRow
from graphql_demos.bookstore.models import Book as BookRow
from graphql_demos.bookstore.models import Review as ReviewRow
from graphql_demos.common.errors import ErrorCategory, ServiceError
from graphql_demos.common.graphql_filters import apply_order, apply_where

logger = logging.getLogger(__name__)

MOCK_BOOK_ID = "mock-book"


class SimulatedError(ServiceError):
    """Raised on demand by bookWithError to exercise client error handling."""
    def __init__(self):
        super().__init__(
            "Simulated error for testing purposes",
            "SIMULATED_ERROR", ErrorCategory.INTERNAL,
        )


async def fetch_books(
    where: BookFilterInput | None = None, order: list[BookSortInput] | None = None,
) -> list[Book]:
    stmt = apply_where(select(BookRow), where, BOOK_FILTER_COLUMNS)
    stmt = apply_order(stmt, order, BOOK_SORT_COLUMNS)
    async with get_db_manager().session() as db:
        rows = (await db.scalars(stmt)).all()
    return [Book.from_model(row) for row in rows]


async def fetch_authors(
    where: AuthorFilterInput | None = None, order: list[AuthorSortInput] | None = None,
) -> list[Author]:
    stmt = apply_where(select(AuthorRow), where, AUTHOR_FILTER_COLUMNS)
    stmt = apply_order(stmt, order, AUTHOR_SORT_COLUMNS)
    async with get_db_manager().session() as db:
        rows = (await db.scalars(stmt)).all()
    return [Author.from_model(row) for row in rows]


async def fetch_reviews(
    where: ReviewFilterInput | None = None, order: list[ReviewSortInput] | None = None,
) -> list[Review]:
    stmt = apply_where(select(ReviewRow), where, REVIEW_FILTER_COLUMNS)
    stmt = apply_order(stmt, order, REVIEW_SORT_COLUMNS)
    async with get_db_manager().session() as db:
        rows = (await db.scalars(stmt)).all()
    return [Review.from_model(row) for row in rows]


def build_mock_book() -> Book:
    now = datetime.now(timezone.utc)
    return Book(
        id=strawberry.ID(MOCK_BOOK_ID),
        title="Mock Book",
        description="This is a mock book for testing",
        isbn=None,
        published_year=0,
        status=BookStatusValue.DRAFT,
        created_at=now,
        updated_at=now,
        author_id=strawberry.ID(""),
        _model=None,
    )


@strawberry.type
class Query:
    @strawberry.field
    async def books(
        self,
        where: BookFilterInput | None = None,
        order: list[BookSortInput] | None = None,
    ) -> list[Book]:
        return await fetch_books(where, order)

    @strawberry.field
    async def book_by_id(self, id: strawberry.ID) -> Book | None:
        async with get_db_manager().session() as db:
            row = await db.get(BookRow, str(id))
        return Book.from_model(row) if row else None

    @strawberry.field
    async def authors(
        self,
        where: AuthorFilterInput | None = None,
        order: list[AuthorSortInput] | None = None,
    ) -> list[Author]:
        return await fetch_authors(where, order)

    @strawberry.field
    async def author_by_id(self, id: strawberry.ID) -> Author | None:
        async with get_db_manager().session() as db:
            row = await db.get(AuthorRow, str(id))
        return Author.from_model(row) if row else None

    @strawberry.field
    async def reviews(
        self,
        where: ReviewFilterInput | None = None,
        order: list[ReviewSortInput] | None = None,
    ) -> list[Review]:
        return await fetch_reviews(where, order)

    @strawberry.field(description="Books, authors and reviews loaded by three concurrent queries.")
    async def concurrent_data(self) -> ConcurrentData:
        books, authors, reviews = await asyncio.gather(
            fetch_books(), fetch_authors(), fetch_reviews(),
        )
        logger.info(
            f"Concurrent fetch: {len(books)} books, {len(authors)} authors, "
            f"{len(reviews)} reviews"
        )
        return ConcurrentData(books=books, authors=authors, reviews=reviews)

    @strawberry.field
    async def book_with_error(self, simulate_error: bool) -> Book | None:
        if simulate_error:
            raise SimulatedError()
        return build_mock_book()
