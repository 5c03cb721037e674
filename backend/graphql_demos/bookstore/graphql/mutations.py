"""Mutation Resolvers — authenticated single-record writes with payload-level errors.

Invariants:
    - Every mutation requires a principal (IsAuthenticated); anonymous calls fail with AUTH_NOT_AUTHENTICATED
    - Domain failures (missing author/book, bad rating) are returned in payload.errors, never raised
    - Successful writes publish their subscription event after commit
    - Relationships are assigned as objects so loaded collections stay current after commit
"""

import logging

import strawberry
from strawberry.types import Info

from graphql_demos.bookstore.database import get_db_manager
from graphql_demos.bookstore.domain_types import MAX_RATING, MIN_RATING
from graphql_demos.bookstore.domain_types import BookStatus as BookStatusValue
from graphql_demos.bookstore.events import (
    ON_BOOK_CREATED, ON_BOOK_DELETED, ON_BOOK_UPDATED, ON_REVIEW_ADDED,
)
from graphql_demos.bookstore.graphql.permissions import IsAuthenticated
from graphql_demos.bookstore.graphql.types import Author, Book, BookStatus, Review
from graphql_demos.bookstore.models import Author as AuthorRow
from graphql_demos.bookstore.models import Book as BookRow
from graphql_demos.bookstore.models import Review as ReviewRow
from graphql_demos.bookstore.models._ids import utc_now

logger = logging.getLogger(__name__)

AUTHOR_NOT_FOUND = "AUTHOR_NOT_FOUND"
BOOK_NOT_FOUND = "BOOK_NOT_FOUND"
INVALID_RATING = "INVALID_RATING"


@strawberry.type
class UserError:
    message: str
    code: str


def _author_not_found() -> UserError:
    return UserError(message="Author not found", code=AUTHOR_NOT_FOUND)


def _book_not_found() -> UserError:
    return UserError(message="Book not found", code=BOOK_NOT_FOUND)


# ─── Inputs ─────────────────────────────────────────────────────

@strawberry.input
class CreateBookInput:
    title: str
    author_id: strawberry.ID
    published_year: int
    description: str | None = None
    isbn: str | None = None
    status: BookStatus | None = None


@strawberry.input
class UpdateBookInput:
    id: strawberry.ID
    title: str | None = None
    description: str | None = None
    isbn: str | None = None
    published_year: int | None = None
    status: BookStatus | None = None
    author_id: strawberry.ID | None = None


@strawberry.input
class CreateAuthorInput:
    name: str
    biography: str | None = None


@strawberry.input
class CreateReviewInput:
    book_id: strawberry.ID
    title: str
    rating: int
    reviewer_name: str
    content: str | None = None


# ─── Payloads ───────────────────────────────────────────────────

@strawberry.type
class CreateBookPayload:
    book: Book | None = None
    errors: list[UserError] = strawberry.field(default_factory=list)


@strawberry.type
class UpdateBookPayload:
    book: Book | None = None
    errors: list[UserError] = strawberry.field(default_factory=list)


@strawberry.type
class DeleteBookPayload:
    success: bool = False
    errors: list[UserError] = strawberry.field(default_factory=list)


@strawberry.type
class CreateAuthorPayload:
    author: Author | None = None
    errors: list[UserError] = strawberry.field(default_factory=list)


@strawberry.type
class CreateReviewPayload:
    review: Review | None = None
    errors: list[UserError] = strawberry.field(default_factory=list)


@strawberry.type
class Mutation:
    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def create_book(self, info: Info, input: CreateBookInput) -> CreateBookPayload:
        async with get_db_manager().session() as db:
            author = await db.get(AuthorRow, str(input.author_id))
            if author is None:
                return CreateBookPayload(errors=[_author_not_found()])
            row = BookRow(
                title=input.title,
                description=input.description,
                isbn=input.isbn,
                published_year=input.published_year,
                status=(input.status or BookStatusValue.DRAFT).value,
                author=author,
                reviews=[],
            )
            db.add(row)
            await db.commit()

        book = Book.from_model(row)
        logger.info(f"Book created: {row.id}", extra={"book_id": row.id})
        await info.context.event_bus.publish(ON_BOOK_CREATED, book)
        return CreateBookPayload(book=book)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def update_book(self, info: Info, input: UpdateBookInput) -> UpdateBookPayload:
        async with get_db_manager().session() as db:
            row = await db.get(BookRow, str(input.id))
            if row is None:
                return UpdateBookPayload(errors=[_book_not_found()])

            if input.author_id is not None and str(input.author_id) != row.author_id:
                author = await db.get(AuthorRow, str(input.author_id))
                if author is None:
                    return UpdateBookPayload(errors=[_author_not_found()])
                row.author = author

            if input.title is not None:
                row.title = input.title
            if input.description is not None:
                row.description = input.description
            if input.isbn is not None:
                row.isbn = input.isbn
            if input.published_year is not None:
                row.published_year = input.published_year
            if input.status is not None:
                row.status = input.status.value
            row.updated_at = utc_now()
            await db.commit()

        book = Book.from_model(row)
        logger.info(f"Book updated: {row.id}", extra={"book_id": row.id})
        await info.context.event_bus.publish(ON_BOOK_UPDATED, book)
        return UpdateBookPayload(book=book)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def delete_book(self, info: Info, id: strawberry.ID) -> DeleteBookPayload:
        book_id = str(id)
        async with get_db_manager().session() as db:
            row = await db.get(BookRow, book_id)
            if row is None:
                return DeleteBookPayload(errors=[_book_not_found()])
            for review in list(row.reviews):
                await db.delete(review)
            await db.delete(row)
            await db.commit()

        logger.info(f"Book deleted: {book_id}", extra={"book_id": book_id})
        await info.context.event_bus.publish(ON_BOOK_DELETED, book_id)
        return DeleteBookPayload(success=True)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def create_author(self, info: Info, input: CreateAuthorInput) -> CreateAuthorPayload:
        async with get_db_manager().session() as db:
            row = AuthorRow(name=input.name, biography=input.biography, books=[])
            db.add(row)
            await db.commit()
        return CreateAuthorPayload(author=Author.from_model(row))

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def create_review(self, info: Info, input: CreateReviewInput) -> CreateReviewPayload:
        async with get_db_manager().session() as db:
            book = await db.get(BookRow, str(input.book_id))
            if book is None:
                return CreateReviewPayload(errors=[_book_not_found()])
            if not MIN_RATING <= input.rating <= MAX_RATING:
                return CreateReviewPayload(errors=[UserError(
                    message=f"Rating must be between {MIN_RATING} and {MAX_RATING}",
                    code=INVALID_RATING,
                )])
            row = ReviewRow(
                title=input.title,
                content=input.content,
                rating=input.rating,
                reviewer_name=input.reviewer_name,
                book=book,
            )
            db.add(row)
            await db.commit()

        review = Review.from_model(row)
        await info.context.event_bus.publish(ON_REVIEW_ADDED, review)
        return CreateReviewPayload(review=review)
