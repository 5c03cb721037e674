"""GraphQL Object Types — Book, Author and Review projected from ORM rows.

Invariants:
    - Each type wraps its ORM row (Private, never exposed) loaded with selectin relations
    - Relation fields read already-loaded collections; no resolver touches a session
    - averageRating is null when a book has no reviews
"""

from datetime import datetime

import strawberry

from graphql_demos.bookstore import models
from graphql_demos.bookstore.domain_types import BookStatus as BookStatusValue

BookStatus = strawberry.enum(BookStatusValue, name="BookStatus")


@strawberry.type
class Author:
    id: strawberry.ID
    name: str
    biography: str | None
    created_at: datetime
    updated_at: datetime
    _model: strawberry.Private[models.Author]

    @classmethod
    def from_model(cls, row: models.Author) -> "Author":
        return cls(
            id=strawberry.ID(row.id),
            name=row.name,
            biography=row.biography,
            created_at=row.created_at,
            updated_at=row.updated_at,
            _model=row,
        )

    @strawberry.field
    def books(self) -> "list[Book]":
        return [Book.from_model(b) for b in self._model.books]

    @strawberry.field(description="Number of books written by this author.")
    def book_count(self) -> int:
        return len(self._model.books)


@strawberry.type
class Review:
    id: strawberry.ID
    title: str
    content: str | None
    rating: int
    reviewer_name: str
    created_at: datetime
    updated_at: datetime
    book_id: strawberry.ID
    _model: strawberry.Private[models.Review]

    @classmethod
    def from_model(cls, row: models.Review) -> "Review":
        return cls(
            id=strawberry.ID(row.id),
            title=row.title,
            content=row.content,
            rating=row.rating,
            reviewer_name=row.reviewer_name,
            created_at=row.created_at,
            updated_at=row.updated_at,
            book_id=strawberry.ID(row.book_id),
            _model=row,
        )

    @strawberry.field
    def book(self) -> "Book":
        return Book.from_model(self._model.book)


@strawberry.type
class Book:
    id: strawberry.ID
    title: str
    description: str | None
    isbn: str | None
    published_year: int
    status: BookStatus
    created_at: datetime
    updated_at: datetime
    author_id: strawberry.ID
    _model: strawberry.Private[models.Book | None]

    @classmethod
    def from_model(cls, row: models.Book) -> "Book":
        return cls(
            id=strawberry.ID(row.id),
            title=row.title,
            description=row.description,
            isbn=row.isbn,
            published_year=row.published_year,
            status=BookStatusValue(row.status),
            created_at=row.created_at,
            updated_at=row.updated_at,
            author_id=strawberry.ID(row.author_id),
            _model=row,
        )

    @strawberry.field
    def author(self) -> Author | None:
        if self._model is None:
            return None
        return Author.from_model(self._model.author)

    @strawberry.field
    def reviews(self) -> list[Review]:
        if self._model is None:
            return []
        return [Review.from_model(r) for r in self._model.reviews]

    @strawberry.field(description="Mean rating across all reviews, or null without reviews.")
    def average_rating(self) -> float | None:
        ratings = [r.rating for r in self._model.reviews] if self._model else []
        if not ratings:
            return None
        return sum(ratings) / len(ratings)

    @strawberry.field
    def review_count(self) -> int:
        return len(self._model.reviews) if self._model else 0


@strawberry.type
class ConcurrentData:
    books: list[Book]
    authors: list[Author]
    reviews: list[Review]
