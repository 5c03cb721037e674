"""Filter and sort inputs for the BookStore list queries, with their column mappings."""

import strawberry

from graphql_demos.bookstore.graphql.types import BookStatus
from graphql_demos.bookstore.models import Author, Book, Review
from graphql_demos.common.graphql_filters import (
    IdOperationFilterInput, IntOperationFilterInput,
    SortEnumType, StringOperationFilterInput,
)


@strawberry.input
class BookStatusOperationFilterInput:
    eq: BookStatus | None = None
    neq: BookStatus | None = None
    in_: list[BookStatus] | None = strawberry.field(default=None, name="in")


@strawberry.input
class BookFilterInput:
    id: IdOperationFilterInput | None = None
    title: StringOperationFilterInput | None = None
    description: StringOperationFilterInput | None = None
    isbn: StringOperationFilterInput | None = None
    published_year: IntOperationFilterInput | None = None
    status: BookStatusOperationFilterInput | None = None
    author_id: IdOperationFilterInput | None = None


@strawberry.input
class BookSortInput:
    title: SortEnumType | None = None
    isbn: SortEnumType | None = None
    published_year: SortEnumType | None = None
    status: SortEnumType | None = None
    created_at: SortEnumType | None = None
    updated_at: SortEnumType | None = None


@strawberry.input
class AuthorFilterInput:
    id: IdOperationFilterInput | None = None
    name: StringOperationFilterInput | None = None
    biography: StringOperationFilterInput | None = None


@strawberry.input
class AuthorSortInput:
    name: SortEnumType | None = None
    created_at: SortEnumType | None = None
    updated_at: SortEnumType | None = None


@strawberry.input
class ReviewFilterInput:
    id: IdOperationFilterInput | None = None
    title: StringOperationFilterInput | None = None
    rating: IntOperationFilterInput | None = None
    reviewer_name: StringOperationFilterInput | None = None
    book_id: IdOperationFilterInput | None = None


@strawberry.input
class ReviewSortInput:
    title: SortEnumType | None = None
    rating: SortEnumType | None = None
    reviewer_name: SortEnumType | None = None
    created_at: SortEnumType | None = None


BOOK_FILTER_COLUMNS = {
    "id": Book.id,
    "title": Book.title,
    "description": Book.description,
    "isbn": Book.isbn,
    "published_year": Book.published_year,
    "status": Book.status,
    "author_id": Book.author_id,
}
BOOK_SORT_COLUMNS = {
    "title": Book.title,
    "isbn": Book.isbn,
    "published_year": Book.published_year,
    "status": Book.status,
    "created_at": Book.created_at,
    "updated_at": Book.updated_at,
}
AUTHOR_FILTER_COLUMNS = {
    "id": Author.id,
    "name": Author.name,
    "biography": Author.biography,
}
AUTHOR_SORT_COLUMNS = {
    "name": Author.name,
    "created_at": Author.created_at,
    "updated_at": Author.updated_at,
}
REVIEW_FILTER_COLUMNS = {
    "id": Review.id,
    "title": Review.title,
    "rating": Review.rating,
    "reviewer_name": Review.reviewer_name,
    "book_id": Review.book_id,
}
REVIEW_SORT_COLUMNS = {
    "title": Review.title,
    "rating": Review.rating,
    "reviewer_name": Review.reviewer_name,
    "created_at": Review.created_at,
}
