"""BookStore Domain Types — enums and value bounds shared by models, resolvers and seed data."""

from enum import Enum

MIN_RATING = 1
MAX_RATING = 5


class BookStatus(str, Enum):
    """Publication lifecycle of a book, stored in the `status` column."""
    DRAFT = "Draft"
    PUBLISHED = "Published"
    OUT_OF_PRINT = "OutOfPrint"
    ARCHIVED = "Archived"
