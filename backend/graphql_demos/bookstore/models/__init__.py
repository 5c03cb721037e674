"""ORM Models — SQLAlchemy declarative models for the BookStore entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so string-based relationship() references resolve
"""

from graphql_demos.bookstore.models.author import Author  # noqa: F401
from graphql_demos.bookstore.models.book import Book  # noqa: F401
from graphql_demos.bookstore.models.review import Review  # noqa: F401
