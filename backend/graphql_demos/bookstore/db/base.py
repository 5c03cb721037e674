"""SQLAlchemy Declarative Base — shared base class for all BookStore ORM models.

Invariants:
    - All BookStore models inherit from Base
    - Base.metadata is the single source of truth for BookStore tables
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all BookStore ORM models."""
    pass
