"""Book ORM — a title written by one author, reviewed by many readers.

Invariants:
    - author_id references authors.id (FK integrity enforced by the ORM/database)
    - status stores BookStatus values ("Draft", "Published", ...)
    - Reviews are owned: deleting a book deletes its reviews
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from graphql_demos.bookstore.db.base import Base
from graphql_demos.bookstore.domain_types import BookStatus
from graphql_demos.bookstore.models._ids import new_id, utc_now


class Book(Base):
    __tablename__ = "books"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    isbn: Mapped[str | None] = mapped_column(String(32), nullable=True)
    published_year: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BookStatus.DRAFT.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    author_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("authors.id"), nullable=False, index=True,
    )

    author: Mapped["Author"] = relationship(
        "Author", back_populates="books", lazy="selectin",
    )
    reviews: Mapped[list["Review"]] = relationship(
        "Review", back_populates="book",
        cascade="all, delete-orphan", lazy="selectin",
    )
