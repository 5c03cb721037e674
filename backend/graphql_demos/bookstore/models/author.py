"""Author ORM — a writer owning zero or more books.

Invariants:
    - id is a string primary key (uuid4 text unless supplied, e.g. seed ids "author-1")
    - name is non-nullable
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from graphql_demos.bookstore.db.base import Base
from graphql_demos.bookstore.models._ids import new_id, utc_now


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    biography: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )

    books: Mapped[list["Book"]] = relationship(
        "Book", back_populates="author", lazy="selectin",
    )
