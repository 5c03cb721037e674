"""Review ORM — a reader's rating of a book.

Invariants:
    - rating is within 1..5 (CHECK constraint; resolvers validate first)
    - book_id references books.id with ON DELETE CASCADE
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from graphql_demos.bookstore.db.base import Base
from graphql_demos.bookstore.domain_types import MAX_RATING, MIN_RATING
from graphql_demos.bookstore.models._ids import new_id, utc_now


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_reviews_rating_range",
        ),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    reviewer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    book_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True,
    )

    book: Mapped["Book"] = relationship(
        "Book", back_populates="reviews", lazy="selectin",
    )
