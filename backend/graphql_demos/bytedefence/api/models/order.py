"""Order ORM — a titled purchase request with line items.

Invariants:
    - title is at most 120 characters
    - status stores OrderStatus values ("Draft", "Pending", ...)
    - Items are owned: removing an item from the collection deletes it
    - total is derived (sum of line totals), never stored
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from graphql_demos.bytedefence.api.db.base import Base
from graphql_demos.bytedefence.shared.domain_types import OrderStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    title: Mapped[str] = mapped_column(String(120), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.DRAFT.value, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utc_now, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utc_now,
    )
    created_by_user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), nullable=False,
    )

    created_by: Mapped["User"] = relationship("User", lazy="selectin")
    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin", order_by="OrderItem.id",
    )

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))
