"""User ORM — demo account owning created orders."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from graphql_demos.bytedefence.api.db.base import Base
from graphql_demos.bytedefence.shared.domain_types import UserRole


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.USER.value)
