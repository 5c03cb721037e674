"""Declarative base for the ByteDefence schema (separate metadata from BookStore)."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
