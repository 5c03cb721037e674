"""GraphQL Filtering & Sorting — `where` / `order` inputs translated to SQLAlchemy clauses.

Invariants:
    - One *OperationFilterInput per scalar kind (String, Int, ID); enums define their own
    - Every populated operator contributes one condition; conditions are AND-ed
    - Enum operators compare against the enum's stored value
    - Sort inputs are applied in list order; within one input, fields in declaration order
"""

from enum import Enum
from typing import Any, Iterable, Mapping

import strawberry
from sqlalchemy import ColumnElement, Select


@strawberry.enum
class SortEnumType(Enum):
    ASC = "ASC"
    DESC = "DESC"


@strawberry.input
class StringOperationFilterInput:
    eq: str | None = None
    neq: str | None = None
    contains: str | None = None
    starts_with: str | None = None
    ends_with: str | None = None
    in_: list[str] | None = strawberry.field(default=None, name="in")


@strawberry.input
class IntOperationFilterInput:
    eq: int | None = None
    neq: int | None = None
    gt: int | None = None
    gte: int | None = None
    lt: int | None = None
    lte: int | None = None
    in_: list[int] | None = strawberry.field(default=None, name="in")


@strawberry.input
class IdOperationFilterInput:
    eq: strawberry.ID | None = None
    neq: strawberry.ID | None = None
    in_: list[strawberry.ID] | None = strawberry.field(default=None, name="in")


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def operation_conditions(column, op: Any) -> list[ColumnElement[bool]]:
    """Conditions for one column from any *OperationFilterInput."""
    if op is None:
        return []
    conditions: list[ColumnElement[bool]] = []
    eq = getattr(op, "eq", None)
    if eq is not None:
        conditions.append(column == _enum_value(eq))
    neq = getattr(op, "neq", None)
    if neq is not None:
        conditions.append(column != _enum_value(neq))
    in_ = getattr(op, "in_", None)
    if in_ is not None:
        conditions.append(column.in_([_enum_value(v) for v in in_]))
    for name, build in (
        ("contains", lambda v: column.contains(v, autoescape=True)),
        ("starts_with", lambda v: column.startswith(v, autoescape=True)),
        ("ends_with", lambda v: column.endswith(v, autoescape=True)),
        ("gt", lambda v: column > v),
        ("gte", lambda v: column >= v),
        ("lt", lambda v: column < v),
        ("lte", lambda v: column <= v),
    ):
        value = getattr(op, name, None)
        if value is not None:
            conditions.append(build(value))
    return conditions


def where_conditions(where: Any, columns: Mapping[str, Any]) -> list[ColumnElement[bool]]:
    """Conditions for every populated field of a *FilterInput."""
    if where is None:
        return []
    conditions: list[ColumnElement[bool]] = []
    for field_name, column in columns.items():
        conditions.extend(operation_conditions(column, getattr(where, field_name, None)))
    return conditions


def order_clauses(order: Iterable[Any] | None, columns: Mapping[str, Any]) -> list:
    """ORDER BY clauses for a list of *SortInput objects, in list order."""
    clauses = []
    for sort in order or ():
        for field_name, column in columns.items():
            direction = getattr(sort, field_name, None)
            if direction is None:
                continue
            clauses.append(column.desc() if direction == SortEnumType.DESC else column.asc())
    return clauses


def apply_where(stmt: Select, where: Any, columns: Mapping[str, Any]) -> Select:
    """AND together every populated field of a *FilterInput."""
    for condition in where_conditions(where, columns):
        stmt = stmt.where(condition)
    return stmt


def apply_order(
    stmt: Select, order: Iterable[Any] | None, columns: Mapping[str, Any],
) -> Select:
    """Apply a list of *SortInput objects; returns stmt unchanged when empty."""
    clauses = order_clauses(order, columns)
    return stmt.order_by(*clauses) if clauses else stmt
