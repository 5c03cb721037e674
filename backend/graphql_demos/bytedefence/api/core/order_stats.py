"""Order statistics from (status, count) group-by rows."""

from typing import Iterable

from graphql_demos.bytedefence.shared.domain_types import OrderStatus
from graphql_demos.bytedefence.shared.schemas import OrderStatistics

_FIELD_BY_STATUS = {
    OrderStatus.DRAFT: "draft",
    OrderStatus.PENDING: "pending",
    OrderStatus.APPROVED: "approved",
    OrderStatus.COMPLETED: "completed",
    OrderStatus.CANCELLED: "cancelled",
}


def build_statistics(grouped: Iterable[tuple[str, int]]) -> OrderStatistics:
    """Fold group-by rows into per-status counts. Unknown statuses are ignored."""
    counts: dict[str, int] = {}
    for status, count in grouped:
        try:
            field = _FIELD_BY_STATUS[OrderStatus.parse(status)]
        except ValueError:
            continue
        counts[field] = counts.get(field, 0) + int(count)
    return OrderStatistics(**counts)
