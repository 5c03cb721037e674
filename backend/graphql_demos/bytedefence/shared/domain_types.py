"""ByteDefence Domain Types — order lifecycle and user roles.

Invariants:
    - Stored values are the PascalCase names ("Draft", "Admin")
    - The wire form (GraphQL enum and JSON DTOs) is the member name ("DRAFT", "ADMIN")
    - parse() accepts either form, case-insensitively
"""

from enum import Enum


class _WireEnum(str, Enum):
    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.name.lower(), member.value.lower()):
                return member
        raise ValueError(f"Unknown {cls.__name__}: {value!r}")


class OrderStatus(_WireEnum):
    DRAFT = "Draft"
    PENDING = "Pending"
    APPROVED = "Approved"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class UserRole(_WireEnum):
    USER = "User"
    ADMIN = "Admin"


def order_group(order_id: str) -> str:
    """Relay group receiving notifications for one order."""
    return f"order-{order_id}"


# Relay methods pushed to order groups.
ORDER_CREATED = "OrderCreated"
ORDER_UPDATED = "OrderUpdated"
ORDER_DELETED = "OrderDeleted"
