"""ORM Models — SQLAlchemy declarative models for ByteDefence orders.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so string-based relationship() references resolve
"""

from graphql_demos.bytedefence.api.models.order import Order  # noqa: F401
from graphql_demos.bytedefence.api.models.order_item import OrderItem  # noqa: F401
from graphql_demos.bytedefence.api.models.user import User  # noqa: F401
