"""Service providers — process-wide singletons resolved through FastAPI Depends.

Invariants:
    - One AuthService, one NotificationService and one OrderService per process
    - Tests replace them with app.dependency_overrides or cache_clear()
"""

from functools import lru_cache

from graphql_demos.bytedefence.api.config import get_settings
from graphql_demos.bytedefence.api.services.auth_service import AuthService
from graphql_demos.bytedefence.api.services.notifications import (
    NotificationService, build_notification_service,
)
from graphql_demos.bytedefence.api.services.order_service import OrderService


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService(get_settings())


@lru_cache
def get_notification_service() -> NotificationService:
    return build_notification_service(get_settings())


@lru_cache
def get_order_service() -> OrderService:
    return OrderService(get_notification_service())
