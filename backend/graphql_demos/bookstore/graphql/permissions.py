from typing import Any

from strawberry.permission import BasePermission
from strawberry.types import Info


class IsAuthenticated(BasePermission):
    """Mutation guard: the request must carry a valid bearer token."""

    message = "The current user is not authorized to access this resource."
    error_extensions = {"code": "AUTH_NOT_AUTHENTICATED"}

    def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        return info.context.principal is not None
