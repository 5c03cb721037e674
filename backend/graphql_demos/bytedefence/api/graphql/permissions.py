"""Role Guards — field permissions that require an authenticated principal in a role.

Invariants:
    - No principal → AuthenticationError ("Unauthorized", UNAUTHENTICATED)
    - Principal without the required role → AuthorizationError ("Forbidden", FORBIDDEN)
    - Roles match exactly: Admin does not stand in for User
"""

from typing import Any

from strawberry.permission import BasePermission
from strawberry.types import Info

from graphql_demos.bytedefence.shared.domain_types import UserRole
from graphql_demos.common.errors import AuthenticationError, AuthorizationError
from graphql_demos.common.security import Principal


def _roles_of(principal: Principal) -> list[UserRole]:
    roles = []
    for name in principal.roles:
        try:
            roles.append(UserRole.parse(name))
        except ValueError:
            continue
    return roles


def has_role(principal: Principal, required: UserRole) -> bool:
    return required in _roles_of(principal)


def require_role(required: UserRole) -> type[BasePermission]:
    class RequireRole(BasePermission):
        message = "Forbidden"

        def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
            principal = info.context.principal
            if principal is None:
                raise AuthenticationError()
            if not has_role(principal, required):
                raise AuthorizationError(required_role=required.value)
            return True

    RequireRole.__name__ = f"Require{required.value}Role"
    return RequireRole


RequireUser = require_role(UserRole.USER)
RequireAdmin = require_role(UserRole.ADMIN)
