"""Bearer middleware — resolves the request principal once, before routing.

Invariants:
    - request.state.principal is always set (None when absent or invalid)
    - The login route is skipped: it never needs a principal
    - The middleware never rejects a request; routes decide what an anonymous call gets
"""

from typing import Callable

from fastapi import FastAPI, Request

from graphql_demos.bytedefence.api.services.auth_service import AuthService
from graphql_demos.common.security import extract_bearer_token

LOGIN_PATH = "/api/auth/login"


def install_bearer_middleware(
    app: FastAPI, auth_service_getter: Callable[[], AuthService],
) -> None:

    @app.middleware("http")
    async def resolve_bearer_principal(request: Request, call_next):
        request.state.principal = None
        if request.url.path != LOGIN_PATH:
            auth = app.dependency_overrides.get(auth_service_getter, auth_service_getter)()
            token = extract_bearer_token(request.headers.get("authorization"))
            request.state.principal = auth.validate_token(token)
        return await call_next(request)
