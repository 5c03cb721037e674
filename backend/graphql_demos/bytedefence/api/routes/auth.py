"""Auth Routes — demo login returning a signed bearer token.

Invariants:
    - Malformed or incomplete body → 400 "Invalid request payload" (plain text)
    - Unknown user or wrong password → 401 "Invalid credentials" (plain text)
    - Success → AuthResult JSON with camelCase keys
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from graphql_demos.bytedefence.api.dependencies import get_auth_service
from graphql_demos.bytedefence.api.services.auth_service import AuthService
from graphql_demos.bytedefence.shared.schemas import LoginRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(request: Request, auth: AuthService = Depends(get_auth_service)):
    try:
        payload = LoginRequest.model_validate_json(await request.body())
    except ValidationError:
        return PlainTextResponse("Invalid request payload", status_code=status.HTTP_400_BAD_REQUEST)

    result = await auth.login(payload)
    if result is None:
        logger.warning(f"Failed login for {payload.username!r}")
        return PlainTextResponse("Invalid credentials", status_code=status.HTTP_401_UNAUTHORIZED)

    return JSONResponse(result.model_dump(mode="json", by_alias=True))
