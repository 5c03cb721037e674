"""Token Routes — demo JWT issuance and authentication help text.

Invariants:
    - POST /api/token requires userId and userName (keys case-insensitive); role defaults to "User"
    - Malformed JSON → "Invalid JSON body"; a non-object body → "userId and userName are required"
    - Errors are returned as {"error": "..."} with status 400, matching the public contract
"""

import json
import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from graphql_demos.bookstore.auth import DEFAULT_ROLE, JwtAuthenticationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

PROTECTED_OPERATIONS = [
    "createBook", "updateBook", "deleteBook", "createAuthor", "createReview",
]


def get_auth_service() -> JwtAuthenticationService:
    return JwtAuthenticationService()


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": message},
    )


@router.post("/token")
async def generate_token(request: Request):
    """Issue a signed JWT for the given demo user."""
    try:
        body = json.loads(await request.body() or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _bad_request("Invalid JSON body")
    # Keys match case-insensitively; a body that is not an object carries no fields.
    fields = {str(k).lower(): v for k, v in body.items()} if isinstance(body, dict) else {}

    user_id = fields.get("userid")
    user_name = fields.get("username")
    if not user_id or not user_name:
        return _bad_request("userId and userName are required")

    service = get_auth_service()
    token = service.generate_token(
        str(user_id), str(user_name), str(fields.get("role") or DEFAULT_ROLE),
    )
    logger.info(f"Issued token for {user_id}")
    return {
        "token": token,
        "expiresIn": service.lifetime_seconds,
        "tokenType": "Bearer",
    }


@router.get("/auth-info")
async def auth_info():
    return {
        "message": "BookStore API Authentication Information",
        "staticDemoToken": get_auth_service().static_demo_token,
        "usage": "Add 'Authorization: Bearer <token>' header to your requests",
        "generateJwtEndpoint": (
            'POST /api/token with { "userId": "user-1", "userName": "Test User" }'
        ),
        "protectedOperations": PROTECTED_OPERATIONS,
    }
