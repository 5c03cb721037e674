"""GraphQL Route — authenticated POST endpoint executing the ByteDefence schema.

Invariants:
    - No principal → 401 with WWW-Authenticate: Bearer (schema never runs)
    - Missing/blank query → 400 "Missing GraphQL query"
    - Otherwise 200 with {"data": ..., "errors": [...]} (errors omitted when empty)
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from graphql_demos.bytedefence.api.dependencies import get_auth_service, get_order_service
from graphql_demos.bytedefence.api.graphql.context import GraphQLContext
from graphql_demos.bytedefence.api.graphql.schema import schema
from graphql_demos.bytedefence.api.services.auth_service import AuthService
from graphql_demos.bytedefence.api.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["graphql"])


async def _read_body(request: Request) -> dict | None:
    try:
        body = json.loads(await request.body() or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return body if isinstance(body, dict) else None


@router.post("/graphql")
async def graphql_endpoint(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
    orders: OrderService = Depends(get_order_service),
):
    principal = getattr(request.state, "principal", None)
    if principal is None:
        return Response(
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    body = await _read_body(request)
    query = body.get("query") if body else None
    if not isinstance(query, str) or not query.strip():
        return PlainTextResponse("Missing GraphQL query", status_code=status.HTTP_400_BAD_REQUEST)

    result = await schema.execute(
        query,
        variable_values=body.get("variables"),
        operation_name=body.get("operationName"),
        context_value=GraphQLContext(
            principal=principal, auth_service=auth, order_service=orders,
        ),
    )
    payload: dict = {"data": result.data}
    if result.errors:
        payload["errors"] = [error.formatted for error in result.errors]
    return JSONResponse(payload)
