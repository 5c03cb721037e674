"""Order API Client — typed GraphQL calls against the ByteDefence API.

Invariants:
    - Every call attaches the stored bearer token when one exists
    - A non-2xx response or any GraphQL error raises OrderApiError
    - OrderApiError.codes lists extensions.code of every GraphQL error, in order
"""

import logging
from typing import Any

import httpx

from graphql_demos.bytedefence.client.auth_client import AuthClient
from graphql_demos.bytedefence.shared.schemas import (
    AddOrderItemInput, CreateOrderInput, OrderDTO, OrderStatistics, UpdateOrderInput,
)
from graphql_demos.common.errors import ErrorCategory, ServiceError

logger = logging.getLogger(__name__)

ORDER_FIELDS = (
    "id title status createdAt updatedAt total "
    "createdBy { id displayName username role } "
    "items { id name quantity price lineTotal }"
)
STATS_FIELDS = "draft pending approved completed cancelled total"

ORDERS_QUERY = f"query OrdersQuery {{ orders {{ {ORDER_FIELDS} }} orderStats {{ {STATS_FIELDS} }} }}"
ORDER_QUERY = f"query GetOrder($id: ID!) {{ order(id: $id) {{ {ORDER_FIELDS} }} }}"
CREATE_ORDER_MUTATION = (
    f"mutation CreateOrder($input: CreateOrderInput!) "
    f"{{ createOrder(input: $input) {{ {ORDER_FIELDS} }} }}"
)
UPDATE_ORDER_MUTATION = (
    f"mutation UpdateOrder($input: UpdateOrderInput!) "
    f"{{ updateOrder(input: $input) {{ {ORDER_FIELDS} }} }}"
)
DELETE_ORDER_MUTATION = "mutation DeleteOrder($id: ID!) { deleteOrder(id: $id) }"
ADD_ORDER_ITEM_MUTATION = (
    f"mutation AddOrderItem($input: AddOrderItemInput!) "
    f"{{ addOrderItem(input: $input) {{ {ORDER_FIELDS} }} }}"
)


class OrderApiError(ServiceError):
    """The API rejected a request (HTTP status) or returned GraphQL errors."""

    def __init__(
        self, message: str, codes: list[str] | None = None, status_code: int | None = None,
    ):
        super().__init__(
            message, "ORDER_API_ERROR", ErrorCategory.EXTERNAL_API,
            http_status=status_code or 502,
        )
        self.codes = codes or []
        self.status_code = status_code


class OrderApiClient:
    def __init__(self, http: httpx.AsyncClient, auth: AuthClient, endpoint: str = "graphql"):
        self._http = http
        self._auth = auth
        self.endpoint = endpoint

    async def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST one GraphQL operation and return its data block."""
        body: dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables
        response = await self._http.post(self.endpoint, json=body, headers=self._auth.auth_headers())
        if not response.is_success:
            raise OrderApiError(
                f"GraphQL request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        payload = response.json()
        errors = payload.get("errors") or []
        if errors:
            codes = [(e.get("extensions") or {}).get("code", "") for e in errors]
            logger.warning(f"GraphQL errors: {codes}")
            raise OrderApiError("; ".join(e.get("message", "") for e in errors), codes=codes)
        return payload.get("data") or {}

    async def get_orders(self) -> tuple[list[OrderDTO], OrderStatistics]:
        data = await self.execute(ORDERS_QUERY)
        orders = [OrderDTO.model_validate(o) for o in data.get("orders") or []]
        stats = OrderStatistics.model_validate(data.get("orderStats") or {})
        return orders, stats

    async def get_order(self, order_id: str) -> OrderDTO | None:
        data = await self.execute(ORDER_QUERY, {"id": order_id})
        return _order_or_none(data.get("order"))

    async def create_order(self, data: CreateOrderInput) -> OrderDTO | None:
        result = await self.execute(CREATE_ORDER_MUTATION, {"input": _variables(data)})
        return _order_or_none(result.get("createOrder"))

    async def update_order(self, data: UpdateOrderInput) -> OrderDTO | None:
        result = await self.execute(UPDATE_ORDER_MUTATION, {"input": _variables(data)})
        return _order_or_none(result.get("updateOrder"))

    async def delete_order(self, order_id: str) -> bool:
        result = await self.execute(DELETE_ORDER_MUTATION, {"id": order_id})
        return bool(result.get("deleteOrder"))

    async def add_order_item(self, data: AddOrderItemInput) -> OrderDTO | None:
        result = await self.execute(ADD_ORDER_ITEM_MUTATION, {"input": _variables(data)})
        return _order_or_none(result.get("addOrderItem"))


def _variables(model) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _order_or_none(raw: dict | None) -> OrderDTO | None:
    return OrderDTO.model_validate(raw) if raw else None
