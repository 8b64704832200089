from __future__ import annotations

import logging
import secrets
from typing import Any, Optional, Sequence

import httpx

from app.domain.entities import Customer, LineItem
from app.domain.errors import OrderNotFound, UpstreamFailure
from app.domain.ports.storefront import StorefrontPort

logger = logging.getLogger(__name__)


class ShopifyAdminClient(StorefrontPort):
    """
    Storefront adapter over the platform's Admin REST API.

    NOTE:
    - Authenticates every call with the X-Shopify-Access-Token header.
    - Any transport error or non-2xx answer becomes UpstreamFailure, with
      the platform's response body kept as `detail`.
    """

    def __init__(
        self,
        shop_domain: str,
        access_token: str | None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        api_version: str = "2024-01",
        timeout: float = 10.0,
    ) -> None:
        self._base_url = f"https://{shop_domain}/admin/api/{api_version}"
        self._access_token = access_token or ""
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {
            "X-Shopify-Access-Token": self._access_token,
            "Content-Type": "application/json",
        }
        url = f"{self._base_url}/{path}"
        try:
            resp = await self._client.request(
                method, url, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            logger.warning("storefront unreachable", extra={"path": path})
            raise UpstreamFailure(f"storefront HTTP error: {e}") from e

        if not resp.is_success:
            try:
                detail = resp.json()
            except ValueError:
                detail = resp.text[:500]
            logger.warning(
                "storefront error",
                extra={"path": path, "status": resp.status_code},
            )
            raise UpstreamFailure(
                f"storefront responded {resp.status_code}",
                status_code=resp.status_code,
                detail=detail,
            )
        return resp.json()

    async def find_customer_by_email(self, email: str) -> Optional[Customer]:
        data = await self._request(
            "GET", "customers/search.json", params={"query": f"email:{email}"}
        )
        customers = data.get("customers") or []
        if not customers:
            return None
        return Customer.from_upstream(customers[0])

    async def create_customer(
        self, *, email: str, first_name: str | None, last_name: str | None
    ) -> Customer:
        # customers sign in with passcodes; the platform still wants a password
        password = secrets.token_urlsafe(16)
        payload = {
            "customer": {
                "first_name": first_name or "",
                "last_name": last_name or "",
                "email": email,
                "verified_email": True,
                "password": password,
                "password_confirmation": password,
                "send_email_welcome": False,
            }
        }
        data = await self._request("POST", "customers.json", json=payload)
        return Customer.from_upstream(data["customer"])

    async def list_orders(self, customer_id: str) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            "orders.json",
            params={"customer_id": customer_id, "status": "any"},
        )
        return list(data.get("orders") or [])

    async def get_order(self, order_id: str) -> dict[str, Any]:
        try:
            data = await self._request("GET", f"orders/{order_id}.json")
        except UpstreamFailure as e:
            if e.status_code == 404:
                raise OrderNotFound() from e
            raise
        return data["order"]

    async def create_order(
        self, customer_id: str, line_items: Sequence[LineItem]
    ) -> dict[str, Any]:
        payload = {
            "order": {
                "customer": {"id": customer_id},
                "line_items": [
                    {"variant_id": item.variant_id, "quantity": item.quantity}
                    for item in line_items
                ],
                "financial_status": "pending",
            }
        }
        logger.info(
            "creating order",
            extra={"customer_id": customer_id, "items": len(line_items)},
        )
        data = await self._request("POST", "orders.json", json=payload)
        return data["order"]

    async def list_variants(self, product_id: str) -> list[dict[str, Any]]:
        data = await self._request("GET", f"products/{product_id}/variants.json")
        return list(data.get("variants") or [])

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
