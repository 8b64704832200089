from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from app.domain.entities import Customer, LineItem


class StorefrontPort(Protocol):
    """
    The hosted e-commerce platform. Order and variant payloads are passed
    through as the platform shapes them.
    """

    async def find_customer_by_email(self, email: str) -> Optional[Customer]:
        """First customer whose email matches, or None."""

    async def create_customer(
        self, *, email: str, first_name: str | None, last_name: str | None
    ) -> Customer:
        """Create a verified customer without sending a welcome email."""

    async def list_orders(self, customer_id: str) -> list[dict[str, Any]]:
        """All orders of the customer, any status."""

    async def get_order(self, order_id: str) -> dict[str, Any]:
        """One order; raises OrderNotFound if unknown."""

    async def create_order(
        self, customer_id: str, line_items: Sequence[LineItem]
    ) -> dict[str, Any]:
        """Create a pending order for the customer."""

    async def list_variants(self, product_id: str) -> list[dict[str, Any]]:
        """Variants of a product."""
