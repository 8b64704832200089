from typing import Any, Sequence

from app.domain.entities import LineItem
from app.domain.errors import OrderNotFound, ValidationError
from app.domain.ports.storefront import StorefrontPort

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/150"


async def list_customer_orders(
    storefront: StorefrontPort, customer_id: str
) -> list[dict[str, Any]]:
    """Orders of the customer; line items without an image get a placeholder."""
    orders = await storefront.list_orders(customer_id)
    for order in orders:
        for item in order.get("line_items") or ():
            if not item.get("image"):
                item["image"] = {"src": PLACEHOLDER_IMAGE_URL}
    return orders


async def place_order(
    storefront: StorefrontPort, customer_id: str, items: Sequence[LineItem]
) -> dict[str, Any]:
    if not items:
        raise ValidationError("at least one item is required")
    return await storefront.create_order(customer_id, items)


async def reorder(
    storefront: StorefrontPort, customer_id: str, order_id: str
) -> dict[str, Any]:
    original = await storefront.get_order(order_id)
    owner = (original.get("customer") or {}).get("id")
    if owner is None or str(owner) != str(customer_id):
        raise OrderNotFound()

    items = [
        LineItem(variant_id=str(item["variant_id"]), quantity=int(item["quantity"]))
        for item in original.get("line_items") or ()
        if item.get("variant_id")
    ]
    return await place_order(storefront, customer_id, items)
