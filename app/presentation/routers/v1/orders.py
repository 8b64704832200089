from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.orders import list_customer_orders, place_order, reorder
from app.domain.entities import Customer
from app.domain.errors import OrderNotFound
from app.domain.ports.storefront import StorefrontPort
from app.presentation.dependencies import get_current_customer, get_storefront
from app.schemas.requests import BulkOrderIn, LineItemIn

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("")
async def get_orders(
    customer: Annotated[Customer, Depends(get_current_customer)],
    storefront: Annotated[StorefrontPort, Depends(get_storefront)],
) -> list[dict[str, Any]]:
    return await list_customer_orders(storefront, customer.id)


@router.post("", status_code=201)
async def post_order(
    body: LineItemIn,
    customer: Annotated[Customer, Depends(get_current_customer)],
    storefront: Annotated[StorefrontPort, Depends(get_storefront)],
) -> dict[str, Any]:
    return await place_order(storefront, customer.id, [body.to_line_item()])


@router.post("/bulk", status_code=201)
async def post_bulk_order(
    body: BulkOrderIn,
    customer: Annotated[Customer, Depends(get_current_customer)],
    storefront: Annotated[StorefrontPort, Depends(get_storefront)],
) -> dict[str, Any]:
    items = [item.to_line_item() for item in body.items]
    return await place_order(storefront, customer.id, items)


@router.post("/{order_id}/reorder", status_code=201)
async def post_reorder(
    order_id: str,
    customer: Annotated[Customer, Depends(get_current_customer)],
    storefront: Annotated[StorefrontPort, Depends(get_storefront)],
) -> dict[str, Any]:
    try:
        return await reorder(storefront, customer.id, order_id)
    except OrderNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="order not found"
        )
