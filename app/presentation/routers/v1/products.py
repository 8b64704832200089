from typing import Annotated, Any

from fastapi import APIRouter, Depends

from app.domain.ports.storefront import StorefrontPort
from app.presentation.dependencies import get_storefront

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("/{product_id}/variants")
async def get_product_variants(
    product_id: str,
    storefront: Annotated[StorefrontPort, Depends(get_storefront)],
) -> dict[str, list[dict[str, Any]]]:
    return {"variants": await storefront.list_variants(product_id)}
