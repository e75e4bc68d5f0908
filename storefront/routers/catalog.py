import uuid

from fastapi import APIRouter, Depends

from storefront.dependencies import get_cart_service
from storefront.schemas.product import ProductRead
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("", response_model=list[ProductRead])
async def list_products(
    service: CartService = Depends(get_cart_service),
    skip: int = 0,
    limit: int = 50,
):
    """
    List catalog products with their Pay Later listing message.
    """
    return service.list_products(skip=skip, limit=limit)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: uuid.UUID,
    service: CartService = Depends(get_cart_service),
):
    """
    Get a single product by id.

    - 404 if the product is not in the catalog.
    """
    return service.get_product(product_id)
