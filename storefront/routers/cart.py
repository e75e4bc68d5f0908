import uuid

from fastapi import APIRouter, Depends

from storefront.dependencies import get_cart_service
from storefront.schemas.cart import CartSummary, CartItemCreate, CartItemUpdate
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartSummary)
async def get_cart(service: CartService = Depends(get_cart_service)):
    """
    Get the cart summary with subtotal, tax and total.
    """
    return service.get_cart_summary()


@router.post("", response_model=CartSummary)
async def add_to_cart(
    payload: CartItemCreate,
    service: CartService = Depends(get_cart_service),
):
    """
    Add one unit of a product to the cart.

    - 409 while a payment is in progress.

    Returns the updated cart summary.
    """
    return service.add_to_cart(payload)


@router.patch("/{item_id}", response_model=CartSummary)
async def update_cart_item(
    item_id: uuid.UUID,
    payload: CartItemUpdate,
    service: CartService = Depends(get_cart_service),
):
    """
    Update quantity of a cart line. A quantity of 0 or less removes it.

    Returns the updated cart summary.
    """
    return service.update_quantity(item_id, payload)


@router.delete("/{item_id}", response_model=CartSummary)
async def remove_cart_item(
    item_id: uuid.UUID,
    service: CartService = Depends(get_cart_service),
):
    """
    Remove a line from the cart.

    Returns the updated cart summary.
    """
    return service.remove_item(item_id)


@router.delete("", response_model=CartSummary)
async def clear_cart(service: CartService = Depends(get_cart_service)):
    """
    Clear the entire cart.

    Returns an empty cart summary.
    """
    return service.clear_cart()
