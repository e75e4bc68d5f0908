from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from storefront.dependencies import get_checkout_service
from storefront.models.payment import PaymentRequest
from storefront.schemas.checkout import (
    CheckoutRead,
    ReceiptRead,
    ReceiptRef,
    ReceiptShare,
)
from storefront.services.checkout_service import CheckoutService

router = APIRouter(tags=["Checkout"])


# -------- Checkout --------


@router.get("/checkout/payment-request", response_model=PaymentRequest)
async def preview_payment_request(
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Show the payment request the wallet sheet would get for the current cart.
    """
    return service.preview_payment_request()


@router.post("/checkout", response_model=CheckoutRead)
async def checkout(service: CheckoutService = Depends(get_checkout_service)):
    """
    Pay for the current cart.

    - 400 if the cart is empty.
    - 409 if another checkout is still waiting on the payment sheet.

    On success the cart is cleared and the receipt is returned; on failure
    the cart is left as it was.
    """
    return await service.checkout()


# -------- Receipts --------


@router.get("/receipts/current", response_model=ReceiptRead)
async def get_current_receipt(service: CheckoutService = Depends(get_checkout_service)):
    """
    The receipt of the last successful checkout, until dismissed.
    """
    return service.current_receipt()


@router.get("/receipts/current/text", response_class=PlainTextResponse)
async def get_current_receipt_text(
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Plain-text rendering of the current receipt, ready to share.
    """
    return service.current_receipt_text()


@router.post("/receipts/current/share", response_model=ReceiptRef)
def share_current_receipt(
    payload: ReceiptShare,
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Email the current receipt.

    Runs in the threadpool; SMTP calls block.

    - 503 if SMTP is not configured.
    """
    return service.share_receipt(payload)


@router.delete("/receipts/current", response_model=ReceiptRef)
async def dismiss_current_receipt(
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Dismiss the current receipt.
    """
    return service.dismiss_receipt()
