# storefront/services/checkout_service.py
from fastapi import HTTPException, status

from storefront.models.payment import PaymentOutcome, PaymentRequest
from storefront.models.receipt import ReceiptRecord
from storefront.schemas.checkout import (
    CheckoutRead,
    ReceiptRef,
    ReceiptRead,
    ReceiptShare,
    ShippingRead,
)
from storefront.services.cart_service import to_cart_item_read
from storefront.services.cart_view_model import CartViewModel
from storefront.services.installment_service import InstallmentService
from storefront.services.receipt_service import ReceiptService


class CheckoutService:
    """
    HTTP-facing checkout and receipt operations.

    Responsibilities:
      - turn the view-model's silent no-ops into explicit client errors
        (empty cart -> 400, payment already in flight -> 409)
      - run checkout and shape the result
      - expose, render, share and dismiss the current receipt
    """

    def __init__(
        self,
        view_model: CartViewModel,
        installments: InstallmentService,
        receipts: ReceiptService,
    ):
        self.view_model = view_model
        self.installments = installments
        self.receipts = receipts

    # ---- internal helpers ----

    def _require_receipt(self) -> ReceiptRecord:
        receipt = self.view_model.receipt
        if receipt is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No receipt to show",
            )
        return receipt

    # ---- checkout ----

    def preview_payment_request(self) -> PaymentRequest:
        """
        The request the payment sheet would receive for the current cart,
        with Pay Later contact fields when the total qualifies.
        """
        vm = self.view_model
        request = vm.payment_service.create_payment_request(vm.subtotal, vm.tax)
        return self.installments.configure_for_pay_later(request, vm.total)

    async def checkout(self) -> CheckoutRead:
        vm = self.view_model

        if not vm.cart_items:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cart is empty",
            )
        if vm.is_processing_payment:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A payment is already in progress",
            )

        outcome = await vm.checkout()
        if outcome is None:
            # Lost a race with another request between the checks and here.
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A payment is already in progress",
            )

        receipt = None
        if outcome == PaymentOutcome.SUCCEEDED and vm.receipt is not None:
            receipt = self.to_receipt_read(vm.receipt)
        return CheckoutRead(outcome=outcome, receipt=receipt)

    # ---- receipts ----

    @staticmethod
    def to_receipt_read(receipt: ReceiptRecord) -> ReceiptRead:
        shipping = receipt.shipping
        return ReceiptRead(
            confirmation_number=receipt.confirmation_number,
            purchase_date=receipt.purchase_date,
            formatted_date=receipt.formatted_date,
            items=[to_cart_item_read(it) for it in receipt.items],
            subtotal=receipt.subtotal,
            tax=receipt.tax,
            total=receipt.total,
            shipping=ShippingRead(
                full_name=shipping.full_name,
                street_address=shipping.street_address,
                city=shipping.city,
                state=shipping.state,
                zip_code=shipping.zip_code,
                country=shipping.country,
                phone_number=shipping.phone_number,
                formatted_address=shipping.formatted_address,
            ),
        )

    def current_receipt(self) -> ReceiptRead:
        return self.to_receipt_read(self._require_receipt())

    def current_receipt_text(self) -> str:
        return self.receipts.renderer.render_text(self._require_receipt())

    def share_receipt(self, payload: ReceiptShare) -> ReceiptRef:
        receipt = self._require_receipt()
        if not self.receipts.can_share():
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Email sharing is not configured",
            )
        self.receipts.share_by_email(receipt, payload.to_email)
        return ReceiptRef(confirmation_number=receipt.confirmation_number)

    def dismiss_receipt(self) -> ReceiptRef:
        receipt = self._require_receipt()
        self.view_model.dismiss_receipt()
        return ReceiptRef(confirmation_number=receipt.confirmation_number)
