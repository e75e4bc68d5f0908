# storefront/services/payment_service.py
import asyncio
import logging
from decimal import Decimal
from typing import Protocol

from storefront.core.money import Amount, to_decimal
from storefront.models.payment import (
    PaymentAuthorization,
    PaymentRequest,
    PaymentSummaryItem,
)
from storefront.services.payment_capability import DEFAULT_NETWORKS

logger = logging.getLogger(__name__)


class PaymentPresentationError(Exception):
    """The payment sheet could not be shown to the user."""


class PaymentAuthorizer(Protocol):
    """
    The wallet payment sheet.

    Presents `request` to the user and resolves once with their answer.
    Raises PaymentPresentationError if the sheet cannot be shown.
    """

    async def authorize(self, request: PaymentRequest) -> PaymentAuthorization: ...


class SimulatedPaymentAuthorizer:
    """
    Demo payment sheet: approves every request after `delay` seconds.

    There is no processor behind it; authorization counts as settlement.
    """

    def __init__(self, delay: float = 1.0):
        self.delay = delay

    async def authorize(self, request: PaymentRequest) -> PaymentAuthorization:
        logger.info(
            "Simulated payment sheet: %s %s to %s",
            request.total,
            request.currency_code,
            request.merchant_id,
        )
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        return PaymentAuthorization(authorized=True)


class PaymentService:
    """
    Shapes payment requests and runs one authorization round-trip.

    Responsibilities:
      - build the PaymentRequest from (subtotal, tax)
      - hand it to the PaymentAuthorizer
      - report exactly one bool back; a sheet that fails to present is a
        decline, not an error

    Does not validate or settle the payment.
    """

    def __init__(
        self,
        authorizer: PaymentAuthorizer,
        merchant_id: str = "merchant.com.yourcompany.swiftpaydemo",
        merchant_display_name: str = "SwiftPay Demo Store",
        supported_networks: list[str] | None = None,
        merchant_capabilities: list[str] | None = None,
        country_code: str = "US",
        currency_code: str = "USD",
    ):
        self.authorizer = authorizer
        self.merchant_id = merchant_id
        self.merchant_display_name = merchant_display_name
        self.supported_networks = list(supported_networks or DEFAULT_NETWORKS)
        self.merchant_capabilities = list(merchant_capabilities or ["3DS"])
        self.country_code = country_code
        self.currency_code = currency_code

    def create_payment_request(self, subtotal: Amount, tax: Amount) -> PaymentRequest:
        """
        Summary rows: Subtotal, Tax, then the total under the merchant name.

        The total is subtotal + tax as given; callers pass already-rounded
        components, so no further rounding happens here.
        """
        subtotal_amount = to_decimal(subtotal)
        tax_amount = to_decimal(tax)
        total_amount: Decimal = subtotal_amount + tax_amount

        return PaymentRequest(
            merchant_id=self.merchant_id,
            supported_networks=list(self.supported_networks),
            merchant_capabilities=list(self.merchant_capabilities),
            country_code=self.country_code,
            currency_code=self.currency_code,
            summary_items=[
                PaymentSummaryItem(label="Subtotal", amount=subtotal_amount),
                PaymentSummaryItem(label="Tax", amount=tax_amount),
                PaymentSummaryItem(label=self.merchant_display_name, amount=total_amount),
            ],
        )

    async def start_payment(self, subtotal: Amount, tax: Amount) -> bool:
        """
        Present the payment sheet and wait for the user's single answer.

        Returns True when authorized, False when declined or when the sheet
        could not be presented.
        """
        request = self.create_payment_request(subtotal, tax)
        try:
            result = await self.authorizer.authorize(request)
        except PaymentPresentationError as e:
            logger.warning(f"Payment sheet could not be presented: {e}")
            return False

        return result.authorized
