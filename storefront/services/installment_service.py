# storefront/services/installment_service.py
from decimal import Decimal

from storefront.core.money import Amount, format_currency, round_plain, to_decimal
from storefront.models.cart import CartLineItem
from storefront.models.payment import PaymentRequest
from storefront.models.product import Product
from storefront.services.payment_capability import PaymentCapability

DEFAULT_MIN_AMOUNT = Decimal("50.00")
DEFAULT_MAX_AMOUNT = Decimal("1000.00")
INSTALLMENT_COUNT = 4

# Contact fields the wallet must collect when Pay Later is offered
PAY_LATER_CONTACT_FIELDS = ["postalAddress", "name", "phoneNumber", "emailAddress"]

PriceSource = Amount | Product | CartLineItem


def _amount_of(source: PriceSource) -> Decimal:
    """Product -> unit price, cart line -> line subtotal, else the amount itself."""
    if isinstance(source, Product):
        return source.price
    if isinstance(source, CartLineItem):
        return source.subtotal
    return to_decimal(source)


class InstallmentService:
    """
    Pay Later eligibility and installment messaging.

    Responsibilities:
      - decide eligibility: wallet available AND min <= amount <= max
      - split an amount into equal monthly installments
      - produce the per-surface display strings (None when ineligible)

    Holds no state besides its configuration. The capability is asked on
    every call, so a wallet being added or removed is picked up immediately.
    """

    def __init__(
        self,
        capability: PaymentCapability,
        min_amount: Amount = DEFAULT_MIN_AMOUNT,
        max_amount: Amount = DEFAULT_MAX_AMOUNT,
        installment_count: int = INSTALLMENT_COUNT,
    ):
        self.capability = capability
        self.min_amount = to_decimal(min_amount)
        self.max_amount = to_decimal(max_amount)
        self.installment_count = installment_count

    # ---- eligibility & amounts ----

    def is_eligible(self, source: PriceSource) -> bool:
        amount = _amount_of(source)
        return (
            self.capability.can_make_payments()
            and self.min_amount <= amount <= self.max_amount
        )

    def monthly_installment(self, source: PriceSource) -> Decimal:
        return round_plain(_amount_of(source) / self.installment_count, 2)

    def _monthly_formatted(self, source: PriceSource) -> str:
        return format_currency(self.monthly_installment(source))

    # ---- display strings ----

    def installment_message(self, source: PriceSource) -> str | None:
        """
        Full message, e.g. "Pay $27.50/mo. for 4 months with Apple Pay Later".

        Returns None when the amount is not eligible.
        """
        if not self.is_eligible(source):
            return None
        return (
            f"Pay {self._monthly_formatted(source)}/mo. for "
            f"{self.installment_count} months with Apple Pay Later"
        )

    def short_message(self, source: PriceSource) -> str:
        return f"Pay {self._monthly_formatted(source)}/mo."

    def listing_message(self, source: PriceSource) -> str | None:
        if not self.is_eligible(source):
            return None
        return (
            f"From {self._monthly_formatted(source)}/mo. for "
            f"{self.installment_count} months"
        )

    def detail_message(self, source: PriceSource) -> str | None:
        return self.installment_message(source)

    def cart_message(self, source: PriceSource) -> str | None:
        if not self.is_eligible(source):
            return None
        return (
            f"Pay in {self.installment_count} installments of "
            f"{self._monthly_formatted(source)}"
        )

    # ---- payment request ----

    def configure_for_pay_later(
        self,
        request: PaymentRequest,
        amount: Amount,
    ) -> PaymentRequest:
        """
        Return a copy of `request` that asks the wallet for full billing and
        shipping contact details when `amount` qualifies for Pay Later.

        Ineligible amounts get the request back unchanged.
        """
        if not self.is_eligible(amount):
            return request
        return request.model_copy(
            update={
                "required_billing_contact_fields": list(PAY_LATER_CONTACT_FIELDS),
                "required_shipping_contact_fields": list(PAY_LATER_CONTACT_FIELDS),
            }
        )
