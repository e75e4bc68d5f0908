# storefront/services/cart_view_model.py
import logging
import random
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from storefront.core.money import round_plain
from storefront.models.cart import CartLineItem, TotalsSnapshot
from storefront.models.payment import PaymentOutcome
from storefront.models.receipt import ReceiptRecord
from storefront.services.cart_store import CartStore
from storefront.services.payment_capability import PaymentCapability
from storefront.services.payment_service import PaymentService
from storefront.services.shipping import ShippingProvider
from storefront.services.tax_calculator import TaxCalculating

logger = logging.getLogger(__name__)

CONFIRMATION_PREFIX = "SWIFT"

ReceiptListener = Callable[[ReceiptRecord], None]


class CartViewModel:
    """
    Derived cart totals plus the checkout state machine.

    Totals:
      Subscribes to the CartStore and recomputes subtotal / tax / total on
      every notification, synchronously, so readers always see totals for
      the latest cart state.

    Checkout:
      idle -> awaiting payment -> succeeded | failed -> idle

      - checkout() on an empty cart, or while a payment is in flight,
        does nothing
      - success: build a ReceiptRecord, publish it, clear the cart
      - failure: leave cart and totals exactly as they were
    """

    def __init__(
        self,
        cart_store: CartStore,
        tax_calculator: TaxCalculating,
        payment_service: PaymentService,
        shipping_provider: ShippingProvider,
        capability: PaymentCapability | None = None,
        confirmation_prefix: str = CONFIRMATION_PREFIX,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.tax_calculator = tax_calculator
        self.payment_service = payment_service
        self.shipping_provider = shipping_provider
        self.capability = capability
        self.confirmation_prefix = confirmation_prefix
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

        self.cart_items: tuple[CartLineItem, ...] = ()
        self.totals = TotalsSnapshot()
        self.is_processing_payment = False
        self.outcome: PaymentOutcome | None = None
        self.receipt: ReceiptRecord | None = None
        self.show_receipt = False

        self._receipt_listeners: list[ReceiptListener] = []
        self._unsubscribe: Callable[[], None] | None = None
        self._cart_store: CartStore = cart_store
        self.bind(cart_store)

    # ---- bindings ----

    def bind(self, cart_store: CartStore) -> None:
        """
        Follow `cart_store` from now on, dropping any previous subscription,
        and recompute immediately from its current lines.
        """
        if self._unsubscribe is not None:
            self._unsubscribe()

        self._cart_store = cart_store
        self._unsubscribe = cart_store.subscribe(self._on_cart_changed)
        self._on_cart_changed(cart_store.items)

    def on_receipt(self, listener: ReceiptListener) -> Callable[[], None]:
        """Call `listener` with every receipt published after a successful payment."""
        self._receipt_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._receipt_listeners:
                self._receipt_listeners.remove(listener)

        return unsubscribe

    def _on_cart_changed(self, items: tuple[CartLineItem, ...]) -> None:
        self.cart_items = items
        self.totals = self._compute_totals()

    def _compute_totals(self) -> TotalsSnapshot:
        subtotal = round_plain(self.cart_store.subtotal, 2)
        return TotalsSnapshot(
            subtotal=subtotal,
            tax=self.tax_calculator.calculate_tax(subtotal),
            total=self.tax_calculator.calculate_total(subtotal),
        )

    # ---- read-only views ----

    @property
    def cart_store(self) -> CartStore:
        return self._cart_store

    @property
    def subtotal(self) -> Decimal:
        return self.totals.subtotal

    @property
    def tax(self) -> Decimal:
        return self.totals.tax

    @property
    def total(self) -> Decimal:
        return self.totals.total

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.cart_items)

    @property
    def is_payment_available(self) -> bool:
        if self.capability is None:
            return False
        return self.capability.can_make_payments()

    # ---- cart editing ----

    def update_quantity(self, line_item_id: uuid.UUID, quantity: int) -> bool:
        return self.cart_store.update_quantity(line_item_id, quantity)

    def remove_item(self, line_item_id: uuid.UUID) -> bool:
        return self.cart_store.remove(line_item_id)

    # ---- checkout ----

    async def checkout(self) -> PaymentOutcome | None:
        """
        Run one payment attempt for the current cart.

        Returns the outcome, or None when the call was ignored (empty cart
        or a payment already in flight).
        """
        if self.cart_store.is_empty() or self.is_processing_payment:
            return None

        self.is_processing_payment = True
        self.outcome = PaymentOutcome.PENDING
        # receipt reflects exactly what the payment sheet was asked to charge
        items = self.cart_items
        totals = self.totals
        logger.info(
            f"Checkout started: {self.total_items} item(s), total {totals.total}"
        )

        outcome = PaymentOutcome.FAILED
        try:
            success = await self.payment_service.start_payment(totals.subtotal, totals.tax)
            if success:
                self._complete_purchase(items, totals)
                outcome = PaymentOutcome.SUCCEEDED
        finally:
            self.outcome = outcome
            self.is_processing_payment = False

        logger.info(f"Checkout finished: {outcome.value}")
        return outcome

    def _complete_purchase(
        self, items: tuple[CartLineItem, ...], totals: TotalsSnapshot
    ) -> None:
        receipt = ReceiptRecord(
            items=items,
            subtotal=totals.subtotal,
            tax=totals.tax,
            total=totals.total,
            shipping=self.shipping_provider.destination(),
            confirmation_number=self.generate_confirmation_number(),
            purchase_date=self._clock(),
        )

        self.receipt = receipt
        self.show_receipt = True
        for listener in list(self._receipt_listeners):
            listener(receipt)

        self.cart_store.clear()

    def generate_confirmation_number(self) -> str:
        """
        Prefix plus a random 6-digit number, e.g. "SWIFT-482913".

        Not unique; collisions are possible.
        """
        return f"{self.confirmation_prefix}-{self._rng.randint(100000, 999999):06d}"

    def dismiss_receipt(self) -> ReceiptRecord | None:
        """Hide and release the current receipt, returning it."""
        receipt = self.receipt
        self.receipt = None
        self.show_receipt = False
        return receipt
