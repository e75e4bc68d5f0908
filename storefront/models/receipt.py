import uuid
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field

from storefront.models.cart import CartLineItem


class ShippingDestination(SQLModel):
    """
    Where a paid order ships to.

    Supplied by a ShippingProvider; the checkout core never edits it.
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    full_name: str
    street_address: str
    city: str
    state: str
    zip_code: str
    country: str
    phone_number: str

    @property
    def formatted_address(self) -> str:
        return "\n".join(
            [
                self.full_name,
                self.street_address,
                f"{self.city}, {self.state} {self.zip_code}",
                self.country,
                self.phone_number,
            ]
        )


class ReceiptRecord(SQLModel):
    """
    Snapshot of a successful purchase.

    Created once, at the moment the payment succeeds, and never mutated.
    Matches what the receipt screen and shared document show:
      - items, subtotal, tax, total
      - shipping destination
      - confirmation number, purchase date
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[CartLineItem, ...]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    shipping: ShippingDestination
    confirmation_number: str
    purchase_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Purchase timestamp (UTC)",
    )

    @property
    def formatted_date(self) -> str:
        """
        Medium date, short time in the local timezone,
        e.g. "Mar 26, 2025 at 4:05 PM".

        Naive timestamps are taken as already local.
        """
        local = self.purchase_date.astimezone()
        hour = local.hour % 12 or 12
        return f"{local:%b} {local.day}, {local:%Y} at {hour}:{local:%M %p}"

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)
