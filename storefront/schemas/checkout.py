from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

from storefront.models.payment import PaymentOutcome
from storefront.schemas.cart import CartItemRead


class ShippingRead(SQLModel):
    full_name: str
    street_address: str
    city: str
    state: str
    zip_code: str
    country: str
    phone_number: str
    formatted_address: str


class ReceiptRead(SQLModel):
    """
    Receipt as shown on the confirmation screen.
    """

    confirmation_number: str
    purchase_date: datetime
    formatted_date: str
    items: list[CartItemRead]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    shipping: ShippingRead


class CheckoutRead(SQLModel):
    """
    Result of POST /checkout.

    receipt is only present when outcome == 'succeeded'.
    """

    outcome: PaymentOutcome
    receipt: ReceiptRead | None = None


class ReceiptShare(SQLModel):
    """
    Payload for emailing the current receipt.
    """

    model_config = ConfigDict(extra="forbid")

    to_email: str

    @field_validator("to_email")
    @classmethod
    def looks_like_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("invalid email address")
        return v


class ReceiptRef(SQLModel):
    confirmation_number: str
