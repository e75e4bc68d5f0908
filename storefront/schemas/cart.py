import uuid
from decimal import Decimal

from pydantic import ConfigDict
from sqlmodel import SQLModel


class CartItemCreate(SQLModel):
    """
    Payload for adding one unit of a product to the cart.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID


class CartItemUpdate(SQLModel):
    """
    Payload for setting the quantity of a cart line.

    quantity <= 0 removes the line.
    """

    model_config = ConfigDict(extra="forbid")

    quantity: int


class CartItemRead(SQLModel):
    """
    Read model for a single cart line, including line_total.
    """

    id: uuid.UUID
    product_id: uuid.UUID
    product_name: str
    image_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartItemRead]
    total_items: int
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    total_formatted: str
    installment_message: str | None = None
    is_processing_payment: bool = False
    is_payment_available: bool = False
