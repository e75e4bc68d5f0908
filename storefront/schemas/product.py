import uuid
from decimal import Decimal

from sqlmodel import SQLModel


class ProductRead(SQLModel):
    """
    Catalog entry as shown on listing and detail pages.

    Installment messages are None when Pay Later is not offered for the price.
    """

    id: uuid.UUID
    name: str
    price: Decimal
    price_formatted: str
    description: str
    image_name: str
    listing_message: str | None = None
    installment_message: str | None = None
    in_cart_quantity: int = 0
