import uuid
from decimal import Decimal

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field

from storefront.models.product import Product


class CartLineItem(SQLModel):
    """
    One product in the cart together with its quantity.

    The line id is independent of the product id and survives quantity
    changes. Lines compare equal by line id only.
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)

    product: Product

    quantity: int = Field(
        default=1,
        ge=1,
        description="Must be >= 1",
    )

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLineItem":
        """Same line (same id), new quantity."""
        return CartLineItem(id=self.id, product=self.product, quantity=quantity)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CartLineItem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class TotalsSnapshot(SQLModel):
    """
    Subtotal, tax and total of a cart, each rounded to cents.

    total == round2(subtotal + tax) always holds.
    """

    model_config = ConfigDict(frozen=True)

    subtotal: Decimal = Decimal("0.00")
    tax: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")
