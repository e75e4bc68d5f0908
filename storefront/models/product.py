import uuid
from decimal import Decimal

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class Product(SQLModel):
    """
    Immutable catalog entry.

    Two products are the same product iff their ids match; name, price and
    description are display data and do not take part in equality.
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)

    name: str = Field(
        min_length=1,
        description="Display name of the product",
    )

    price: Decimal = Field(
        ge=0,
        description="Unit price (USD)",
    )

    description: str = Field(
        default="",
        description="Long description shown on the detail page",
    )

    image_name: str = Field(
        default="",
        description="Asset name of the product image",
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


# Demo catalog, seeded into ProductRepository at startup.
CATALOG: list[Product] = [
    Product(
        name="Nike Dunk Olive",
        price=Decimal("110.00"),
        description=(
            "Iconic color blocking with premium materials and plush padding "
            "for game-changing comfort that lasts."
        ),
        image_name="sneakers_green",
    ),
    Product(
        name="Nike Dunk Mocha",
        price=Decimal("110.00"),
        description=(
            "You can always count on a classic. The Dunk Low pairs its iconic "
            "color blocking with premium materials"
        ),
        image_name="sneakers_red",
    ),
    Product(
        name="Nike Air Jordan",
        price=Decimal("178.00"),
        description=(
            "Originally released to play ball on the court, these iconic kicks "
            "level up your street style."
        ),
        image_name="sneakers_grey",
    ),
    Product(
        name="Nike Dunk Black",
        price=Decimal("94.00"),
        description=(
            "Created for the hardwood but taken to the streets, "
            "the Nike Dunk Low Retro returns."
        ),
        image_name="sneakers_black",
    ),
    Product(
        name="Nike Dunk Blue",
        price=Decimal("84.00"),
        description=(
            "Created for the hardwood but taken to the streets, "
            "the Nike Dunk Low Retro returns."
        ),
        image_name="sneakers_blue",
    ),
    Product(
        name="Nike Dunk Off White",
        price=Decimal("94.00"),
        description=(
            "Created for the hardwood but taken to the streets, "
            "the Nike Dunk Low Retro returns."
        ),
        image_name="sneakers_white",
    ),
]
