import uuid
from typing import Iterable

from storefront.models.product import CATALOG, Product


class ProductRepository:
    """
    Read access to the product catalog.

    - Catalog is held in memory, in insertion order.
    - No FastAPI, no business logic.
    """

    def __init__(self, products: Iterable[Product] = CATALOG):
        self._products: dict[uuid.UUID, Product] = {p.id: p for p in products}

    def get_by_id(self, product_id: uuid.UUID) -> Product | None:
        return self._products.get(product_id)

    def list(self, skip: int = 0, limit: int = 50) -> list[Product]:
        return list(self._products.values())[skip : skip + limit]
