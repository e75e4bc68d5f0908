# storefront/services/cart_store.py
import logging
import uuid
from decimal import Decimal
from typing import Callable

from storefront.core.money import ZERO
from storefront.models.cart import CartLineItem
from storefront.models.product import Product

logger = logging.getLogger(__name__)

CartListener = Callable[[tuple[CartLineItem, ...]], None]


class CartStore:
    """
    Owner and only writer of the cart lines.

    Rules:
      - at most one line per product id; adding a product twice bumps the
        existing line's quantity and keeps its line id
      - a quantity is never stored as <= 0; such updates remove the line
      - every effective mutation notifies listeners synchronously, after
        the new state is in place, with a snapshot of the lines

    `clear()` always notifies, even on an empty cart, so dependents reset.

    Not thread-safe: mutate from a single owner (the request handler / event
    loop that owns this store).
    """

    def __init__(self) -> None:
        self._items: list[CartLineItem] = []
        self._listeners: list[CartListener] = []

    # ---- subscription ----

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Register `listener` and return a callable that unregisters it.

        The listener is not called on registration; read `items` for the
        current state.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.items
        for listener in list(self._listeners):
            listener(snapshot)

    # ---- queries ----

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(self._items)

    @property
    def subtotal(self) -> Decimal:
        return sum((item.subtotal for item in self._items), ZERO)

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get(self, line_item_id: uuid.UUID) -> CartLineItem | None:
        for item in self._items:
            if item.id == line_item_id:
                return item
        return None

    def contains(self, product_id: uuid.UUID) -> bool:
        return any(item.product.id == product_id for item in self._items)

    def quantity_of(self, product_id: uuid.UUID) -> int:
        for item in self._items:
            if item.product.id == product_id:
                return item.quantity
        return 0

    # ---- mutations ----

    def _index_of_line(self, line_item_id: uuid.UUID) -> int | None:
        for idx, item in enumerate(self._items):
            if item.id == line_item_id:
                return idx
        return None

    def add(self, product: Product) -> CartLineItem:
        """
        Add one unit of `product` and return the affected line.
        """
        for idx, item in enumerate(self._items):
            if item.product.id == product.id:
                line = CartLineItem(id=item.id, product=product, quantity=item.quantity + 1)
                self._items[idx] = line
                break
        else:
            line = CartLineItem(product=product)
            self._items.append(line)

        logger.debug("Cart add: %s -> qty %d", product.name, line.quantity)
        self._notify()
        return line

    def remove(self, line_item_id: uuid.UUID) -> bool:
        """
        Remove a line if present. Returns True when something was removed.
        """
        idx = self._index_of_line(line_item_id)
        if idx is None:
            return False

        removed = self._items.pop(idx)
        logger.debug("Cart remove: %s", removed.product.name)
        self._notify()
        return True

    def update_quantity(self, line_item_id: uuid.UUID, quantity: int) -> bool:
        """
        Set a line's quantity in place; quantity <= 0 removes the line.

        Returns True when the cart changed.
        """
        if quantity <= 0:
            return self.remove(line_item_id)

        idx = self._index_of_line(line_item_id)
        if idx is None:
            return False

        current = self._items[idx]
        if current.quantity == quantity:
            return False

        self._items[idx] = current.with_quantity(quantity)
        logger.debug("Cart update: %s -> qty %d", current.product.name, quantity)
        self._notify()
        return True

    def clear(self) -> None:
        self._items.clear()
        logger.debug("Cart cleared")
        self._notify()
