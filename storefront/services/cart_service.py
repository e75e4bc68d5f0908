# storefront/services/cart_service.py
import uuid

from fastapi import HTTPException, status

from storefront.core.money import format_currency
from storefront.models.cart import CartLineItem
from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import (
    CartItemCreate,
    CartItemUpdate,
    CartItemRead,
    CartSummary,
)
from storefront.schemas.product import ProductRead
from storefront.services.cart_view_model import CartViewModel
from storefront.services.installment_service import InstallmentService


def to_cart_item_read(item: CartLineItem) -> CartItemRead:
    return CartItemRead(
        id=item.id,
        product_id=item.product.id,
        product_name=item.product.name,
        image_name=item.product.image_name,
        quantity=item.quantity,
        unit_price=item.product.price,
        line_total=item.subtotal,
    )


class CartService:
    """
    HTTP-facing cart operations.

    Responsibilities:
      - resolve product ids against the catalog (404 if unknown)
      - forward mutations to the CartStore behind the view-model
      - refuse mutations (409) while a payment is in flight
      - shape CartSummary / ProductRead responses from view-model state
    """

    def __init__(
        self,
        product_repo: ProductRepository,
        view_model: CartViewModel,
        installments: InstallmentService,
    ):
        self.product_repo = product_repo
        self.view_model = view_model
        self.installments = installments

    # ---- catalog ----

    def _to_product_read(self, product: Product) -> ProductRead:
        return ProductRead(
            id=product.id,
            name=product.name,
            price=product.price,
            price_formatted=format_currency(product.price),
            description=product.description,
            image_name=product.image_name,
            listing_message=self.installments.listing_message(product),
            installment_message=self.installments.detail_message(product),
            in_cart_quantity=self.view_model.cart_store.quantity_of(product.id),
        )

    def list_products(self, skip: int = 0, limit: int = 50) -> list[ProductRead]:
        return [
            self._to_product_read(p)
            for p in self.product_repo.list(skip=skip, limit=limit)
        ]

    def get_product(self, product_id: uuid.UUID) -> ProductRead:
        product = self.product_repo.get_by_id(product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return self._to_product_read(product)

    # ---- cart ----

    def _ensure_editable(self) -> None:
        if self.view_model.is_processing_payment:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Cart is locked while a payment is in progress",
            )

    def get_cart_summary(self) -> CartSummary:
        """
        Return full cart summary:
          - list of CartItemRead (with line_total)
          - total_items
          - subtotal, tax, total (rounded to cents)
        """
        vm = self.view_model
        return CartSummary(
            items=[to_cart_item_read(it) for it in vm.cart_items],
            total_items=vm.total_items,
            subtotal=vm.subtotal,
            tax=vm.tax,
            total=vm.total,
            total_formatted=format_currency(vm.total),
            installment_message=self.installments.cart_message(vm.total),
            is_processing_payment=vm.is_processing_payment,
            is_payment_available=vm.is_payment_available,
        )

    def add_to_cart(self, payload: CartItemCreate) -> CartSummary:
        """
        Add one unit of a product; a product already in the cart has its
        quantity bumped instead of getting a second line.
        """
        self._ensure_editable()
        product = self.product_repo.get_by_id(payload.product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        self.view_model.cart_store.add(product)
        return self.get_cart_summary()

    def update_quantity(
        self,
        item_id: uuid.UUID,
        payload: CartItemUpdate,
    ) -> CartSummary:
        """
        Set the quantity of a cart line; quantity <= 0 removes it.
        """
        self._ensure_editable()
        if self.view_model.cart_store.get(item_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Item not in cart",
            )

        self.view_model.update_quantity(item_id, payload.quantity)
        return self.get_cart_summary()

    def remove_item(self, item_id: uuid.UUID) -> CartSummary:
        self._ensure_editable()
        if not self.view_model.remove_item(item_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Item not found in cart",
            )
        return self.get_cart_summary()

    def clear_cart(self) -> CartSummary:
        self._ensure_editable()
        self.view_model.cart_store.clear()
        return self.get_cart_summary()
