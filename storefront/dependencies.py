# storefront/dependencies.py
import random
from dataclasses import dataclass

from fastapi import Request

from storefront.core.config import Settings, get_settings
from storefront.repositories.product_repo import ProductRepository
from storefront.services.cart_service import CartService
from storefront.services.cart_store import CartStore
from storefront.services.cart_view_model import CartViewModel
from storefront.services.checkout_service import CheckoutService
from storefront.services.installment_service import InstallmentService
from storefront.services.payment_capability import (
    PaymentCapability,
    SimulatedDeviceCapability,
)
from storefront.services.payment_service import (
    PaymentAuthorizer,
    PaymentService,
    SimulatedPaymentAuthorizer,
)
from storefront.services.receipt_service import ReceiptService
from storefront.services.shipping import MockShippingProvider, ShippingProvider
from storefront.services.tax_calculator import TaxCalculator


@dataclass
class Storefront:
    """
    Explicitly wired collaborators for one storefront instance.

    Built once per app by build_storefront() and reached from routes through
    the get_* dependencies below.
    """

    settings: Settings
    cart_store: CartStore
    view_model: CartViewModel
    installments: InstallmentService
    cart_service: CartService
    checkout_service: CheckoutService


def build_storefront(
    settings: Settings | None = None,
    *,
    product_repo: ProductRepository | None = None,
    capability: PaymentCapability | None = None,
    authorizer: PaymentAuthorizer | None = None,
    shipping_provider: ShippingProvider | None = None,
    rng: random.Random | None = None,
) -> Storefront:
    """
    Wire every collaborator from settings, letting callers swap any
    external boundary (wallet, payment sheet, shipping lookup) for a double.
    """
    settings = settings or get_settings()

    product_repo = product_repo or ProductRepository()
    capability = capability or SimulatedDeviceCapability(
        enabled=settings.DEVICE_CAN_MAKE_PAYMENTS,
        networks=settings.DEVICE_NETWORKS,
    )
    authorizer = authorizer or SimulatedPaymentAuthorizer(
        delay=settings.PAYMENT_AUTHORIZATION_DELAY
    )

    cart_store = CartStore()
    installments = InstallmentService(
        capability,
        min_amount=settings.INSTALLMENT_MIN_AMOUNT,
        max_amount=settings.INSTALLMENT_MAX_AMOUNT,
        installment_count=settings.INSTALLMENT_COUNT,
    )
    payment_service = PaymentService(
        authorizer,
        merchant_id=settings.MERCHANT_ID,
        merchant_display_name=settings.MERCHANT_DISPLAY_NAME,
        supported_networks=settings.SUPPORTED_NETWORKS,
        merchant_capabilities=settings.MERCHANT_CAPABILITIES,
        country_code=settings.COUNTRY_CODE,
        currency_code=settings.CURRENCY_CODE,
    )
    view_model = CartViewModel(
        cart_store,
        TaxCalculator(settings.TAX_RATE),
        payment_service,
        shipping_provider or MockShippingProvider(),
        capability=capability,
        confirmation_prefix=settings.CONFIRMATION_PREFIX,
        rng=rng,
    )

    return Storefront(
        settings=settings,
        cart_store=cart_store,
        view_model=view_model,
        installments=installments,
        cart_service=CartService(product_repo, view_model, installments),
        checkout_service=CheckoutService(
            view_model,
            installments,
            ReceiptService(settings=settings),
        ),
    )


def get_storefront(request: Request) -> Storefront:
    """
    FastAPI dependency returning the app's Storefront.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(storefront: Storefront = Depends(get_storefront)):
            ...
    """
    return request.app.state.storefront


def get_cart_service(request: Request) -> CartService:
    return get_storefront(request).cart_service


def get_checkout_service(request: Request) -> CheckoutService:
    return get_storefront(request).checkout_service
