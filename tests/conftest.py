"""
Shared fixtures and test doubles for the storefront tests.

The doubles implement the collaborator protocols (payment capability,
payment sheet, shipping lookup) so tests never touch real devices or
networks.
"""

import asyncio
import random
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.models.payment import PaymentAuthorization, PaymentRequest
from storefront.models.product import Product
from storefront.models.receipt import ShippingDestination
from storefront.services.cart_store import CartStore
from storefront.services.cart_view_model import CartViewModel
from storefront.services.payment_service import (
    PaymentPresentationError,
    PaymentService,
)
from storefront.services.tax_calculator import TaxCalculator


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeCapability:
    """Wallet availability that tests can flip at will."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.calls = 0

    def can_make_payments(self) -> bool:
        self.calls += 1
        return self.enabled

    def can_make_payments_with_networks(self, networks=("visa", "masterCard", "amex")) -> bool:
        return self.enabled


class InstantAuthorizer:
    """Payment sheet that answers immediately with a fixed result."""

    def __init__(self, authorized: bool = True):
        self.authorized = authorized
        self.requests: list[PaymentRequest] = []

    async def authorize(self, request: PaymentRequest) -> PaymentAuthorization:
        self.requests.append(request)
        return PaymentAuthorization(authorized=self.authorized)


class ControlledAuthorizer:
    """
    Payment sheet that stays open until the test calls resolve().
    """

    def __init__(self):
        self.requests: list[PaymentRequest] = []
        self.presented = asyncio.Event()
        self._answer: asyncio.Future | None = None

    async def authorize(self, request: PaymentRequest) -> PaymentAuthorization:
        self.requests.append(request)
        self._answer = asyncio.get_running_loop().create_future()
        self.presented.set()
        authorized = await self._answer
        return PaymentAuthorization(authorized=authorized)

    async def wait_presented(self) -> None:
        await asyncio.wait_for(self.presented.wait(), timeout=1.0)

    def resolve(self, authorized: bool) -> None:
        assert self._answer is not None, "payment sheet was never presented"
        self._answer.set_result(authorized)


class UnpresentableAuthorizer:
    """Payment sheet that cannot be shown at all."""

    def __init__(self):
        self.requests: list[PaymentRequest] = []

    async def authorize(self, request: PaymentRequest) -> PaymentAuthorization:
        self.requests.append(request)
        raise PaymentPresentationError("no window to present from")


class FixedShippingProvider:
    def destination(self) -> ShippingDestination:
        return ShippingDestination(
            full_name="Jordan Lee",
            street_address="1 Market St",
            city="San Francisco",
            state="CA",
            zip_code="94105",
            country="United States",
            phone_number="(415) 555-0100",
        )


FIXED_NOW = datetime(2025, 3, 26, 16, 5, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def product_a():
    return Product(name="Nike Dunk Black", price=Decimal("94.00"), image_name="sneakers_black")


@pytest.fixture
def product_b():
    return Product(name="Nike Dunk Olive", price=Decimal("110.00"), image_name="sneakers_green")


@pytest.fixture
def cart_store():
    return CartStore()


@pytest.fixture
def capability():
    return FakeCapability(enabled=True)


def make_view_model(cart_store, authorizer, capability=None, tax_rate="0.095"):
    return CartViewModel(
        cart_store,
        TaxCalculator(Decimal(tax_rate)),
        PaymentService(authorizer),
        FixedShippingProvider(),
        capability=capability,
        rng=random.Random(1234),
        clock=lambda: FIXED_NOW,
    )
