from typing import Protocol

from storefront.models.receipt import ShippingDestination


class ShippingProvider(Protocol):
    def destination(self) -> ShippingDestination: ...


class MockShippingProvider:
    """
    Fixed demo address used for every order.
    """

    def destination(self) -> ShippingDestination:
        return ShippingDestination(
            full_name="Alex Johnson",
            street_address="123 Tech Boulevard",
            city="Los Angeles",
            state="CA",
            zip_code="90210",
            country="United States",
            phone_number="(310) 555-1234",
        )
