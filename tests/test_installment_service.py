from decimal import Decimal

import pytest

from storefront.models.cart import CartLineItem
from storefront.services.installment_service import (
    PAY_LATER_CONTACT_FIELDS,
    InstallmentService,
)
from storefront.services.payment_capability import SimulatedDeviceCapability
from storefront.services.payment_service import PaymentService

from conftest import FakeCapability, InstantAuthorizer


@pytest.fixture
def service(capability):
    return InstallmentService(capability)


class TestEligibility:
    @pytest.mark.parametrize("amount", ["50.00", "50", "500.00", "1000.00"])
    def test_inside_window(self, service, amount):
        assert service.is_eligible(Decimal(amount)) is True

    @pytest.mark.parametrize("amount", ["49.99", "1000.01", "0", "-60"])
    def test_outside_window(self, service, amount):
        assert service.is_eligible(Decimal(amount)) is False

    def test_no_wallet_means_not_eligible(self):
        service = InstallmentService(FakeCapability(enabled=False))
        assert service.is_eligible(Decimal("100.00")) is False

    def test_capability_is_asked_every_time(self, service, capability):
        assert service.is_eligible(Decimal("100.00")) is True

        capability.enabled = False
        assert service.is_eligible(Decimal("100.00")) is False

        capability.enabled = True
        assert service.is_eligible(Decimal("100.00")) is True
        assert capability.calls == 3

    def test_custom_window(self, capability):
        service = InstallmentService(capability, min_amount="10", max_amount="20")
        assert service.is_eligible(Decimal("10")) is True
        assert service.is_eligible(Decimal("20.01")) is False

    def test_product_and_line_sources(self, service, product_a):
        assert service.is_eligible(product_a) is True
        line = CartLineItem(product=product_a, quantity=11)  # 1034.00
        assert service.is_eligible(line) is False

    def test_simulated_device(self):
        service = InstallmentService(SimulatedDeviceCapability(enabled=False))
        assert service.is_eligible(Decimal("100")) is False


class TestInstallments:
    def test_monthly_installment(self, service):
        assert service.monthly_installment(Decimal("110.00")) == Decimal("27.50")

    def test_monthly_installment_rounds(self, service):
        # 94.01 / 4 = 23.5025
        assert service.monthly_installment(Decimal("94.01")) == Decimal("23.50")
        # 94.02 / 4 = 23.505
        assert service.monthly_installment(Decimal("94.02")) == Decimal("23.51")

    def test_monthly_installment_for_line_uses_line_subtotal(self, service, product_a):
        line = CartLineItem(product=product_a, quantity=2)
        assert service.monthly_installment(line) == Decimal("47.00")


class TestMessages:
    def test_installment_message(self, service):
        assert (
            service.installment_message(Decimal("110.00"))
            == "Pay $27.50/mo. for 4 months with Apple Pay Later"
        )

    def test_no_message_when_ineligible(self, service):
        assert service.installment_message(Decimal("49.99")) is None
        assert service.listing_message(Decimal("49.99")) is None
        assert service.detail_message(Decimal("49.99")) is None
        assert service.cart_message(Decimal("49.99")) is None

    def test_listing_message(self, service, product_b):
        assert service.listing_message(product_b) == "From $27.50/mo. for 4 months"

    def test_detail_message_matches_full_message(self, service, product_b):
        assert service.detail_message(product_b) == service.installment_message(product_b)

    def test_cart_message(self, service):
        assert service.cart_message(Decimal("205.86")) == "Pay in 4 installments of $51.47"

    def test_short_message_always_present(self, service):
        assert service.short_message(Decimal("10.00")) == "Pay $2.50/mo."


class TestPayLaterRequest:
    def _request(self, subtotal, tax):
        return PaymentService(InstantAuthorizer()).create_payment_request(subtotal, tax)

    def test_eligible_amount_requires_contact_fields(self, service):
        request = self._request(Decimal("188.00"), Decimal("17.86"))

        configured = service.configure_for_pay_later(request, Decimal("205.86"))

        assert configured.required_billing_contact_fields == PAY_LATER_CONTACT_FIELDS
        assert configured.required_shipping_contact_fields == PAY_LATER_CONTACT_FIELDS
        # the input request is left alone
        assert request.required_billing_contact_fields == []

    def test_ineligible_amount_returns_request_unchanged(self, service):
        request = self._request(Decimal("20.00"), Decimal("1.90"))
        assert service.configure_for_pay_later(request, Decimal("21.90")) is request
