import os
import time
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.core import email_client
from storefront.core.config import Settings
from storefront.models.cart import CartLineItem
from storefront.models.product import Product
from storefront.models.receipt import ReceiptRecord
from storefront.services import receipt_service
from storefront.services.receipt_service import ReceiptRenderer, ReceiptService
from storefront.services.shipping import MockShippingProvider


@pytest.fixture
def receipt(product_a):
    fancy = Product(name="Dunk <Limited> & Co", price=Decimal("110.00"))
    return ReceiptRecord(
        items=(
            CartLineItem(product=product_a, quantity=2),
            CartLineItem(product=fancy, quantity=1),
        ),
        subtotal=Decimal("298.00"),
        tax=Decimal("28.31"),
        total=Decimal("326.31"),
        shipping=MockShippingProvider().destination(),
        confirmation_number="SWIFT-123456",
        purchase_date=datetime(2025, 3, 26, 16, 5),
    )


@pytest.fixture
def los_angeles_tz():
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "America/Los_Angeles"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()


@pytest.fixture
def smtp_settings():
    return Settings(
        SMTP_HOST="smtp.test",
        SMTP_USERNAME="receipts@test",
        SMTP_PASSWORD="secret",
    )


class TestReceiptRecord:
    def test_formatted_address(self, receipt):
        assert receipt.shipping.formatted_address.split("\n") == [
            "Alex Johnson",
            "123 Tech Boulevard",
            "Los Angeles, CA 90210",
            "United States",
            "(310) 555-1234",
        ]

    def test_formatted_date(self, receipt):
        assert receipt.formatted_date == "Mar 26, 2025 at 4:05 PM"

    def test_formatted_date_midnight(self, receipt):
        midnight = receipt.model_copy(update={"purchase_date": datetime(2025, 1, 2, 0, 30)})
        assert midnight.formatted_date == "Jan 2, 2025 at 12:30 AM"

    @pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
    def test_formatted_date_uses_local_time(self, receipt, los_angeles_tz):
        utc = receipt.model_copy(
            update={"purchase_date": datetime(2025, 3, 26, 16, 5, tzinfo=timezone.utc)}
        )
        assert utc.formatted_date == "Mar 26, 2025 at 9:05 AM"

    def test_total_items(self, receipt):
        assert receipt.total_items == 3

    def test_is_immutable(self, receipt):
        with pytest.raises(ValueError):
            receipt.total = Decimal("0")


class TestRenderer:
    def test_text(self, receipt):
        text = ReceiptRenderer().render_text(receipt)

        assert "Receipt" in text
        assert "Confirmation #: SWIFT-123456" in text
        assert "Date: Mar 26, 2025 at 4:05 PM" in text
        assert "Los Angeles, CA 90210" in text
        assert "Nike Dunk Black" in text
        assert "$188.00" in text
        assert "Subtotal:" in text and "$298.00" in text
        assert "Tax:" in text and "$28.31" in text
        assert "Free" in text
        assert "Total:" in text and "$326.31" in text
        assert text.rstrip().endswith("Thank you for your purchase!")

    def test_item_rows_in_cart_order(self, receipt):
        text = ReceiptRenderer().render_text(receipt)
        assert text.index("Nike Dunk Black") < text.index("Dunk <Limited>")

    def test_html_escapes_names(self, receipt):
        page = ReceiptRenderer().render_html(receipt)
        assert "Dunk &lt;Limited&gt; &amp; Co" in page
        assert "<b>$326.31</b>" in page


class TestSharing:
    def test_share_by_email_sends_text_and_html(self, receipt, smtp_settings, monkeypatch):
        sent = {}

        def fake_send_email(**kwargs):
            sent.update(kwargs)

        monkeypatch.setattr(receipt_service, "send_email", fake_send_email)

        ReceiptService(settings=smtp_settings).share_by_email(receipt, "buyer@example.com")

        assert sent["to_email"] == "buyer@example.com"
        assert sent["subject"] == "Your receipt SWIFT-123456"
        assert "Confirmation #: SWIFT-123456" in sent["text_body"]
        assert sent["html_body"].startswith("<h1>Receipt</h1>")
        assert sent["settings"] is smtp_settings

    def test_can_share_follows_smtp_settings(self, smtp_settings):
        assert ReceiptService(settings=smtp_settings).can_share() is True
        assert ReceiptService(settings=Settings(SMTP_HOST=None)).can_share() is False

    def test_send_email_requires_configuration(self):
        with pytest.raises(RuntimeError):
            email_client.send_email(
                to_email="buyer@example.com",
                subject="s",
                text_body="t",
                settings=Settings(SMTP_HOST=None, SMTP_USERNAME=None, SMTP_PASSWORD=None),
            )

    def test_send_email_uses_smtp_client(self, smtp_settings, monkeypatch):
        calls = []

        class FakeSMTP:
            def __init__(self, host, port, timeout):
                calls.append(("connect", host, port))

            def starttls(self):
                calls.append(("starttls",))

            def login(self, user, password):
                calls.append(("login", user))

            def send_message(self, msg):
                calls.append(("send", msg["To"], msg["Subject"]))

            def quit(self):
                calls.append(("quit",))

        monkeypatch.setattr(email_client.smtplib, "SMTP", FakeSMTP)

        email_client.send_email(
            to_email="buyer@example.com",
            subject="Your receipt",
            text_body="hello",
            settings=smtp_settings,
        )

        assert calls == [
            ("connect", "smtp.test", 587),
            ("starttls",),
            ("login", "receipts@test"),
            ("send", "buyer@example.com", "Your receipt"),
            ("quit",),
        ]
