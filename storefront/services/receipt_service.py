# storefront/services/receipt_service.py
import html
import logging

from storefront.core.config import Settings, get_settings
from storefront.core.email_client import is_configured, send_email
from storefront.core.money import format_currency
from storefront.models.receipt import ReceiptRecord

logger = logging.getLogger(__name__)

THANK_YOU = "Thank you for your purchase!"
RULE_WIDTH = 64


class ReceiptRenderer:
    """
    Turns a ReceiptRecord into a shareable document (plain text or HTML).

    Reads receipt fields only; nothing here feeds back into checkout state.
    """

    def render_text(self, receipt: ReceiptRecord) -> str:
        rule = "-" * RULE_WIDTH
        lines = [
            "Receipt".center(RULE_WIDTH).rstrip(),
            "",
            f"Confirmation #: {receipt.confirmation_number}",
            f"Date: {receipt.formatted_date}",
            "",
            "Shipping Address:",
            *receipt.shipping.formatted_address.split("\n"),
            "",
            rule,
            f"{'Item':<34}{'Qty':>6}{'Price':>12}{'Total':>12}",
        ]

        for item in receipt.items:
            lines.append(
                f"{item.product.name[:34]:<34}"
                f"{item.quantity:>6}"
                f"{format_currency(item.product.price):>12}"
                f"{format_currency(item.subtotal):>12}"
            )

        lines += [
            rule,
            f"{'Subtotal:':>52}{format_currency(receipt.subtotal):>12}",
            f"{'Tax:':>52}{format_currency(receipt.tax):>12}",
            f"{'Shipping:':>52}{'Free':>12}",
            f"{'Total:':>52}{format_currency(receipt.total):>12}",
            "",
            THANK_YOU.center(RULE_WIDTH).rstrip(),
        ]
        return "\n".join(lines) + "\n"

    def render_html(self, receipt: ReceiptRecord) -> str:
        esc = html.escape
        address = "<br>".join(
            esc(line) for line in receipt.shipping.formatted_address.split("\n")
        )
        rows = "".join(
            "<tr>"
            f"<td>{esc(item.product.name)}</td>"
            f"<td>{item.quantity}</td>"
            f"<td>{format_currency(item.product.price)}</td>"
            f"<td>{format_currency(item.subtotal)}</td>"
            "</tr>"
            for item in receipt.items
        )
        return (
            "<h1>Receipt</h1>"
            f"<p><b>Confirmation #:</b> {esc(receipt.confirmation_number)}<br>"
            f"<b>Date:</b> {esc(receipt.formatted_date)}</p>"
            f"<h3>Shipping Address</h3><p>{address}</p>"
            "<table>"
            "<tr><th>Item</th><th>Qty</th><th>Price</th><th>Total</th></tr>"
            f"{rows}"
            "</table>"
            "<table>"
            f"<tr><td>Subtotal:</td><td>{format_currency(receipt.subtotal)}</td></tr>"
            f"<tr><td>Tax:</td><td>{format_currency(receipt.tax)}</td></tr>"
            "<tr><td>Shipping:</td><td>Free</td></tr>"
            f"<tr><td><b>Total:</b></td><td><b>{format_currency(receipt.total)}</b></td></tr>"
            "</table>"
            f"<p>{THANK_YOU}</p>"
        )


class ReceiptService:
    """
    Export and sharing of receipts.

    Responsibilities:
      - render receipts through a ReceiptRenderer
      - email them via the SMTP client
    """

    def __init__(
        self,
        renderer: ReceiptRenderer | None = None,
        settings: Settings | None = None,
    ):
        self.renderer = renderer or ReceiptRenderer()
        self.settings = settings or get_settings()

    def can_share(self) -> bool:
        return is_configured(self.settings)

    def subject_for(self, receipt: ReceiptRecord) -> str:
        return f"Your receipt {receipt.confirmation_number}"

    def share_by_email(self, receipt: ReceiptRecord, to_email: str) -> None:
        """
        Email the receipt (text + HTML) to `to_email`.

        Raises
        ------
        RuntimeError:
            If SMTP is not configured.
        smtplib.SMTPException:
            If sending fails.
        """
        send_email(
            to_email=to_email,
            subject=self.subject_for(receipt),
            text_body=self.renderer.render_text(receipt),
            html_body=self.renderer.render_html(receipt),
            settings=self.settings,
        )
        logger.info(f"Receipt {receipt.confirmation_number} shared with {to_email}")
