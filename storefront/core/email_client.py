"""
Email client utilities for the storefront.

Responsibilities:
  - Read SMTP configuration from Settings (SMTP_* env vars / .env).
  - Provide a single send_email(...) function for services to use.
  - Support both TLS (STARTTLS) and SSL connections.

Typical .env configuration:

    SMTP_HOST=smtp.gmail.com
    SMTP_PORT=465
    SMTP_USERNAME=receipts@example.com
    SMTP_PASSWORD=<app password>
    SMTP_FROM_EMAIL=receipts@example.com
    SMTP_FROM_NAME=Express Checkout
    SMTP_USE_TLS=false
    SMTP_USE_SSL=true
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from storefront.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def is_configured(settings: Settings | None = None) -> bool:
    settings = settings or get_settings()
    return bool(settings.SMTP_HOST and settings.SMTP_USERNAME and settings.SMTP_PASSWORD)


def _create_smtp_client(settings: Settings) -> smtplib.SMTP:
    """
    Create an SMTP client configured for TLS or SSL.

    Priority:
      - SMTP_USE_SSL -> smtplib.SMTP_SSL (e.g. port 465)
      - else smtplib.SMTP, upgraded with STARTTLS if SMTP_USE_TLS
    """
    if not settings.SMTP_HOST:
        raise RuntimeError("SMTP_HOST is not configured. Please set it in .env.")

    if settings.SMTP_USE_SSL:
        server: smtplib.SMTP = smtplib.SMTP_SSL(
            settings.SMTP_HOST, settings.SMTP_PORT, timeout=30
        )
    else:
        server = smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30)
        if settings.SMTP_USE_TLS:
            server.starttls()

    return server


def send_email(
    to_email: str,
    subject: str,
    text_body: str,
    html_body: str | None = None,
    settings: Settings | None = None,
) -> None:
    """
    Send an email to a single recipient.

    Parameters
    ----------
    to_email:
        Recipient email address.
    subject:
        Email subject line.
    text_body:
        Plain-text body, also the fallback for clients without HTML.
    html_body:
        Optional HTML alternative part.
    settings:
        Settings to read SMTP_* from; defaults to get_settings().

    Raises
    ------
    RuntimeError:
        If required SMTP configuration is missing.
    smtplib.SMTPException:
        If the underlying SMTP connection or send fails.
    """
    settings = settings or get_settings()
    if not is_configured(settings):
        raise RuntimeError(
            "SMTP is not configured correctly. "
            "Please set SMTP_HOST, SMTP_USERNAME, and SMTP_PASSWORD in .env."
        )

    msg = EmailMessage()

    from_email = settings.SMTP_FROM_EMAIL or settings.SMTP_USERNAME
    msg["From"] = f"{settings.SMTP_FROM_NAME} <{from_email}>"
    msg["To"] = to_email
    msg["Subject"] = subject

    msg.set_content(text_body)
    if html_body:
        msg.add_alternative(html_body, subtype="html")

    server = _create_smtp_client(settings)
    try:
        server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)  # type: ignore[arg-type]
        server.send_message(msg)
        logger.info(f"Email sent to {to_email}: {subject}")
    finally:
        try:
            server.quit()
        except smtplib.SMTPException as e:
            logger.debug(f"SMTP quit failed: {e}")
