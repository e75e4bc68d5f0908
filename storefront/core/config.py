from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized storefront settings loaded from environment.

    Every field has a demo-friendly default, so no .env is required.

    Commonly overridden (.env):
      - TAX_RATE (e.g. 0.0725)
      - MERCHANT_ID
      - DEVICE_CAN_MAKE_PAYMENTS (simulated wallet availability)
      - SMTP_* (only needed to share receipts by email)
    """

    PROJECT_NAME: str = "Express Checkout Storefront"
    API_V1_STR: str = "/api/v1"

    # Los Angeles, CA sales tax (9.5%)
    TAX_RATE: Decimal = Decimal("0.095")

    # Payment request
    MERCHANT_ID: str = "merchant.com.yourcompany.swiftpaydemo"
    MERCHANT_DISPLAY_NAME: str = "SwiftPay Demo Store"
    COUNTRY_CODE: str = "US"
    CURRENCY_CODE: str = "USD"
    SUPPORTED_NETWORKS: list[str] = ["visa", "masterCard", "amex"]
    MERCHANT_CAPABILITIES: list[str] = ["3DS"]

    # Pay Later eligibility window (inclusive)
    INSTALLMENT_MIN_AMOUNT: Decimal = Decimal("50.00")
    INSTALLMENT_MAX_AMOUNT: Decimal = Decimal("1000.00")
    INSTALLMENT_COUNT: int = 4

    CONFIRMATION_PREFIX: str = "SWIFT"

    # Simulated device wallet
    DEVICE_CAN_MAKE_PAYMENTS: bool = True
    DEVICE_NETWORKS: list[str] = ["visa", "masterCard", "amex"]

    # Simulated payment sheet: seconds before auto-approval
    PAYMENT_AUTHORIZATION_DELAY: float = 1.0

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # SMTP (receipt sharing)
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_FROM_EMAIL: str | None = None
    SMTP_FROM_NAME: str = "Express Checkout"
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
