from decimal import Decimal
from enum import Enum

from sqlmodel import SQLModel, Field


class PaymentOutcome(str, Enum):
    """
    Result of one checkout attempt.

    pending -> succeeded | failed, exactly once per attempt.
    """

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PaymentSummaryItem(SQLModel):
    """
    One row of the payment sheet summary.
    """

    label: str
    amount: Decimal


class PaymentRequest(SQLModel):
    """
    Everything the payment sheet needs to ask the user for authorization.

    The last summary item is the grand total, labelled with the merchant
    display name.
    """

    merchant_id: str
    supported_networks: list[str]
    merchant_capabilities: list[str]
    country_code: str
    currency_code: str
    summary_items: list[PaymentSummaryItem]

    required_billing_contact_fields: list[str] = Field(default_factory=list)
    required_shipping_contact_fields: list[str] = Field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return self.summary_items[-1].amount


class PaymentAuthorization(SQLModel):
    """
    The single signal a payment sheet sends back.
    """

    authorized: bool
