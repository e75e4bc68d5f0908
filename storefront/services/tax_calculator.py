from decimal import Decimal
from typing import Protocol

from storefront.core.money import Amount, round_plain, to_decimal

# Los Angeles, CA sales tax rate (9.5%)
LOS_ANGELES_SALES_TAX_RATE = Decimal("0.095")


class TaxCalculating(Protocol):
    def calculate_tax(self, subtotal: Amount) -> Decimal: ...

    def calculate_total(self, subtotal: Amount) -> Decimal: ...


class TaxCalculator:
    """
    Sales tax for a single fixed rate.

    Rounding contract:
      - tax   = round2(subtotal * rate)
      - total = round2(subtotal + tax)

    The tax is rounded before it is added, so `total` can differ by a cent
    from round2(subtotal * (1 + rate)).
    """

    def __init__(self, tax_rate: Amount = LOS_ANGELES_SALES_TAX_RATE):
        self.tax_rate = to_decimal(tax_rate)

    def calculate_tax(self, subtotal: Amount) -> Decimal:
        return round_plain(to_decimal(subtotal) * self.tax_rate, 2)

    def calculate_total(self, subtotal: Amount) -> Decimal:
        tax = self.calculate_tax(subtotal)
        return round_plain(to_decimal(subtotal) + tax, 2)
