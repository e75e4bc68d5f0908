# storefront/core/money.py
"""
Fixed-point money helpers.

All arithmetic in the checkout core runs on ``decimal.Decimal``. Floats are
only accepted at the edges and converted through ``str`` so that 0.1 stays
0.1 instead of 0.1000000000000000055511151231257827.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

ZERO = Decimal("0")

Amount = Decimal | int | float | str


def to_decimal(value: Amount) -> Decimal:
    """
    Coerce an amount-like value to Decimal without going through binary floats.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_plain(value: Amount, places: int) -> Decimal:
    """
    Round to `places` fractional digits, ties away from zero.

    Python's ROUND_HALF_UP is sign-symmetric:
        round_plain("12.345", 2)  -> Decimal("12.35")
        round_plain("-12.345", 2) -> Decimal("-12.35")
    """
    value = to_decimal(value)
    exponent = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus `places`
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def format_currency(amount: Amount, symbol: str = "$") -> str:
    """
    Display string with grouping and exactly two fraction digits.

    Presentation only; never feed the result back into a calculation.
    """
    value = round_plain(amount, 2)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
