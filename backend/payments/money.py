"""
Monetary precision helpers for order and cart pricing.

Every amount that reaches a client or the database passes through this
module so that rounding happens in exactly one place. Amounts are in
Brazilian reais.

Key Principles:
1. NEVER use float for money (floats are converted through str first)
2. Round half-up to centavos, once, at the end
3. Keep intermediate sums unrounded
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Union

# High precision for intermediate sums
getcontext().prec = 28

CURRENCY_SYMBOL = "R$"

CENTS = Decimal("0.01")

Amount = Union[Decimal, str, int, float]


def to_decimal(amount: Amount) -> Decimal:
    """
    Convert any numeric input to an unrounded Decimal.

    Strings using a comma as decimal separator ("12,50") are accepted since
    that is how amounts are typed in the storefront.

    Raises:
        ValueError: If the value is not numeric.
    """
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        raise ValueError(f"Not a monetary amount: {amount!r}")
    if isinstance(amount, float):
        amount = str(amount)
    if isinstance(amount, str):
        amount = amount.strip().replace(",", ".")
    try:
        value = Decimal(amount)
    except (InvalidOperation, TypeError):
        raise ValueError(f"Not a monetary amount: {amount!r}")
    if not value.is_finite():
        raise ValueError(f"Not a monetary amount: {amount!r}")
    return value


def quantize(amount: Amount) -> Decimal:
    """
    Round to centavos using half-up rounding.

    Examples:
        >>> quantize("10.125")
        Decimal('10.13')
        >>> quantize("10.124")
        Decimal('10.12')
    """
    return to_decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(amount: Amount) -> str:
    """
    Format an amount for display, Brazilian style.

    Examples:
        >>> format_money("1234.5")
        'R$ 1.234,50'
    """
    formatted = f"{quantize(amount):,.2f}"
    formatted = formatted.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{CURRENCY_SYMBOL} {formatted}"
