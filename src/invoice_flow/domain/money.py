"""Monetary rounding and formatting."""

import sys
from decimal import ROUND_HALF_UP, Decimal

GST_DIVISOR = 11
CENT = Decimal("0.01")
# One unit of float precision; repr() already gives the shortest exact decimal.
MONEY_EPSILON = Decimal(sys.float_info.epsilon)

CURRENCY_SYMBOLS = {"AUD": "$"}


def round_money(value: float) -> float:
    """Round to cents, half away from zero."""
    amount = Decimal(repr(float(value)))
    bias = MONEY_EPSILON if amount >= 0 else -MONEY_EPSILON
    return float((amount + bias).quantize(CENT, rounding=ROUND_HALF_UP))


def gst_component(line_total: float) -> float:
    """GST share of a GST-inclusive amount (one eleventh), rounded."""
    return round_money(line_total / GST_DIVISOR)


def format_currency(amount: float, currency: str = "AUD") -> str:
    """Format an amount the way en-AU displays currency."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
