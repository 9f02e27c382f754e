"""
Formatting utilities for storefront display.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from dashboard.utils.constants import CURRENCY_SYMBOLS, ZERO_DECIMAL_CURRENCIES


def format_price(amount: Optional[str], currency: str) -> str:
    """
    Format a Squarespace money value for display.

    Args:
        amount: Decimal string as sent by Squarespace (e.g. "1234.5")
        currency: ISO currency code

    Returns:
        Formatted price (e.g. "$1,234.50"), or the raw amount if it is not a number
    """
    if amount is None:
        return "N/A"

    try:
        value = Decimal(amount)
    except (InvalidOperation, ValueError):
        return amount

    if not value.is_finite():
        return amount

    currency = (currency or "").upper()
    decimals = 0 if currency in ZERO_DECIMAL_CURRENCIES else 2
    number = f"{value:,.{decimals}f}"

    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return f"{currency} {number}".strip()

    if value < 0:
        return f"-{symbol}{number[1:]}"
    return f"{symbol}{number}"


def truncate_text(text: Optional[str], max_length: int = 120, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length including the suffix
        suffix: Appended when the text was cut

    Returns:
        Truncated text
    """
    if not text:
        return ""

    if len(text) <= max_length:
        return text

    return text[: max_length - len(suffix)].rstrip() + suffix
