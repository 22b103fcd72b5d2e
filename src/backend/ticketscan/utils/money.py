"""
Money parsing for ticket prices.

Handles the number shapes that show up on printed tickets:
- US: 12.50, 1,012.50
- European: 12,50 or 1.012,50
- Symbol before or after the amount: $12.50, 12.50€
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Optional
import re

_CENTS = Decimal('0.01')


class MoneyFormat(Enum):
    """Money format locale hints."""
    US = "US"  # 1,234.56
    EUROPEAN = "EUROPEAN"  # 1.234,56
    AUTO = "AUTO"  # Auto-detect based on separators


def parse_money(amount_str: Optional[str], format_hint: Optional[MoneyFormat] = None) -> Optional[Decimal]:
    """
    Parse a price string into a Decimal.

    Args:
        amount_str: String containing amount (e.g., "$12.50", "12,50 EUR")
        format_hint: Optional locale hint (US, EUROPEAN, AUTO)

    Returns:
        Decimal amount or None if parsing fails or the amount is not positive

    Examples:
        >>> parse_money("$12.50")
        Decimal('12.50')
        >>> parse_money("12,50 €")
        Decimal('12.50')
    """
    if not amount_str or not isinstance(amount_str, str):
        return None

    # Strip currency symbols and codes
    cleaned = re.sub(r'[$£€¥]\s*|[A-Za-z]{3}\s*', '', amount_str.strip())
    cleaned = cleaned.strip()
    if not cleaned or not re.fullmatch(r'[\d.,\s]+', cleaned):
        return None

    detected_format = format_hint or MoneyFormat.AUTO
    if detected_format == MoneyFormat.AUTO:
        detected_format = _detect_money_format(cleaned)

    try:
        if detected_format == MoneyFormat.EUROPEAN:
            result = Decimal(cleaned.replace('.', '').replace(' ', '').replace(',', '.'))
        else:
            result = Decimal(cleaned.replace(',', '').replace(' ', ''))
    except (InvalidOperation, ValueError):
        return None

    # A ticket never costs nothing or more than a few thousand
    if result <= 0 or result > 10_000:
        return None

    return result


def _detect_money_format(amount_str: str) -> MoneyFormat:
    """European when the string ends with ,XX or a dot precedes the last comma."""
    if re.search(r',\d{2}$', amount_str):
        return MoneyFormat.EUROPEAN

    if '.' in amount_str and ',' in amount_str:
        if amount_str.index('.') < amount_str.rindex(','):
            return MoneyFormat.EUROPEAN

    return MoneyFormat.US


def format_price(amount: Decimal) -> str:
    """
    Format a Decimal as a plain two-decimal price string.

    Examples:
        >>> format_price(Decimal('12.5'))
        '12.50'
    """
    return str(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))


def normalize_price(amount_str: Optional[str]) -> Optional[str]:
    """parse_money() followed by format_price(); None when unparseable."""
    amount = parse_money(amount_str)
    if amount is None:
        return None
    return format_price(amount)
