"""
Ticket price extraction.

Every candidate goes through the money parser, so the value is always a
plain two-decimal string ("12.50") regardless of how it was printed.
"""

import logging
from typing import Optional

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.patterns import (
    CURRENCY_AMOUNT,
    PRICE_CONTEXT_PATTERNS,
    PRICE_CONTEXT_WORDS,
    PRICE_DELIMITERS,
    PRICE_LABELS,
    PRICE_SHAPE,
)
from ticketscan.utils.money import normalize_price
from ticketscan.utils.text import scan_label, split_lines

logger = logging.getLogger(__name__)


def price_from_label(text: str) -> Optional[str]:
    for value in scan_label(text, PRICE_LABELS, PRICE_DELIMITERS, fallback_length=10):
        if not PRICE_SHAPE.compiled.match(value):
            logger.debug("Label value %r is not a price", value)
            continue
        price = normalize_price(value)
        if price:
            return price
    return None


def price_from_currency(text: str) -> Optional[str]:
    """Amount next to a currency symbol; amounts with cents win over whole numbers."""
    amounts = [match.group(0) for match in CURRENCY_AMOUNT.compiled.finditer(text)]
    with_cents = [amount for amount in amounts if amount.count('.') or amount.count(',')]

    for amount in with_cents + amounts:
        price = normalize_price(amount)
        if price:
            return price
    return None


def price_on_payment_lines(text: str) -> Optional[str]:
    for line in split_lines(text):
        if not any(word in line for word in PRICE_CONTEXT_WORDS):
            continue
        for spec in PRICE_CONTEXT_PATTERNS:
            match = spec.search(line)
            if match:
                price = normalize_price(match.group(0))
                if price:
                    return price
    return None


class PriceExtractor(FieldExtractor):
    field_name = 'price'
    strategies = (price_from_label, price_from_currency, price_on_payment_lines)


price_extractor = PriceExtractor()
