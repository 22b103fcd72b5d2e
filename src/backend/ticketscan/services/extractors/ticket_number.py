"""
Ticket / confirmation number extraction.

A ticket number must carry at least one digit, so the label words
themselves ("ticket", "barcode") can never come back as a value.
Values are upper-cased.
"""

from typing import Optional

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.patterns import (
    BARCODE_TOKEN,
    BARCODE_WINDOW,
    BARCODE_WORDS,
    TICKET_NUMBER_CONTEXT_WORDS,
    TICKET_NUMBER_DELIMITERS,
    TICKET_NUMBER_LABELS,
    TICKET_NUMBER_PATTERNS,
    TICKET_NUMBER_SHAPES,
)
from ticketscan.utils.text import scan_label, split_lines


def is_valid_ticket_number(value: Optional[str]) -> bool:
    """
    True when the whole value has a ticket-number shape.

    Examples:
        >>> is_valid_ticket_number("AB12CD34")
        True
        >>> is_valid_ticket_number("AB1")
        False
    """
    if not value:
        return False
    return any(spec.compiled.fullmatch(value) for spec in TICKET_NUMBER_SHAPES)


def number_from_label(text: str) -> Optional[str]:
    """First labelled value that passes the shape check; malformed values fall through."""
    values = scan_label(
        text,
        TICKET_NUMBER_LABELS,
        TICKET_NUMBER_DELIMITERS,
        fallback_length=20,
        skip_chars=': .',
        min_length=4,
    )
    for value in values:
        if is_valid_ticket_number(value):
            return value.upper()
    return None


def number_from_ticket_lines(text: str) -> Optional[str]:
    for line in split_lines(text):
        if not any(word in line for word in TICKET_NUMBER_CONTEXT_WORDS):
            continue
        for spec in TICKET_NUMBER_PATTERNS:
            match = spec.search(line)
            if match:
                return match.group(1).upper()
    return None


def number_near_barcode(text: str) -> Optional[str]:
    """Token within two lines of a barcode / QR code mention."""
    lines = split_lines(text, keep_blank=True)
    anchors = [index for index, line in enumerate(lines) if any(word in line for word in BARCODE_WORDS)]

    for anchor in anchors:
        start = max(0, anchor - BARCODE_WINDOW)
        end = min(len(lines), anchor + BARCODE_WINDOW + 1)
        for line in lines[start:end]:
            match = BARCODE_TOKEN.search(line)
            if match:
                return match.group(1).upper()
    return None


class TicketNumberExtractor(FieldExtractor):
    field_name = 'ticket_number'
    strategies = (number_from_label, number_from_ticket_lines, number_near_barcode)


ticket_number_extractor = TicketNumberExtractor()
