"""
Seat extraction.

Two extractors share this module:

- SeatNumberExtractor fills TicketRecord.seat_number. It reads row/seat
  shapes first, then the seat label, then "row X ... seat Y" pairs, and
  never looks at a line that talks about money (a "$12.50" or "Total 2"
  line is never a seat).
- SeatExtractor is the looser general-purpose reader: label first, then
  row/seat pairs anywhere, then seat-looking tokens on seat/row/section
  lines. Nothing filters price lines.

Output shapes:
    "A-12"            row letter and zero-padded seat
    "12"              seat only
    "Row A, Seat 12"  row and seat that appear as separate words
"""

import re
from typing import Optional

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.patterns import (
    CURRENCY_SYMBOLS,
    LETTER_SEAT,
    PRICE_LINE_WORDS,
    ROW_SEAT_PATTERNS,
    SEAT_CONTEXT_WORDS,
    SEAT_DELIMITERS,
    SEAT_FORMAT_PATTERNS,
    SEAT_LABELS,
    SEAT_NUMBER_PATTERNS,
    SEAT_VALUE_STOPS,
)
from ticketscan.utils.text import cut_at, normalize, scan_label, split_lines

_LETTER_NUMBER = re.compile(r'([a-z])\s*-?\s*(\d{1,3})', re.IGNORECASE)
_NUMBER_LETTER = re.compile(r'(\d{1,3})\s*-?\s*([a-z])', re.IGNORECASE)
_NUMBER_ONLY = re.compile(r'\d{1,3}')

_MAX_SEAT_LENGTH = 10


def is_price_line(line: str) -> bool:
    return any(word in line for word in PRICE_LINE_WORDS) or any(symbol in line for symbol in CURRENCY_SYMBOLS)


def _without_price_lines(text: str) -> str:
    return '\n'.join(line for line in text.split('\n') if not is_price_line(line))


def normalize_seat_value(value: Optional[str]) -> Optional[str]:
    """
    Rewrite a labelled seat value in display form.

    Examples:
        >>> normalize_seat_value("a12")
        'A-12'
        >>> normalize_seat_value("7")
        '07'
        >>> normalize_seat_value("12b")
        '12-B'
    """
    cleaned = normalize(value)
    if not cleaned or len(cleaned) > _MAX_SEAT_LENGTH:
        return None

    match = _LETTER_NUMBER.fullmatch(cleaned)
    if match:
        return f"{match.group(1).upper()}-{match.group(2).zfill(2)}"

    if _NUMBER_ONLY.fullmatch(cleaned):
        return cleaned.zfill(2)

    match = _NUMBER_LETTER.fullmatch(cleaned)
    if match:
        return f"{match.group(1)}-{match.group(2).upper()}"

    # Free text (another label, several words) is not a seat
    if ' ' in cleaned or ':' in cleaned:
        return None
    return cleaned.upper()


def _seat_from_labels(text: str) -> Optional[str]:
    for value in scan_label(text, SEAT_LABELS, SEAT_DELIMITERS, fallback_length=10):
        seat = normalize_seat_value(cut_at(value, SEAT_VALUE_STOPS))
        if seat:
            return seat
    return None


def _row_and_seat(text: str) -> Optional[str]:
    for spec in ROW_SEAT_PATTERNS:
        match = spec.search(text)
        if match:
            return f"Row {match.group(1).upper()}, Seat {match.group(2).upper()}"
    return None


# ─── SeatNumber strategies ───────────────────────────────────────────────────

def row_letter_seat(text: str) -> Optional[str]:
    """ROW A12 / A-12 / ROW A SEAT 12 / SEAT 12 on a line that is not about money."""
    for line in split_lines(text):
        if is_price_line(line):
            continue
        for spec in SEAT_NUMBER_PATTERNS:
            match = spec.search(line)
            if not match:
                continue
            if len(match.groups()) == 2:
                row, seat = match.groups()
                return f"{row.upper()}-{seat.zfill(2)}"
            return match.group(1).zfill(2)
    return None


def labelled_seat_ignoring_prices(text: str) -> Optional[str]:
    return _seat_from_labels(_without_price_lines(text))


def row_and_seat_ignoring_prices(text: str) -> Optional[str]:
    return _row_and_seat(_without_price_lines(text))


class SeatNumberExtractor(FieldExtractor):
    field_name = 'seat_number'
    strategies = (
        row_letter_seat,
        labelled_seat_ignoring_prices,
        row_and_seat_ignoring_prices,
    )


# ─── Seat strategies ─────────────────────────────────────────────────────────

def labelled_seat(text: str) -> Optional[str]:
    return _seat_from_labels(text)


def row_seat_pattern(text: str) -> Optional[str]:
    """Row and seat pairs first, then a letter next to a number ('a: 12')."""
    seat = _row_and_seat(text)
    if seat:
        return seat

    match = LETTER_SEAT.search(text)
    if match:
        return f"{match.group(1).upper()}-{match.group(2)}"
    return None


def seat_on_keyword_line(text: str) -> Optional[str]:
    for line in split_lines(text):
        if not any(word in line for word in SEAT_CONTEXT_WORDS):
            continue
        for spec in SEAT_FORMAT_PATTERNS:
            match = spec.search(line)
            if not match:
                continue
            first, second = match.groups()
            if spec.name == 'letter_number':
                return f"{first.upper()}-{second}"
            return f"{first}-{second.upper()}"
    return None


class SeatExtractor(FieldExtractor):
    field_name = 'seat'
    strategies = (labelled_seat, row_seat_pattern, seat_on_keyword_line)


seat_number_extractor = SeatNumberExtractor()
seat_extractor = SeatExtractor()
