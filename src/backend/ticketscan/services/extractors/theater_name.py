"""
Theater (venue) name extraction.

Strategy order, most to least specific:
1. a curated known theater named anywhere in the text
2. a short line that says theater/cinema, with that word removed
3. the location / venue label
4. a chain keyword followed by one of its curated location words
5. a chain keyword in the header or footer lines, read to the end of line
"""

import re
from typing import Optional

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.extractors.theater_chain import find_chain_keyword
from ticketscan.services.patterns import (
    ACRONYMS,
    ALL_LABELS,
    CHAIN_LOCATIONS,
    HEADER_FOOTER_CHAINS,
    KNOWN_THEATERS,
    LOCATION_DELIMITERS,
    LOCATION_LABELS,
    VENUE_LINE_MAX_LENGTH,
    VENUE_NOISE_WORDS,
    VENUE_WORD,
    contains_word,
)
from ticketscan.utils.text import normalize, scan_label, split_lines, title_case

_LETTER = re.compile(r'[a-z]')
_EDGE_LINES = 3
_MIN_LETTERS = 3


def _display_name(value: str) -> Optional[str]:
    cleaned = normalize(value.split(',')[0])
    if len(_LETTER.findall(cleaned)) < _MIN_LETTERS:
        return None
    return title_case(cleaned, acronyms=ACRONYMS)


def name_from_known_theaters(text: str) -> Optional[str]:
    for theater in KNOWN_THEATERS:
        if contains_word(text, theater):
            return title_case(theater, acronyms=ACRONYMS)
    return None


def name_from_venue_lines(text: str) -> Optional[str]:
    for line in split_lines(text):
        if len(line) >= VENUE_LINE_MAX_LENGTH or not VENUE_WORD.search(line):
            continue
        if line.startswith(ALL_LABELS) or any(word in line for word in VENUE_NOISE_WORDS):
            continue
        name = _display_name(VENUE_WORD.sub(' ', line))
        if name:
            return name
    return None


def name_from_location_label(text: str) -> Optional[str]:
    for value in scan_label(text, LOCATION_LABELS, LOCATION_DELIMITERS, fallback_length=50):
        name = _display_name(value)
        if name:
            return name
    return None


def name_from_chain_context(text: str) -> Optional[str]:
    """Chain keyword plus one of its curated locations on the same line (amc + empire)."""
    for line in split_lines(text):
        chain = find_chain_keyword(line)
        if chain not in CHAIN_LOCATIONS:
            continue
        for location in CHAIN_LOCATIONS[chain]:
            if contains_word(line, location):
                return title_case(f"{chain} {location}", acronyms=ACRONYMS)
    return None


def name_from_header_footer(text: str) -> Optional[str]:
    lines = split_lines(text)
    for line in lines[:_EDGE_LINES] + lines[-_EDGE_LINES:]:
        chain = find_chain_keyword(line, HEADER_FOOTER_CHAINS)
        if chain is None:
            continue
        start = re.search(r'\b' + re.escape(chain) + r'\b', line).start()
        name = _display_name(line[start:])
        if name:
            return name
    return None


class TheaterNameExtractor(FieldExtractor):
    field_name = 'theater_name'
    strategies = (
        name_from_known_theaters,
        name_from_venue_lines,
        name_from_location_label,
        name_from_chain_context,
        name_from_header_footer,
    )


theater_name_extractor = TheaterNameExtractor()
