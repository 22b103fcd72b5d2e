"""
Theater chain extraction.

The chain lists are curated by hand, so every strategy works by lookup
rather than by guessing: a line must name a known chain on word
boundaries. Short boilerplate lines ("Thank you for visiting", "Admit
one") are skipped everywhere because they often mention a chain in
passing without being its name.
"""

from typing import Optional, Sequence

from ticketscan.services.extractors.base import FieldExtractor
from ticketscan.services.patterns import (
    ACRONYMS,
    CHAIN_BRANDS,
    CHAIN_DELIMITERS,
    CHAIN_LABELS,
    HEADER_FOOTER_CHAINS,
    HEADER_FOOTER_KEYWORDS,
    HEADER_FOOTER_MAX_LENGTH,
    KNOWN_CHAINS,
    contains_word,
)
from ticketscan.utils.text import normalize, scan_label, split_lines, title_case

_EDGE_LINES = 3


def is_header_footer(line: str) -> bool:
    """
    True for short boilerplate lines.

    Examples:
        >>> is_header_footer("Thank you for visiting")
        True
        >>> is_header_footer("AMC Empire 25 Theatre, 234 West 42nd Street")
        False
    """
    lowered = line.lower()
    return len(lowered) < HEADER_FOOTER_MAX_LENGTH and any(word in lowered for word in HEADER_FOOTER_KEYWORDS)


def find_chain_keyword(line: str, chains: Sequence[str] = KNOWN_CHAINS) -> Optional[str]:
    """First curated chain keyword named in `line`, as written in the list."""
    for chain in chains:
        if contains_word(line, chain):
            return chain
    return None


def display_chain(line: str, chains: Sequence[str] = KNOWN_CHAINS) -> Optional[str]:
    """Brand name when a chain keyword comes with its companion words, else the keyword."""
    for keyword, companions, brand in CHAIN_BRANDS:
        if contains_word(line, keyword) and any(contains_word(line, word) for word in companions):
            return brand

    chain = find_chain_keyword(line, chains)
    if chain is None:
        return None
    return title_case(chain, acronyms=ACRONYMS)


def chain_from_known_names(text: str) -> Optional[str]:
    for line in split_lines(text):
        if is_header_footer(line):
            continue
        chain = display_chain(line)
        if chain:
            return chain
    return None


def chain_from_label(text: str) -> Optional[str]:
    for value in scan_label(text, CHAIN_LABELS, CHAIN_DELIMITERS, fallback_length=30):
        cleaned = normalize(value)
        if cleaned and not is_header_footer(cleaned):
            return display_chain(cleaned) or title_case(cleaned, acronyms=ACRONYMS)
    return None


def chain_from_header_footer(text: str) -> Optional[str]:
    """Known chain in the first or last three lines of the ticket."""
    lines = split_lines(text)
    edges = lines[:_EDGE_LINES] + lines[-_EDGE_LINES:]
    for line in edges:
        if is_header_footer(line):
            continue
        chain = display_chain(line, HEADER_FOOTER_CHAINS)
        if chain:
            return chain
    return None


class TheaterChainExtractor(FieldExtractor):
    field_name = 'theater_chain'
    strategies = (chain_from_known_names, chain_from_label, chain_from_header_footer)


theater_chain_extractor = TheaterChainExtractor()
